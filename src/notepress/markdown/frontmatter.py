"""Frontmatter helpers: publish flag detection and insertion.

The publish flag is detected lexically. A document is publishable when it
starts with a ``---`` delimited block whose body contains ``publish: true``
or ``publish:true`` verbatim. The body is not parsed as YAML for this
decision, so ``summary: how to publish: true story`` also counts.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

import frontmatter
import yaml

logger = logging.getLogger(__name__)

PUBLISH_FLAG_LINE = "publish: true"
PUBLISH_FLAG_LITERALS = ("publish: true", "publish:true")

# Opening delimiter on the first line, body starting on the next line, and a
# closing line of exactly three hyphens.
_FRONTMATTER_RE = re.compile(r"\A---(\r?\n)(.*?)\r?\n---(?=\r?\n|\Z)", re.DOTALL)


@dataclass(frozen=True, slots=True)
class FrontmatterBlock:
    """Location of the leading frontmatter block inside a document."""

    body: str
    body_start: int
    body_end: int
    newline: str


def find_frontmatter(content: str) -> FrontmatterBlock | None:
    """Return the leading frontmatter block of ``content``, if present."""
    match = _FRONTMATTER_RE.match(content)
    if match is None:
        return None
    return FrontmatterBlock(
        body=match.group(2),
        body_start=match.start(2),
        body_end=match.end(2),
        newline=match.group(1),
    )


def is_publishable(content: str) -> bool:
    """Return True when the frontmatter body carries a publish flag literal.

    Missing frontmatter and a missing flag both mean "not publishable".
    """
    block = find_frontmatter(content)
    if block is None:
        return False
    return any(literal in block.body for literal in PUBLISH_FLAG_LITERALS)


def add_publish_flag(content: str) -> str:
    """Return ``content`` with a ``publish: true`` line added to its frontmatter.

    An existing block gets the line appended right before its closing
    delimiter. Without a block, a minimal one is prepended followed by a
    blank line.
    """
    block = find_frontmatter(content)
    if block is None:
        return f"---\n{PUBLISH_FLAG_LINE}\n---\n\n{content}"

    return f"{content[: block.body_end]}{block.newline}{PUBLISH_FLAG_LINE}{content[block.body_end :]}"


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML frontmatter using python-frontmatter.

    Used for display only (titles in listings); publishing decisions go
    through :func:`is_publishable`.

    Returns:
        Tuple of (metadata dict, body string). If parsing fails or metadata is not a
        mapping, metadata will be an empty dict and the original content is returned.

    """
    try:
        parsed = frontmatter.loads(content)
    except (yaml.YAMLError, ValueError) as exc:
        logger.warning("Failed to parse frontmatter content: %s", exc)
        return {}, content

    raw_metadata = parsed.metadata or {}
    if not isinstance(raw_metadata, dict):
        logger.warning("Frontmatter metadata is not a mapping: %s", type(raw_metadata).__name__)
        metadata: dict[str, Any] = {}
    else:
        metadata = dict(raw_metadata)

    body = parsed.content if isinstance(parsed.content, str) else str(parsed.content)
    return metadata, body
