"""Find the corpus files that a document embeds.

Two reference syntaxes are recognised, in order of appearance and with
duplicates kept:

- wiki embeds: ``![[diagram.png]]``
- markdown images: ``![alt text](img/diagram.png)``

Each reference is resolved against the corpus, first match wins:

1. the file stored at exactly that path
2. any file whose path equals the reference
3. any file whose filename equals the reference or its last path segment

Basename ties go to the first candidate in corpus enumeration order.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from notepress.data_primitives.document import AssetReference, ReferenceKind, ResolvedAsset

if TYPE_CHECKING:
    from collections.abc import Sequence

    from notepress.data_primitives.document import CorpusFile
    from notepress.data_primitives.protocols import CorpusReader

logger = logging.getLogger(__name__)

_ASSET_REFERENCE_RE = re.compile(r"!\[\[([^\]]+)\]\]|!\[.*?\]\(([^)]+)\)")


@dataclass(frozen=True, slots=True)
class AssetLookupFailure:
    """A reference that matched no corpus file."""

    document: str
    reference: str

    def __str__(self) -> str:
        return f"Asset not found: {self.reference} (referenced from {self.document})"


def extract_asset_references(content: str) -> list[AssetReference]:
    """Return every asset reference in ``content`` in order of appearance."""
    references: list[AssetReference] = []
    for match in _ASSET_REFERENCE_RE.finditer(content):
        embed, image = match.group(1), match.group(2)
        if embed:
            references.append(AssetReference(embed, ReferenceKind.EMBED, match.start()))
        elif image:
            references.append(AssetReference(image, ReferenceKind.IMAGE, match.start()))
    return references


class AssetResolver:
    """Resolve asset references against one snapshot of the corpus.

    The file listing is taken on first use and reused for the lifetime of the
    resolver, so create one resolver per publish run.
    """

    def __init__(self, corpus: CorpusReader) -> None:
        self.corpus = corpus
        self._files: Sequence[CorpusFile] | None = None

    @property
    def files(self) -> Sequence[CorpusFile]:
        if self._files is None:
            self._files = tuple(self.corpus.list_files())
        return self._files

    def resolve(self, name: str) -> CorpusFile | None:
        """Return the corpus file ``name`` refers to, or None."""
        direct = self.corpus.get_file(name)
        if direct is not None:
            return direct

        for file in self.files:
            if file.path == name:
                return file

        last_segment = name.rsplit("/", 1)[-1]
        for file in self.files:
            if file.name in (name, last_segment):
                return file

        return None

    def resolve_all(
        self, document_path: str, content: str
    ) -> tuple[list[ResolvedAsset], list[AssetLookupFailure]]:
        """Resolve every reference in a document's text.

        Unresolved references are logged and reported, never raised.
        """
        resolved: list[ResolvedAsset] = []
        failures: list[AssetLookupFailure] = []

        for reference in extract_asset_references(content):
            source = self.resolve(reference.name)
            if source is None:
                logger.warning("Asset not found: %s (in %s)", reference.name, document_path)
                failures.append(AssetLookupFailure(document_path, reference.name))
                continue
            logger.debug("Resolved %s -> %s", reference.name, source.path)
            resolved.append(ResolvedAsset(reference=reference, source=source))

        return resolved, failures
