"""Copy published documents and their assets into the target repository.

Layout under the repository root::

    <root>/<publish_folder>/<document filename>
    <root>/<assets_folder>/<asset filename>

Text and bytes are copied verbatim and existing files are overwritten.
Nothing in the target tree is ever deleted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from notepress.assets.resolver import AssetLookupFailure, AssetResolver
from notepress.config.exceptions import ConfigurationError

if TYPE_CHECKING:
    from notepress.config.settings import PublishSettings
    from notepress.data_primitives.document import Document, ResolvedAsset
    from notepress.data_primitives.protocols import CorpusReader

logger = logging.getLogger(__name__)


def _sub_directory(root: Path, field_name: str, value: str) -> Path:
    """Join ``value`` onto ``root``, refusing anything that leaves ``root``."""
    if Path(value).is_absolute():
        raise ConfigurationError(field_name, value, "must be relative to the repository path")

    candidate = (root / value).resolve()
    try:
        candidate.relative_to(root.resolve())
    except ValueError as err:
        raise ConfigurationError(field_name, value, "escapes the repository path") from err
    return candidate


@dataclass(frozen=True, slots=True)
class TargetLayout:
    """Validated target locations for one publish run."""

    root: Path
    documents_dir: Path
    assets_dir: Path

    @classmethod
    def from_settings(cls, settings: PublishSettings) -> TargetLayout:
        """Validate ``settings`` and compute the target directories.

        Raises:
            ConfigurationError: If the repository path is empty or relative, or a
                sub-folder is absolute or points outside the repository.

        """
        if not settings.repo_path:
            raise ConfigurationError("repo_path", settings.repo_path, "is not configured")

        root = Path(settings.repo_path)
        if not root.is_absolute():
            raise ConfigurationError("repo_path", settings.repo_path, "must be an absolute path")

        return cls(
            root=root,
            documents_dir=_sub_directory(root, "publish_folder", settings.publish_folder),
            assets_dir=_sub_directory(root, "assets_folder", settings.assets_folder),
        )


@dataclass(frozen=True, slots=True)
class WriteFailure:
    """A document or asset that could not be copied."""

    source: str
    target: Path
    error: str

    def __str__(self) -> str:
        return f"Failed to write {self.source} -> {self.target}: {self.error}"


@dataclass(slots=True)
class MirrorReport:
    """Outcome of mirroring one document and its assets."""

    document: str
    document_written: bool = False
    assets_written: list[Path] = field(default_factory=list)
    lookup_failures: list[AssetLookupFailure] = field(default_factory=list)
    write_failures: list[WriteFailure] = field(default_factory=list)


class Mirror:
    """Writes documents and their resolved assets into a :class:`TargetLayout`."""

    def __init__(self, corpus: CorpusReader, layout: TargetLayout, resolver: AssetResolver | None = None) -> None:
        self.corpus = corpus
        self.layout = layout
        self.resolver = resolver or AssetResolver(corpus)

    def mirror_document(self, document: Document) -> MirrorReport:
        """Copy ``document`` and every asset it references.

        Failures are recorded on the report; one failed file never stops the
        others from being written.
        """
        report = MirrorReport(document=document.path)

        target = self.layout.documents_dir / document.name
        try:
            self._write(target, document.content.encode("utf-8"))
        except OSError as exc:
            logger.error("Failed to write %s to %s: %s", document.path, target, exc)  # noqa: TRY400
            report.write_failures.append(WriteFailure(document.path, target, str(exc)))
        else:
            report.document_written = True
            logger.debug("Wrote %s", target)

        resolved, report.lookup_failures = self.resolver.resolve_all(document.path, document.content)
        for asset in resolved:
            self._copy_asset(asset, report)

        return report

    def _copy_asset(self, asset: ResolvedAsset, report: MirrorReport) -> None:
        target = self.layout.assets_dir / asset.filename
        try:
            self._write(target, self.corpus.read_bytes(asset.source))
        except OSError as exc:
            logger.error("Failed to copy asset %s: %s", asset.reference.name, exc)  # noqa: TRY400
            report.write_failures.append(WriteFailure(asset.source.path, target, str(exc)))
        else:
            report.assets_written.append(target)
            logger.debug("Copied asset %s -> %s", asset.source.path, target)

    @staticmethod
    def _write(target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
