"""Value types shared by the publish pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath


@dataclass(frozen=True, slots=True)
class CorpusFile:
    """A file in the corpus, identified by its vault-relative POSIX path."""

    path: str

    @property
    def name(self) -> str:
        """Final path segment, e.g. ``diagram.png`` for ``img/diagram.png``."""
        return PurePosixPath(self.path).name


@dataclass(frozen=True, slots=True)
class Document:
    """A markdown document read from the corpus.

    ``content`` is the raw text at read time. Publish eligibility is derived
    from it on demand and never cached.
    """

    file: CorpusFile
    content: str

    @property
    def path(self) -> str:
        return self.file.path

    @property
    def name(self) -> str:
        return self.file.name


class ReferenceKind(str, Enum):
    """Syntax an asset reference was written in."""

    EMBED = "embed"  # ![[name]]
    IMAGE = "image"  # ![alt](target)


@dataclass(frozen=True, slots=True)
class AssetReference:
    """A literal asset reference found in a document's text."""

    name: str
    kind: ReferenceKind
    position: int = 0


@dataclass(frozen=True, slots=True)
class ResolvedAsset:
    """An asset reference paired with the corpus file it resolved to."""

    reference: AssetReference
    source: CorpusFile

    @property
    def filename(self) -> str:
        return self.source.name
