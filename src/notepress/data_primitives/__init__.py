"""Core data types and host contracts."""

from notepress.data_primitives.document import (
    AssetReference,
    CorpusFile,
    Document,
    ReferenceKind,
    ResolvedAsset,
)
from notepress.data_primitives.protocols import (
    ConfirmationProvider,
    CorpusReader,
    CorpusWriter,
    Notifier,
)

__all__ = [
    "AssetReference",
    "ConfirmationProvider",
    "CorpusFile",
    "CorpusReader",
    "CorpusWriter",
    "Document",
    "Notifier",
    "ReferenceKind",
    "ResolvedAsset",
]
