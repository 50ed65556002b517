"""Contracts for the host environment the pipeline runs inside.

The pipeline never talks to a vault, a UI or a prompt directly. It receives
objects satisfying these protocols:

- CorpusReader: enumerate and read documents and assets
- CorpusWriter: overwrite a document's text (flag mutation only)
- Notifier: fire-and-forget user messages
- ConfirmationProvider: yes/no decisions

``notepress.input_adapters.vault.VaultCorpus`` implements both corpus
protocols over a directory; the CLI supplies the notifier and the prompt.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from notepress.data_primitives.document import CorpusFile


class CorpusReader(Protocol):
    """Read access to the source corpus.

    Enumeration order must be stable for an unchanged corpus; asset
    resolution breaks ties by it.
    """

    def list_documents(self) -> Sequence[CorpusFile]:
        """Return every markdown document in the corpus."""

    def list_files(self) -> Sequence[CorpusFile]:
        """Return every file in the corpus, documents included."""

    def get_file(self, path: str) -> CorpusFile | None:
        """Return the file stored at exactly ``path``, if any."""

    def read_text(self, file: CorpusFile) -> str:
        """Return a document's text."""

    def read_bytes(self, file: CorpusFile) -> bytes:
        """Return a file's raw bytes."""


class CorpusWriter(Protocol):
    """Write access to the source corpus."""

    def write_text(self, file: CorpusFile, content: str) -> None:
        """Overwrite a document's text."""


class Notifier(Protocol):
    """Displays a message to the user without waiting for a response."""

    def __call__(self, message: str) -> None: ...


class ConfirmationProvider(Protocol):
    """Asks the user a yes/no question. Cancelling counts as ``False``."""

    def __call__(self, prompt: str) -> bool: ...
