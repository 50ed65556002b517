"""Filesystem-backed corpus: a vault directory of markdown notes and attachments."""

from __future__ import annotations

import logging
from pathlib import Path

from notepress.data_primitives.document import CorpusFile

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


class VaultCorpus:
    """Corpus over every non-hidden file below ``root``.

    Files are identified by their POSIX path relative to ``root`` and
    enumerated in sorted path order, which keeps asset resolution
    deterministic across runs.
    """

    def __init__(self, root: Path) -> None:
        self.root = root.expanduser().resolve()

    def _is_hidden(self, path: Path) -> bool:
        return any(part.startswith(".") for part in path.relative_to(self.root).parts)

    def list_files(self) -> list[CorpusFile]:
        files = [
            CorpusFile(path.relative_to(self.root).as_posix())
            for path in self.root.rglob("*")
            if path.is_file() and not self._is_hidden(path)
        ]
        return sorted(files, key=lambda file: file.path)

    def list_documents(self) -> list[CorpusFile]:
        return [file for file in self.list_files() if file.path.lower().endswith(MARKDOWN_SUFFIX)]

    def get_file(self, path: str) -> CorpusFile | None:
        candidate = (self.root / path).resolve()
        try:
            relative = candidate.relative_to(self.root)
        except ValueError:
            return None
        if not candidate.is_file() or self._is_hidden(candidate):
            return None
        # Only exact spellings count; "./a.png" or "x/../a.png" are not corpus paths.
        if relative.as_posix() != path:
            return None
        return CorpusFile(path)

    def resolve_document(self, document_id: str | Path) -> CorpusFile | None:
        """Map a vault-relative or absolute path to a document in this vault."""
        path = Path(document_id).expanduser()
        if not path.is_absolute():
            path = self.root / path
        try:
            relative = path.resolve().relative_to(self.root).as_posix()
        except ValueError:
            return None
        file = self.get_file(relative)
        if file is None or not file.path.lower().endswith(MARKDOWN_SUFFIX):
            return None
        return file

    def path_of(self, file: CorpusFile) -> Path:
        return self.root / file.path

    def read_text(self, file: CorpusFile) -> str:
        with self.path_of(file).open(encoding="utf-8", newline="") as handle:
            return handle.read()

    def read_bytes(self, file: CorpusFile) -> bytes:
        return self.path_of(file).read_bytes()

    def write_text(self, file: CorpusFile, content: str) -> None:
        self.path_of(file).write_bytes(content.encode("utf-8"))
        logger.debug("Updated %s", file.path)
