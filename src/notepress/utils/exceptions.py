"""Custom exceptions for notepress utilities."""

from __future__ import annotations

from collections.abc import Sequence

from notepress.exceptions import NotepressError


class CommitError(NotepressError):
    """Raised when git fails for any reason other than "nothing to commit"."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int | None = None,
        output: str = "",
    ) -> None:
        self.command = list(command)
        self.returncode = returncode
        self.output = output.strip()
        detail = f": {self.output}" if self.output else ""
        super().__init__(f"`{' '.join(self.command)}` failed (exit code {returncode}){detail}")
