"""Git operations against the publish repository.

A publish batch ends with exactly one commit: check the working tree, stage
everything, commit with the rendered message. Mirrored files are left in
place whatever the outcome.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING

from notepress.config.settings import TIMESTAMP_TOKEN
from notepress.utils.exceptions import CommitError

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 60
_NOTHING_TO_COMMIT_MARKERS = ("nothing to commit", "working tree clean")


class CommitOutcome(str, Enum):
    """Result of the commit step of a publish run."""

    COMMITTED = "committed"
    NO_CHANGES = "no_changes"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class CommitResult:
    outcome: CommitOutcome
    message: str | None = None
    sha: str | None = None


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as a sortable UTC ISO 8601 string, e.g. ``2025-01-31T09:15:00.000Z``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def render_commit_message(template: str, moment: datetime) -> str:
    """Replace the first ``{timestamp}`` token in ``template``."""
    return template.replace(TIMESTAMP_TOKEN, format_timestamp(moment), 1)


def get_git_commit_sha(cwd: Path | None = None) -> str | None:
    """Get the current commit SHA of the repository at ``cwd``.

    Returns:
        Git commit SHA (e.g., "a1b2c3d4..."), or None if not in git repo

    """
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],  # noqa: S607
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
            timeout=2,
        )
        return result.stdout.strip()
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError):
        return None


def is_git_work_tree(path: Path) -> bool:
    """Return True when ``path`` is inside a git working tree."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--is-inside-work-tree"],  # noqa: S607
            cwd=path,
            capture_output=True,
            text=True,
            check=True,
            timeout=2,
        )
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError, NotADirectoryError):
        return False
    return result.stdout.strip() == "true"


class Committer:
    """Stages and commits every change under one repository root."""

    def __init__(
        self,
        root: Path,
        message_template: str,
        *,
        clock: Callable[[], datetime] | None = None,
        timeout: float = GIT_TIMEOUT_SECONDS,
    ) -> None:
        self.root = root
        self.message_template = message_template
        self.clock = clock or (lambda: datetime.now(UTC))
        self.timeout = timeout

    def _git(self, *args: str) -> subprocess.CompletedProcess[str]:
        command = ["git", *args]
        logger.debug("Running %s in %s", " ".join(command), self.root)
        try:
            return subprocess.run(  # noqa: S603
                command,
                cwd=self.root,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise CommitError(command, None, f"timed out after {self.timeout}s") from exc
        except OSError as exc:
            raise CommitError(command, None, str(exc)) from exc

    def has_changes(self) -> bool:
        """Return True if the working tree has tracked or untracked changes.

        Raises:
            CommitError: If ``git status`` cannot run (e.g. not a repository).

        """
        try:
            result = self._git("status", "--porcelain")
        except subprocess.CalledProcessError as exc:
            raise CommitError(exc.cmd, exc.returncode, f"{exc.stdout or ''}{exc.stderr or ''}") from exc
        return bool(result.stdout.strip())

    def commit(self) -> CommitResult:
        """Stage all changes and create a single commit.

        Returns NO_CHANGES without writing anything when the tree is clean, or
        when git reports there was nothing to commit after staging.

        Raises:
            CommitError: For any other git failure.

        """
        if not self.has_changes():
            logger.info("No changes to commit in %s", self.root)
            return CommitResult(CommitOutcome.NO_CHANGES)

        message = render_commit_message(self.message_template, self.clock())
        try:
            self._git("add", "--all")
            self._git("commit", "-m", message)
        except subprocess.CalledProcessError as exc:
            output = f"{exc.stdout or ''}{exc.stderr or ''}"
            if any(marker in output for marker in _NOTHING_TO_COMMIT_MARKERS):
                logger.info("Nothing to commit in %s", self.root)
                return CommitResult(CommitOutcome.NO_CHANGES)
            raise CommitError(exc.cmd, exc.returncode, output) from exc

        sha = get_git_commit_sha(self.root)
        logger.info("Committed %s: %s", sha[:7] if sha else "changes", message)
        return CommitResult(CommitOutcome.COMMITTED, message=message, sha=sha)
