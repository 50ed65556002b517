"""Utility helpers."""

from notepress.utils.exceptions import CommitError
from notepress.utils.git import (
    CommitOutcome,
    CommitResult,
    Committer,
    format_timestamp,
    get_git_commit_sha,
    is_git_work_tree,
    render_commit_message,
)

__all__ = [
    "CommitError",
    "CommitOutcome",
    "CommitResult",
    "Committer",
    "format_timestamp",
    "get_git_commit_sha",
    "is_git_work_tree",
    "render_commit_message",
]
