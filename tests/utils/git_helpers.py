"""Helpers for tests that drive a real git repository."""

from __future__ import annotations

import shutil
import subprocess
from datetime import UTC, datetime
from pathlib import Path

import pytest

FIXED_NOW = datetime(2025, 1, 31, 9, 15, 0, tzinfo=UTC)
FIXED_TIMESTAMP = "2025-01-31T09:15:00.000Z"

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def run_git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def commit_count(repo: Path) -> int:
    try:
        return int(run_git(repo, "rev-list", "--count", "HEAD").strip())
    except subprocess.CalledProcessError:
        return 0


def last_commit_message(repo: Path) -> str:
    return run_git(repo, "log", "-1", "--format=%s").strip()


def init_repo(repo: Path) -> Path:
    repo.mkdir(parents=True, exist_ok=True)
    run_git(repo, "init", "-q")
    run_git(repo, "config", "user.email", "notepress@example.com")
    run_git(repo, "config", "user.name", "Notepress Tests")
    run_git(repo, "config", "commit.gpgsign", "false")
    return repo
