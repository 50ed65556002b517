from __future__ import annotations

import os
from pathlib import Path

import pytest

from tests.utils.git_helpers import FIXED_NOW, init_repo


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep NOTEPRESS_* settings and enclosing git repositories out of tests."""
    for key in list(os.environ):
        if key.startswith("NOTEPRESS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))


@pytest.fixture
def git_repo(tmp_path) -> Path:
    """An empty git repository with a committer identity configured."""
    return init_repo(tmp_path / "site")


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def notifications() -> list[str]:
    return []


@pytest.fixture
def notifier(notifications):
    return notifications.append
