"""Tests for the git committer."""

import subprocess
from datetime import UTC, datetime, timedelta, timezone

import pytest

from notepress.exceptions import NotepressError
from notepress.orchestration.exceptions import OrchestrationError
from notepress.utils.exceptions import CommitError
from notepress.utils.git import (
    CommitOutcome,
    Committer,
    format_timestamp,
    get_git_commit_sha,
    is_git_work_tree,
    render_commit_message,
)
from tests.utils.git_helpers import (
    FIXED_NOW,
    FIXED_TIMESTAMP,
    commit_count,
    last_commit_message,
    requires_git,
)


class TestCommitMessage:
    def test_format_timestamp_is_iso8601_utc(self):
        assert format_timestamp(FIXED_NOW) == FIXED_TIMESTAMP

    def test_format_timestamp_converts_to_utc(self):
        moment = datetime(2025, 1, 31, 10, 15, tzinfo=timezone(timedelta(hours=1)))

        assert format_timestamp(moment) == FIXED_TIMESTAMP

    def test_naive_datetimes_are_treated_as_utc(self):
        assert format_timestamp(FIXED_NOW.replace(tzinfo=None)) == FIXED_TIMESTAMP

    def test_timestamps_sort_chronologically(self):
        moments = [datetime(2024, 12, 31, 23, 59, tzinfo=UTC), FIXED_NOW, datetime(2025, 10, 1, tzinfo=UTC)]

        rendered = [format_timestamp(moment) for moment in moments]

        assert rendered == sorted(rendered)

    def test_render_replaces_token(self):
        message = render_commit_message("Update published notes - {timestamp}", FIXED_NOW)

        assert message == f"Update published notes - {FIXED_TIMESTAMP}"

    def test_render_replaces_first_token_only(self):
        message = render_commit_message("{timestamp} / {timestamp}", FIXED_NOW)

        assert message == f"{FIXED_TIMESTAMP} / {{timestamp}}"

    def test_render_without_token(self):
        assert render_commit_message("Publish", FIXED_NOW) == "Publish"


@requires_git
class TestCommitter:
    def test_clean_repository_has_no_changes(self, git_repo):
        assert Committer(git_repo, "msg").has_changes() is False

    def test_untracked_file_is_a_change(self, git_repo):
        (git_repo / "new.md").write_text("hello")

        assert Committer(git_repo, "msg").has_changes() is True

    def test_commit_creates_one_commit(self, git_repo):
        (git_repo / "content").mkdir()
        (git_repo / "content" / "a.md").write_text("a")
        (git_repo / "b.md").write_text("b")
        committer = Committer(git_repo, "Publish {timestamp}", clock=lambda: FIXED_NOW)

        result = committer.commit()

        assert result.outcome is CommitOutcome.COMMITTED
        assert result.message == f"Publish {FIXED_TIMESTAMP}"
        assert result.sha == get_git_commit_sha(git_repo)
        assert commit_count(git_repo) == 1
        assert last_commit_message(git_repo) == f"Publish {FIXED_TIMESTAMP}"
        assert committer.has_changes() is False

    def test_second_commit_reports_no_changes(self, git_repo):
        (git_repo / "a.md").write_text("a")
        committer = Committer(git_repo, "Publish")
        committer.commit()

        result = committer.commit()

        assert result.outcome is CommitOutcome.NO_CHANGES
        assert result.message is None
        assert commit_count(git_repo) == 1

    def test_nothing_to_commit_race_is_no_changes(self, git_repo, monkeypatch):
        (git_repo / "a.md").write_text("a")
        committer = Committer(git_repo, "Publish")
        committer.commit()
        # Status said "dirty" but the tree was clean by the time git commit ran.
        monkeypatch.setattr(committer, "has_changes", lambda: True)

        result = committer.commit()

        assert result.outcome is CommitOutcome.NO_CHANGES
        assert commit_count(git_repo) == 1

    def test_not_a_repository(self, tmp_path):
        plain = tmp_path / "plain"
        plain.mkdir()

        with pytest.raises(CommitError) as exc_info:
            Committer(plain, "Publish").commit()

        assert exc_info.value.command[:2] == ["git", "status"]
        assert is_git_work_tree(plain) is False

    def test_is_git_work_tree(self, git_repo):
        assert is_git_work_tree(git_repo) is True


class TestCommitterFailures:
    def _fake_git(self, fail_on: str, stderr: str):
        def fake(*args):
            command = ["git", *args]
            if args[0] == fail_on:
                raise subprocess.CalledProcessError(1, command, output="", stderr=stderr)
            stdout = " M content/a.md\n" if args[0] == "status" else ""
            return subprocess.CompletedProcess(command, 0, stdout=stdout, stderr="")

        return fake

    def test_commit_failure_raises(self, tmp_path, monkeypatch):
        committer = Committer(tmp_path, "Publish")
        monkeypatch.setattr(committer, "_git", self._fake_git("commit", "fatal: unable to write new index file"))

        with pytest.raises(CommitError, match="unable to write new index file") as exc_info:
            committer.commit()

        assert exc_info.value.returncode == 1
        assert exc_info.value.command[:2] == ["git", "commit"]

    def test_add_failure_raises(self, tmp_path, monkeypatch):
        committer = Committer(tmp_path, "Publish")
        monkeypatch.setattr(committer, "_git", self._fake_git("add", "fatal: index.lock exists"))

        with pytest.raises(CommitError, match="index.lock"):
            committer.commit()

    def test_working_tree_clean_message_is_no_changes(self, tmp_path, monkeypatch):
        committer = Committer(tmp_path, "Publish")
        monkeypatch.setattr(
            committer, "_git", self._fake_git("commit", "On branch main\nnothing to commit, working tree clean")
        )

        assert committer.commit().outcome is CommitOutcome.NO_CHANGES

    def test_missing_git_binary(self, tmp_path, monkeypatch):
        def missing(*_args, **_kwargs):
            raise FileNotFoundError("git")

        monkeypatch.setattr(subprocess, "run", missing)

        with pytest.raises(CommitError):
            Committer(tmp_path, "Publish").has_changes()

    def test_commit_error_hierarchy(self):
        error = CommitError(["git", "commit", "-m", "Publish"], 128, "fatal: bad object\n")

        assert isinstance(error, NotepressError)
        assert not isinstance(error, OrchestrationError)
        assert str(error) == "`git commit -m Publish` failed (exit code 128): fatal: bad object"
