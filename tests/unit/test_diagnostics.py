"""Tests for the doctor checks."""

from notepress.config.settings import PublishSettings, save_notepress_config
from notepress.diagnostics import (
    HealthStatus,
    check_notepress_config,
    check_python_version,
    check_repository,
    run_diagnostics,
)
from tests.utils.git_helpers import requires_git


def test_python_version_ok():
    assert check_python_version().status == HealthStatus.OK


def test_missing_config_is_info(tmp_path):
    result = check_notepress_config(tmp_path)

    assert result.status == HealthStatus.INFO


def test_valid_config(tmp_path):
    save_notepress_config(PublishSettings(repo_path="/srv/site", publish_folder="posts"), tmp_path)

    result = check_notepress_config(tmp_path)

    assert result.status == HealthStatus.OK
    assert result.details["publish_folder"] == "posts"


def test_invalid_config(tmp_path):
    config_dir = tmp_path / ".notepress"
    config_dir.mkdir()
    (config_dir / "notepress.toml").write_text("not = [valid toml")

    assert check_notepress_config(tmp_path).status == HealthStatus.ERROR


def test_repository_not_configured(tmp_path):
    result = check_repository(tmp_path)

    assert result.status == HealthStatus.ERROR
    assert "not configured" in result.message


def test_repository_missing(tmp_path):
    save_notepress_config(PublishSettings(repo_path=str(tmp_path / "nowhere")), tmp_path)

    result = check_repository(tmp_path)

    assert result.status == HealthStatus.ERROR
    assert "does not exist" in result.message


@requires_git
def test_repository_not_git(tmp_path):
    site = tmp_path / "site"
    site.mkdir()
    save_notepress_config(PublishSettings(repo_path=str(site)), tmp_path)

    result = check_repository(tmp_path)

    assert result.status == HealthStatus.ERROR
    assert "not a git repository" in result.message


@requires_git
def test_repository_ok(tmp_path, git_repo):
    save_notepress_config(PublishSettings(repo_path=str(git_repo)), tmp_path)

    result = check_repository(tmp_path)

    assert result.status == HealthStatus.OK


def test_run_diagnostics_returns_every_check(tmp_path):
    checks = [result.check for result in run_diagnostics(tmp_path)]

    assert checks == ["Python Version", "Required Packages", "Git", "Notepress Config", "Publish Repository"]
