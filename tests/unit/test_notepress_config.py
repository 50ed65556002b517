"""Unit tests for .notepress/notepress.toml loading and validation."""

import pytest
from pydantic import ValidationError

from notepress.config.exceptions import ConfigError, ConfigValidationError
from notepress.config.settings import (
    PublishSettings,
    find_notepress_config,
    load_notepress_config,
    save_notepress_config,
)


def _write_config(vault, text, name="notepress.toml"):
    config_dir = vault / ".notepress"
    config_dir.mkdir(parents=True, exist_ok=True)
    path = config_dir / name
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults():
    settings = PublishSettings()

    assert settings.repo_path == ""
    assert settings.publish_folder == "content"
    assert settings.assets_folder == "assets"
    assert settings.commit_message == "Update published notes - {timestamp}"
    assert settings.auto_commit is True


def test_settings_are_immutable():
    settings = PublishSettings(repo_path="/srv/site")

    with pytest.raises(ValidationError):
        settings.repo_path = "/elsewhere"


def test_unknown_keys_rejected():
    with pytest.raises(ValidationError):
        PublishSettings(unknown="value")


def test_empty_commit_message_rejected():
    with pytest.raises(ValidationError):
        PublishSettings(commit_message="   ")


def test_paths_are_stripped():
    assert PublishSettings(repo_path="  /srv/site \n").repo_path == "/srv/site"


def test_find_config_searches_upward(tmp_path):
    path = _write_config(tmp_path, 'repo_path = "/srv/site"\n')
    nested = tmp_path / "notes" / "daily"
    nested.mkdir(parents=True)

    assert find_notepress_config(nested) == path.resolve()


def test_find_config_returns_none(tmp_path):
    assert find_notepress_config(tmp_path) is None


def test_load_without_config_uses_defaults(tmp_path):
    settings = load_notepress_config(tmp_path)

    assert settings == PublishSettings()
    assert not (tmp_path / ".notepress").exists()


def test_load_from_toml(tmp_path):
    _write_config(
        tmp_path,
        'repo_path = "/srv/site"\npublish_folder = "posts"\nauto_commit = false\n',
    )

    settings = load_notepress_config(tmp_path)

    assert settings.repo_path == "/srv/site"
    assert settings.publish_folder == "posts"
    assert settings.assets_folder == "assets"
    assert settings.auto_commit is False


def test_load_from_publish_table(tmp_path):
    _write_config(tmp_path, '[publish]\nrepo_path = "/srv/site"\nassets_folder = "static"\n')

    settings = load_notepress_config(tmp_path)

    assert settings.repo_path == "/srv/site"
    assert settings.assets_folder == "static"


def test_load_from_yaml_fallback(tmp_path):
    _write_config(tmp_path, "repo_path: /srv/site\ncommit_message: 'Publish {timestamp}'\n", "config.yml")

    settings = load_notepress_config(tmp_path)

    assert settings.repo_path == "/srv/site"
    assert settings.commit_message == "Publish {timestamp}"


def test_priority_overrides_then_env_then_file(tmp_path, monkeypatch):
    _write_config(tmp_path, 'repo_path = "/from/file"\npublish_folder = "file-posts"\nassets_folder = "file-assets"\n')
    monkeypatch.setenv("NOTEPRESS_PUBLISH_FOLDER", "env-posts")
    monkeypatch.setenv("NOTEPRESS_ASSETS_FOLDER", "env-assets")

    settings = load_notepress_config(tmp_path, assets_folder="cli-assets", repo_path=None)

    assert settings.repo_path == "/from/file"
    assert settings.publish_folder == "env-posts"
    assert settings.assets_folder == "cli-assets"


def test_env_bool(tmp_path, monkeypatch):
    monkeypatch.setenv("NOTEPRESS_AUTO_COMMIT", "false")

    assert load_notepress_config(tmp_path).auto_commit is False


def test_invalid_config_raises(tmp_path):
    _write_config(tmp_path, 'repo_path = "/srv/site"\nfavourite_colour = "blue"\n')

    with pytest.raises(ConfigValidationError) as exc_info:
        load_notepress_config(tmp_path)

    assert exc_info.value.errors


@pytest.mark.parametrize(
    ("name", "text"),
    [("notepress.toml", "not = [valid toml"), ("config.yml", "repo_path: [unclosed\n")],
)
def test_unparseable_config_raises_config_error(tmp_path, name, text):
    config_path = _write_config(tmp_path, text, name=name)

    with pytest.raises(ConfigError, match="Failed to parse") as exc_info:
        load_notepress_config(tmp_path)

    assert str(config_path) in str(exc_info.value)


def test_save_then_load(tmp_path):
    settings = PublishSettings(repo_path="/srv/site", publish_folder="posts", auto_commit=False)

    path = save_notepress_config(settings, tmp_path)

    assert path == tmp_path / ".notepress" / "notepress.toml"
    assert load_notepress_config(tmp_path) == settings
