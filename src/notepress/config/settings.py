"""Configuration for Notepress.

Settings live in ``.notepress/notepress.toml`` inside the vault. Values are
resolved with the following priority (highest first):

1. Explicit overrides (CLI flags)
2. Environment variables (``NOTEPRESS_<FIELD>``, e.g. ``NOTEPRESS_REPO_PATH``)
3. The config file
4. Defaults

The resulting :class:`PublishSettings` is frozen and is passed into the
pipeline explicitly; nothing in the core reads settings from global state.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from notepress.config.exceptions import ConfigError, ConfigValidationError

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".notepress"
CONFIG_FILE_NAME = "notepress.toml"
YAML_CONFIG_FILE_NAME = "config.yml"
ENV_PREFIX = "NOTEPRESS_"

TIMESTAMP_TOKEN = "{timestamp}"
DEFAULT_PUBLISH_FOLDER = "content"
DEFAULT_ASSETS_FOLDER = "assets"
DEFAULT_COMMIT_MESSAGE = f"Update published notes - {TIMESTAMP_TOKEN}"


class PublishSettings(BaseSettings):
    """Where and how published notes are mirrored and committed."""

    repo_path: str = Field(
        default="",
        description="Absolute path of the git repository that receives published notes",
    )
    publish_folder: str = Field(
        default=DEFAULT_PUBLISH_FOLDER,
        description="Folder inside the repository where markdown files are copied",
    )
    assets_folder: str = Field(
        default=DEFAULT_ASSETS_FOLDER,
        description="Folder inside the repository where images and attachments are copied",
    )
    commit_message: str = Field(
        default=DEFAULT_COMMIT_MESSAGE,
        description="Commit message template; {timestamp} is replaced with the current time",
    )
    auto_commit: bool = Field(
        default=True,
        description="Commit changes in the repository after mirroring",
    )

    model_config = SettingsConfigDict(
        extra="forbid",
        frozen=True,
        env_prefix=ENV_PREFIX,
    )

    @field_validator("repo_path", "publish_folder", "assets_folder")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Drop surrounding whitespace pasted along with paths."""
        return v.strip()

    @field_validator("commit_message")
    @classmethod
    def validate_commit_message(cls, v: str) -> str:
        """Reject empty commit message templates."""
        if not v.strip():
            msg = "commit_message must not be empty"
            raise ValueError(msg)
        return v


def find_notepress_config(start_dir: Path) -> Path | None:
    """Search upward for ``.notepress/notepress.toml`` (or ``config.yml`` as fallback).

    Args:
        start_dir: Starting directory for upward search

    Returns:
        Path to config file if found, else None

    """
    current = start_dir.expanduser().resolve()
    for candidate in (current, *current.parents):
        toml_path = candidate / CONFIG_DIR_NAME / CONFIG_FILE_NAME
        if toml_path.exists():
            return toml_path

        yaml_path = candidate / CONFIG_DIR_NAME / YAML_CONFIG_FILE_NAME
        if yaml_path.exists():
            return yaml_path

    return None


def _collect_env_override_fields() -> set[str]:
    """Return the setting names defined via environment variables."""
    return {
        key[len(ENV_PREFIX) :].lower()
        for key in os.environ
        if key.startswith(ENV_PREFIX) and len(key) > len(ENV_PREFIX)
    }


def _read_config_file(config_path: Path) -> dict[str, Any]:
    try:
        raw_config = config_path.read_text(encoding="utf-8")
    except OSError:
        logger.exception("Failed to read config from %s", config_path)
        raise

    try:
        if config_path.suffix == ".toml":
            data = tomllib.loads(raw_config)
        else:
            data = yaml.safe_load(raw_config) or {}
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        msg = f"Failed to parse {config_path}: {e}"
        raise ConfigError(msg) from e

    if not isinstance(data, dict):
        raise ConfigValidationError([{"loc": (), "msg": "config file must contain a table of settings"}])

    # Accept both a flat file and one nested under a [publish] table.
    if isinstance(data.get("publish"), dict):
        data = data["publish"]
    return data


def load_notepress_config(vault_root: Path | None = None, **overrides: Any) -> PublishSettings:
    """Load settings for the vault at ``vault_root``.

    Args:
        vault_root: Directory to start the config search from. Defaults to the
            current working directory.
        **overrides: Explicit values that beat every other source. ``None``
            values are ignored so unset CLI options fall through.

    Returns:
        Validated, immutable PublishSettings

    Raises:
        ConfigValidationError: If the merged configuration is invalid
        ConfigError: If the config file cannot be parsed

    """
    if vault_root is None:
        vault_root = Path.cwd()

    file_data: dict[str, Any] = {}
    config_path = find_notepress_config(vault_root)
    if config_path is not None:
        logger.debug("Loading config from %s", config_path)
        file_data = _read_config_file(config_path)
    else:
        logger.debug("No configuration found under %s, using defaults", vault_root)

    # Init kwargs beat env vars in pydantic-settings, so drop file keys that
    # the environment provides: Overrides > Env Vars > Config File > Defaults.
    env_fields = _collect_env_override_fields()
    merged = {key: value for key, value in file_data.items() if str(key).lower() not in env_fields}
    merged.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return PublishSettings(**merged)
    except ValidationError as e:
        for error in e.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            logger.error("  %s: %s", loc, error["msg"])  # noqa: TRY400
        raise ConfigValidationError(e.errors()) from e


def save_notepress_config(settings: PublishSettings, vault_root: Path) -> Path:
    """Save settings to ``.notepress/notepress.toml`` under ``vault_root``.

    Creates ``.notepress/`` if it doesn't exist.

    Returns:
        Path to the saved config file

    """
    config_dir = vault_root / CONFIG_DIR_NAME
    config_dir.mkdir(exist_ok=True, parents=True)

    config_path = config_dir / CONFIG_FILE_NAME
    data = settings.model_dump(mode="json")
    config_path.write_text(tomli_w.dumps(data), encoding="utf-8")
    logger.debug("Saved config to %s", config_path)
    return config_path
