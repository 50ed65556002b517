"""Configuration loading and validation."""

from notepress.config.exceptions import ConfigError, ConfigurationError, ConfigValidationError
from notepress.config.settings import (
    DEFAULT_ASSETS_FOLDER,
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_PUBLISH_FOLDER,
    TIMESTAMP_TOKEN,
    PublishSettings,
    find_notepress_config,
    load_notepress_config,
    save_notepress_config,
)

__all__ = [
    "DEFAULT_ASSETS_FOLDER",
    "DEFAULT_COMMIT_MESSAGE",
    "DEFAULT_PUBLISH_FOLDER",
    "TIMESTAMP_TOKEN",
    "ConfigError",
    "ConfigValidationError",
    "ConfigurationError",
    "PublishSettings",
    "find_notepress_config",
    "load_notepress_config",
    "save_notepress_config",
]
