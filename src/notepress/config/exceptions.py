"""Custom exceptions for configuration handling."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from notepress.exceptions import NotepressError


class ConfigError(NotepressError):
    """Base exception for all configuration-related errors."""


class ConfigurationError(ConfigError):
    """Raised when the publish target is misconfigured.

    Always raised before any file in the target tree is touched.
    """

    def __init__(self, field: str, value: str, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class ConfigValidationError(ConfigError):
    """Raised when the configuration file fails validation."""

    def __init__(self, errors: Sequence[dict[str, Any]] | None = None) -> None:
        self.errors = list(errors or [])
        super().__init__(f"Configuration validation failed with {len(self.errors)} error(s).")
