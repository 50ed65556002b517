"""Logging for the notepress command line.

Records from every ``notepress.*`` module go through a single Rich handler
on the root logger. The handler is tagged, so configuring logging again
(every CLI command does) adjusts the level instead of stacking handlers.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["LOG_LEVEL_ENV", "configure_logging", "console", "resolve_level"]

LOG_LEVEL_ENV = "NOTEPRESS_LOG_LEVEL"
_HANDLER_TAG = "_notepress_managed"

console = Console()


def resolve_level(name: str | None = None) -> int:
    """Map ``name`` (or ``NOTEPRESS_LOG_LEVEL``) to a logging level.

    Unknown names fall back to INFO.
    """
    candidate = (name or os.environ.get(LOG_LEVEL_ENV) or "INFO").strip().upper()
    level = logging.getLevelName(candidate)
    return level if isinstance(level, int) else logging.INFO


def _find_handler(logger: logging.Logger) -> RichHandler | None:
    for handler in logger.handlers:
        if isinstance(handler, RichHandler) and getattr(handler, _HANDLER_TAG, False):
            return handler
    return None


def _build_handler() -> RichHandler:
    # markup off: note names and git output are printed as-is
    handler = RichHandler(
        console=console,
        rich_tracebacks=True,
        show_path=False,
        markup=False,
        log_time_format="[%X]",
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(handler, _HANDLER_TAG, True)
    return handler


def configure_logging(level: str | None = None) -> int:
    """Attach the notepress handler to the root logger and set its level.

    Returns the level that was applied.
    """
    root = logging.getLogger()
    if _find_handler(root) is None:
        root.addHandler(_build_handler())

    applied = resolve_level(level)
    root.setLevel(applied)
    logging.captureWarnings(True)
    return applied
