"""Diagnostic utilities for verifying a Notepress setup.

Used by the ``notepress doctor`` CLI command. Every check returns a
:class:`DiagnosticResult` instead of raising, so one broken piece never hides
the state of the others.

Usage:
    from notepress.diagnostics import run_diagnostics

    for result in run_diagnostics(Path("~/vault")):
        print(f"{result.check}: {result.status.value}")
"""

from __future__ import annotations

import importlib
import subprocess
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from notepress.config.exceptions import ConfigError
from notepress.config.settings import find_notepress_config, load_notepress_config
from notepress.output_sinks.mirror import TargetLayout
from notepress.utils.git import is_git_work_tree

MIN_PYTHON = (3, 11)


class HealthStatus(str, Enum):
    """Health check status levels."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class DiagnosticResult:
    """Result of a diagnostic health check.

    Attributes:
        check: Name of the check (e.g., "Git")
        status: Health status (OK, WARNING, ERROR, INFO)
        message: Human-readable message
        details: Optional additional details

    """

    check: str
    status: HealthStatus
    message: str
    details: dict[str, Any] | None = None


def check_python_version() -> DiagnosticResult:
    """Check if Python version meets minimum requirement."""
    version = sys.version_info
    label = f"Python {version.major}.{version.minor}.{version.micro}"
    if version >= MIN_PYTHON:
        return DiagnosticResult(check="Python Version", status=HealthStatus.OK, message=label)
    return DiagnosticResult(
        check="Python Version",
        status=HealthStatus.ERROR,
        message=f"{label} (requires {MIN_PYTHON[0]}.{MIN_PYTHON[1]}+)",
    )


def check_required_packages() -> DiagnosticResult:
    """Check if required packages are installed."""
    required = ["frontmatter", "pydantic", "pydantic_settings", "rich", "tomli_w", "typer", "yaml"]

    missing = []
    for package in required:
        try:
            importlib.import_module(package)
        except ImportError:
            missing.append(package)

    if not missing:
        return DiagnosticResult(
            check="Required Packages",
            status=HealthStatus.OK,
            message=f"All {len(required)} required packages installed",
        )

    return DiagnosticResult(
        check="Required Packages",
        status=HealthStatus.ERROR,
        message=f"Missing packages: {', '.join(missing)}",
        details={"missing": missing},
    )


def check_git() -> DiagnosticResult:
    """Check if git is available for committing published notes."""
    try:
        result = subprocess.run(
            ["git", "--version"],  # noqa: S607
            capture_output=True,
            text=True,
            check=True,
            timeout=2,
        )
        return DiagnosticResult(check="Git", status=HealthStatus.OK, message=result.stdout.strip())

    except subprocess.CalledProcessError:
        return DiagnosticResult(
            check="Git",
            status=HealthStatus.ERROR,
            message="Git not available (auto commit will fail)",
        )

    except (subprocess.TimeoutExpired, FileNotFoundError):
        return DiagnosticResult(
            check="Git",
            status=HealthStatus.ERROR,
            message="Git not found in PATH (auto commit will fail)",
        )


def check_notepress_config(vault_root: Path) -> DiagnosticResult:
    """Check if a config file exists and is valid."""
    config_file = find_notepress_config(vault_root)

    if config_file is None:
        return DiagnosticResult(
            check="Notepress Config",
            status=HealthStatus.INFO,
            message="No .notepress/notepress.toml (using defaults and environment)",
        )

    try:
        settings = load_notepress_config(vault_root)
    except (ConfigError, OSError, ValueError, yaml.YAMLError) as e:
        return DiagnosticResult(
            check="Notepress Config",
            status=HealthStatus.ERROR,
            message=f"Invalid config: {e}",
        )

    return DiagnosticResult(
        check="Notepress Config",
        status=HealthStatus.OK,
        message=f"Valid config at {config_file}",
        details={
            "publish_folder": settings.publish_folder,
            "assets_folder": settings.assets_folder,
            "auto_commit": settings.auto_commit,
        },
    )


def check_repository(vault_root: Path) -> DiagnosticResult:
    """Check that the publish repository is configured, absolute and a git work tree."""
    try:
        settings = load_notepress_config(vault_root)
        layout = TargetLayout.from_settings(settings)
    except (ConfigError, OSError, ValueError, yaml.YAMLError) as e:
        return DiagnosticResult(check="Publish Repository", status=HealthStatus.ERROR, message=str(e))

    if not layout.root.is_dir():
        return DiagnosticResult(
            check="Publish Repository",
            status=HealthStatus.ERROR,
            message=f"{layout.root} does not exist",
        )

    if not is_git_work_tree(layout.root):
        status = HealthStatus.ERROR if settings.auto_commit else HealthStatus.WARNING
        return DiagnosticResult(
            check="Publish Repository",
            status=status,
            message=f"{layout.root} is not a git repository",
        )

    return DiagnosticResult(
        check="Publish Repository",
        status=HealthStatus.OK,
        message=f"Git repository at {layout.root}",
        details={"documents": str(layout.documents_dir), "assets": str(layout.assets_dir)},
    )


def run_diagnostics(vault_root: Path | None = None) -> list[DiagnosticResult]:
    """Run all diagnostic checks for the vault at ``vault_root``.

    Returns:
        List of diagnostic results, one per check

    """
    root = vault_root or Path.cwd()
    checks = [
        check_python_version,
        check_required_packages,
        check_git,
        lambda: check_notepress_config(root),
        lambda: check_repository(root),
    ]

    results = []
    for check_func in checks:
        try:
            results.append(check_func())
        except Exception as e:  # noqa: BLE001
            results.append(
                DiagnosticResult(
                    check="Unexpected",
                    status=HealthStatus.ERROR,
                    message=f"Check failed: {e}",
                )
            )

    return results
