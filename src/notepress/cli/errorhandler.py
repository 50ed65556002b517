"""CLI error handling utilities."""

from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.markup import escape

from notepress.config.exceptions import ConfigError, ConfigurationError
from notepress.logging_setup import console
from notepress.orchestration.exceptions import DocumentNotFoundError
from notepress.utils.exceptions import CommitError


@contextmanager
def handle_cli_errors(*, debug: bool = False) -> Generator[None, None, None]:
    """Context manager to handle CLI errors gracefully.

    Args:
        debug: If True, re-raise with the full traceback instead of printing a
            one-line message.

    """
    try:
        yield
    except (KeyboardInterrupt, SystemExit, typer.Exit):
        raise
    except ConfigurationError as e:
        if debug:
            raise
        console.print(f"[bold red]Invalid Configuration:[/bold red] {escape(str(e))}", highlight=False)
        console.print("Set [bold]repo_path[/bold] with [bold]notepress init --repo /abs/path[/bold] or NOTEPRESS_REPO_PATH.")
        raise typer.Exit(1) from e
    except ConfigError as e:
        if debug:
            raise
        console.print(f"[bold red]Configuration Error:[/bold red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1) from e
    except DocumentNotFoundError as e:
        if debug:
            raise
        console.print(f"[bold red]Not Found:[/bold red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1) from e
    except CommitError as e:
        if debug:
            raise
        console.print(f"[bold red]Git Error:[/bold red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1) from e
    except Exception as e:
        if debug:
            console.print_exception(show_locals=False)
            raise typer.Exit(1) from e

        console.print(f"[bold red]An unexpected error occurred:[/bold red] {escape(str(e))}", highlight=False)
        console.print("[dim]Run with [bold]--debug[/bold] for more details.[/dim]")
        raise typer.Exit(1) from e
