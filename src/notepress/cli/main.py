"""Main Typer application for Notepress."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from notepress.cli.errorhandler import handle_cli_errors
from notepress.config.settings import (
    PublishSettings,
    find_notepress_config,
    load_notepress_config,
    save_notepress_config,
)
from notepress.diagnostics import HealthStatus, run_diagnostics
from notepress.input_adapters.vault import VaultCorpus
from notepress.logging_setup import configure_logging, console
from notepress.markdown.frontmatter import parse_frontmatter
from notepress.orchestration.pipeline import PublishPipeline, PublishResult, ReadFailure
from notepress.utils.git import CommitOutcome

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="notepress",
    help="Publish flagged markdown notes and their attachments into a git repository",
    add_completion=False,
)

VaultOption = Annotated[
    Path,
    typer.Option("--vault", "-V", help="Vault directory holding the notes", file_okay=False),
]
RepoOption = Annotated[
    str | None,
    typer.Option("--repo", "-r", help="Absolute path of the target git repository"),
]
PublishFolderOption = Annotated[
    str | None,
    typer.Option("--publish-folder", help="Folder inside the repository for markdown files"),
]
AssetsFolderOption = Annotated[
    str | None,
    typer.Option("--assets-folder", help="Folder inside the repository for attachments"),
]
MessageOption = Annotated[
    str | None,
    typer.Option("--message", "-m", help="Commit message template, {timestamp} is substituted"),
]
NoCommitOption = Annotated[
    bool,
    typer.Option("--no-commit", help="Mirror only, skip the git commit even if auto_commit is on"),
]
DebugOption = Annotated[bool, typer.Option("--debug", help="Show full tracebacks and debug logs")]


@app.callback()
def main() -> None:
    """Notepress command line interface."""


def _notify(message: str) -> None:
    console.print(message, markup=False, highlight=False)


def _confirm(prompt: str) -> bool:
    return typer.confirm(prompt, default=False)


def _load_settings(
    vault: Path,
    *,
    repo: str | None = None,
    publish_folder: str | None = None,
    assets_folder: str | None = None,
    message: str | None = None,
    commit: bool | None = None,
) -> PublishSettings:
    return load_notepress_config(
        vault,
        repo_path=repo,
        publish_folder=publish_folder,
        assets_folder=assets_folder,
        commit_message=message,
        auto_commit=commit,
    )


def _print_result(result: PublishResult) -> None:
    for failure in result.read_failures:
        console.print(f"[red]Read failure:[/red] {escape(str(failure))}")
    for failure in result.asset_failures:
        console.print(f"[yellow]Missing asset:[/yellow] {escape(str(failure))}")
    for failure in result.write_failures:
        console.print(f"[red]Write failure:[/red] {escape(str(failure))}")

    table = Table(title="Publish summary", show_header=False)
    table.add_column("Item", style="bold")
    table.add_column("Value")
    table.add_row("Documents published", str(result.documents_published))
    table.add_row("Documents failed", str(result.documents_failed))
    table.add_row("Assets copied", str(result.assets_copied))
    table.add_row("Assets not found", str(len(result.asset_failures)))
    outcome = result.commit_outcome.value if result.commit_outcome else "skipped"
    table.add_row("Commit", outcome)
    if result.commit_sha:
        table.add_row("Commit SHA", result.commit_sha[:12])
    console.print(table)


def _exit_code(result: PublishResult) -> int:
    if result.read_failures or result.write_failures or result.commit_outcome is CommitOutcome.FAILED:
        return 1
    return 0


@app.command()
def publish(
    vault: VaultOption = Path(),
    *,
    repo: RepoOption = None,
    publish_folder: PublishFolderOption = None,
    assets_folder: AssetsFolderOption = None,
    message: MessageOption = None,
    no_commit: NoCommitOption = False,
    debug: DebugOption = False,
) -> None:
    """Publish every note whose frontmatter contains "publish: true"."""
    configure_logging("DEBUG" if debug else None)
    with handle_cli_errors(debug=debug):
        settings = _load_settings(
            vault,
            repo=repo,
            publish_folder=publish_folder,
            assets_folder=assets_folder,
            message=message,
            commit=False if no_commit else None,
        )
        corpus = VaultCorpus(vault)
        result = PublishPipeline(settings, corpus, writer=corpus, notifier=_notify).publish_all()

    if result.selected or result.read_failures:
        _print_result(result)
    raise typer.Exit(_exit_code(result))


@app.command("publish-note")
def publish_note(
    note: Annotated[Path, typer.Argument(help="Note to publish (absolute or relative to the vault)")],
    vault: VaultOption = Path(),
    *,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Add the publish flag without asking when it is missing")
    ] = False,
    repo: RepoOption = None,
    publish_folder: PublishFolderOption = None,
    assets_folder: AssetsFolderOption = None,
    message: MessageOption = None,
    no_commit: NoCommitOption = False,
    debug: DebugOption = False,
) -> None:
    """Publish a single note, offering to add the publish flag if it is missing."""
    configure_logging("DEBUG" if debug else None)
    with handle_cli_errors(debug=debug):
        settings = _load_settings(
            vault,
            repo=repo,
            publish_folder=publish_folder,
            assets_folder=assets_folder,
            message=message,
            commit=False if no_commit else None,
        )
        corpus = VaultCorpus(vault)
        file = corpus.resolve_document(note)
        document_id = file.path if file else str(note)
        pipeline = PublishPipeline(settings, corpus, writer=corpus, notifier=_notify)
        result = pipeline.publish_one(document_id, confirm=(lambda _prompt: True) if yes else _confirm)

    if result.aborted:
        console.print("[yellow]Cancelled.[/yellow]")
        raise typer.Exit(0)
    _print_result(result)
    raise typer.Exit(_exit_code(result))


@app.command("list")
def list_publishable(vault: VaultOption = Path(), debug: DebugOption = False) -> None:
    """List the notes that would be published."""
    configure_logging("DEBUG" if debug else None)
    failures: list[ReadFailure] = []
    with handle_cli_errors(debug=debug):
        corpus = VaultCorpus(vault)
        settings = load_notepress_config(vault)
        documents = PublishPipeline(settings, corpus).select_publishable(failures)

    for failure in failures:
        console.print(f"[red]Read failure:[/red] {escape(str(failure))}")
    if not documents:
        console.print('No files found with "publish: true" frontmatter')
        raise typer.Exit(1 if failures else 0)

    table = Table(title=f"{len(documents)} publishable note(s)")
    table.add_column("Path")
    table.add_column("Title")
    for document in documents:
        metadata, _ = parse_frontmatter(document.content)
        table.add_row(escape(document.path), escape(str(metadata.get("title", ""))))
    console.print(table)
    if failures:
        raise typer.Exit(1)


@app.command()
def init(
    vault: VaultOption = Path(),
    *,
    repo: RepoOption = None,
    publish_folder: PublishFolderOption = None,
    assets_folder: AssetsFolderOption = None,
    message: MessageOption = None,
    no_commit: NoCommitOption = False,
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing config")] = False,
) -> None:
    """Write a .notepress/notepress.toml config file into the vault."""
    configure_logging()
    existing = find_notepress_config(vault)
    if existing is not None and not force:
        console.print(f"[yellow]Config already exists at {escape(str(existing))}[/yellow] (use --force to overwrite)")
        raise typer.Exit(1)

    with handle_cli_errors():
        overrides = {
            "repo_path": repo,
            "publish_folder": publish_folder,
            "assets_folder": assets_folder,
            "commit_message": message,
            "auto_commit": False if no_commit else None,
        }
        settings = PublishSettings(**{key: value for key, value in overrides.items() if value is not None})
        path = save_notepress_config(settings, vault)
    console.print(f"[green]Wrote {escape(str(path))}[/green]")


@app.command()
def doctor(
    vault: VaultOption = Path(),
    *,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show detailed diagnostic information")
    ] = False,
) -> None:
    """Run diagnostic checks to verify the Notepress setup."""
    console.print("[bold cyan]Running diagnostics...[/bold cyan]")
    console.print()

    results = run_diagnostics(vault)

    ok_count = sum(1 for r in results if r.status == HealthStatus.OK)
    warning_count = sum(1 for r in results if r.status == HealthStatus.WARNING)
    error_count = sum(1 for r in results if r.status == HealthStatus.ERROR)

    for result in results:
        if result.status == HealthStatus.OK:
            icon, color = "✅", "green"
        elif result.status == HealthStatus.WARNING:
            icon, color = "⚠️", "yellow"
        elif result.status == HealthStatus.ERROR:
            icon, color = "❌", "red"
        else:
            icon, color = "i", "cyan"

        console.print(f"[{color}]{icon} {result.check}:[/{color}] {escape(result.message)}")

        if verbose and result.details:
            for key, value in result.details.items():
                console.print(f"    {key}: {value}", style="dim", markup=False)

    console.print()
    if error_count == 0 and warning_count == 0:
        console.print("[bold green]All checks passed! Notepress is ready to publish.[/bold green]")
    elif error_count == 0:
        console.print(f"[bold yellow]{warning_count} warning(s) found.[/bold yellow]")
    else:
        console.print(f"[bold red]{error_count} error(s) found. Fix these before publishing.[/bold red]")

    console.print(f"[dim]Summary: {ok_count} OK, {warning_count} warnings, {error_count} errors[/dim]")

    if error_count > 0:
        raise typer.Exit(1)
