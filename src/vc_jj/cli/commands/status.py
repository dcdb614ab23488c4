"""File and workspace status commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from vc_jj.core.vcs import DirEntry, FileStatus

from ._common import console, require_backend, run_or_exit

STATUS_STYLES = {
    FileStatus.CONFLICTED: "bold red",
    FileStatus.ADDED: "green",
    FileStatus.EDITED: "yellow",
    FileStatus.UP_TO_DATE: "dim",
    FileStatus.UNTRACKED: "cyan",
}


def state(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="File to classify"),
) -> None:
    """Print the status of a single file."""
    backend = require_backend(ctx, file)
    status = run_or_exit(lambda: backend.state(file))
    typer.echo(status.value)


def status(
    ctx: typer.Context,
    directory: Path = typer.Argument(Path("."), help="Directory to list"),
    files: Optional[List[Path]] = typer.Option(None, "--file", "-f", help="Restrict to these files"),
    show_all: bool = typer.Option(False, "--all", "-a", help="Include up-to-date files"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table"),
) -> None:
    """List file statuses under a directory in jj's file order."""
    backend = require_backend(ctx, directory)
    collected: list[DirEntry] = []
    run_or_exit(lambda: backend.dir_status_files(directory, files, collected.extend))

    entries = [
        entry for entry in collected if show_all or entry.status is not FileStatus.UP_TO_DATE
    ]
    if as_json:
        payload = [{"path": entry.path, "status": entry.status.value} for entry in entries]
        typer.echo(json.dumps(payload, indent=2))
        return

    if not entries:
        console.print("[dim]No changes.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Status")
    table.add_column("Path")
    for entry in entries:
        table.add_row(f"[{STATUS_STYLES[entry.status]}]{entry.status.value}[/]", entry.path)
    console.print(table)


def header(
    ctx: typer.Context,
    directory: Path = typer.Argument(Path("."), help="Directory inside the workspace"),
) -> None:
    """Show the working-copy change header (description, ids, bookmarks)."""
    backend = require_backend(ctx, directory)
    console.print(run_or_exit(lambda: backend.dir_extra_headers(directory)))


def mode_line(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="File whose workspace to describe"),
    tooltip: bool = typer.Option(False, "--tooltip", help="Also print the tooltip text"),
) -> None:
    """Print the short status-bar label for the working-copy change."""
    backend = require_backend(ctx, file)
    result = run_or_exit(lambda: backend.mode_line_string(file))
    typer.echo(result.label)
    if tooltip:
        typer.echo(result.tooltip)
