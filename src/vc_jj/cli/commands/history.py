"""Log, diff, annotate and revision lookup commands."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from vc_jj.core.vcs import ConsoleSink

from ._common import console, require_backend, run_or_exit


def _paths(files: Optional[List[Path]]) -> list[Path]:
    return list(files) if files else [Path(".")]


def log(
    ctx: typer.Context,
    files: Optional[List[Path]] = typer.Argument(None, help="Limit the log to these paths"),
    short: bool = typer.Option(False, "--short", "-s", help="One line per change"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Maximum number of changes"),
    revision: Optional[str] = typer.Option(None, "--rev", "-r", help="Show ancestors of this revision"),
) -> None:
    """Show change history."""
    paths = _paths(files)
    backend = require_backend(ctx, paths[0])
    run_or_exit(
        lambda: backend.print_log(
            paths, ConsoleSink(console), shortlog=short, start_revision=revision, limit=limit
        )
    )


def diff(
    ctx: typer.Context,
    files: Optional[List[Path]] = typer.Argument(None, help="Limit the diff to these paths"),
    rev_from: Optional[str] = typer.Option(None, "--from", help="Revision to diff from"),
    rev_to: Optional[str] = typer.Option(None, "--to", help="Revision to diff to"),
) -> None:
    """Show changes; exits 1 when there are differences, like diff(1)."""
    paths = _paths(files)
    backend = require_backend(ctx, paths[0])
    changed = run_or_exit(lambda: backend.diff(paths, rev_from, rev_to, ConsoleSink(console)))
    if changed:
        raise typer.Exit(1)


def annotate(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="File to annotate"),
    revision: Optional[str] = typer.Option(None, "--rev", "-r", help="Revision to annotate at"),
) -> None:
    """Show the change that last touched each line."""
    backend = require_backend(ctx, file)
    run_or_exit(lambda: backend.annotate_command(file, ConsoleSink(console), revision))


def show(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="File to print"),
    revision: str = typer.Option("@", "--rev", "-r", help="Revision to read the file from"),
) -> None:
    """Print a file as it was at a revision."""
    backend = require_backend(ctx, file)
    run_or_exit(lambda: backend.find_revision(file, revision, ConsoleSink(console)))


def revisions(
    ctx: typer.Context,
    directory: Path = typer.Argument(Path("."), help="Directory inside the workspace"),
) -> None:
    """List revision names usable for completion (change ids, then bookmarks)."""
    backend = require_backend(ctx, directory)
    for name in run_or_exit(lambda: backend.revision_completion_table([directory])):
        typer.echo(name)
