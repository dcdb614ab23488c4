"""Commands that change the workspace: tracking, committing, ignoring."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from ._common import console, require_backend, run_or_exit, unbound_backend


def track(
    ctx: typer.Context,
    files: List[Path] = typer.Argument(..., help="Files to start tracking"),
) -> None:
    """Start tracking files."""
    backend = require_backend(ctx, files[0])
    run_or_exit(lambda: backend.register(files))
    console.print(f"[green]Tracked[/green] {len(files)} path(s)")


def untrack(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="File to stop tracking"),
) -> None:
    """Stop tracking a file (it must be ignored first)."""
    backend = require_backend(ctx, file)
    run_or_exit(lambda: backend.unregister(file))
    console.print(f"[green]Untracked[/green] {file}")


def commit(
    ctx: typer.Context,
    files: Optional[List[Path]] = typer.Argument(None, help="Paths to commit (default: everything)"),
    message: str = typer.Option(..., "--message", "-m", help="Change description"),
) -> None:
    """Describe the working-copy change and start a new one."""
    paths = list(files) if files else [Path(".")]
    backend = require_backend(ctx, paths[0])
    run_or_exit(lambda: backend.checkin(paths, message))
    console.print("[green]Committed[/green]")


def restore(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="File to restore from the parent change"),
) -> None:
    """Discard working-copy changes to a file."""
    backend = require_backend(ctx, file)
    run_or_exit(lambda: backend.revert(file))
    console.print(f"[green]Restored[/green] {file}")


def ignore(
    ctx: typer.Context,
    pattern: str = typer.Argument(..., help="Ignore pattern, relative to --dir"),
    directory: Path = typer.Option(Path("."), "--dir", "-d", help="Directory the pattern is relative to"),
    remove: bool = typer.Option(False, "--remove", help="Remove the pattern instead of adding it"),
) -> None:
    """Add or remove a pattern in the workspace .gitignore."""
    backend = require_backend(ctx, directory)
    changed = run_or_exit(lambda: backend.ignore(pattern, directory, remove=remove))
    ignore_file = backend.find_ignore_file(directory)
    if changed:
        verb = "Removed" if remove else "Added"
        console.print(f"[green]{verb}[/green] {pattern} in {ignore_file}")
    else:
        console.print(f"[dim]{ignore_file} unchanged[/dim]")


def init(
    ctx: typer.Context,
    directory: Path = typer.Argument(Path("."), help="Directory to initialize"),
) -> None:
    """Create a new jj repository."""
    backend = unbound_backend(ctx)
    run_or_exit(lambda: backend.create_repo(directory))
    console.print(f"[green]Initialized[/green] jj repository in {directory}")
