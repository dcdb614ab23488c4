"""vc-jj command line interface.

Usage:
    vc-jj state FILE
    vc-jj status [DIR]
    vc-jj log [FILES]... --short --limit 10
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from vc_jj import __version__
from vc_jj.cli.commands import register_commands
from vc_jj.core.config import VCConfigError, load_vc_config

console = Console()

app = typer.Typer(
    name="vc-jj",
    help="Jujutsu backend for editor version-control layers",
    add_completion=False,
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("vc_jj")
    logger.handlers = [
        RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
    ]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"vc-jj {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        help="YAML configuration file (defaults to the per-user config)",
        exists=True,
        dir_okay=False,
    ),
    color: Optional[bool] = typer.Option(
        None,
        "--color/--no-color",
        help="Request colorized log and diff output from jj",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every jj invocation"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Load configuration shared by every command."""
    _configure_logging(verbose)
    try:
        config = load_vc_config(config_path)
    except VCConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    ctx.obj = config.with_overrides(colorize=color)


register_commands(app)


def main() -> None:
    app()


__all__ = ["app", "main"]
