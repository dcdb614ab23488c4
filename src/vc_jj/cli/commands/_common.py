"""Helpers shared by the vc-jj command modules."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, NoReturn, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from vc_jj.core.config import VCConfig
from vc_jj.core.vcs import JujutsuVCS, VCSError, get_backend, probe_jj

console = Console()

T = TypeVar("T")

INSTALL_HINT = "Install jj from https://github.com/jj-vcs/jj"


def config_from(ctx: typer.Context) -> VCConfig:
    return ctx.obj if isinstance(ctx.obj, VCConfig) else VCConfig()


def fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False, soft_wrap=True)
    raise typer.Exit(1)


def require_backend(ctx: typer.Context, path: Path) -> JujutsuVCS:
    """Backend responsible for ``path``, or exit 1 with an explanation."""
    config = config_from(ctx)
    backend = get_backend(path, config)
    if backend is None:
        if probe_jj(config.program) is None:
            fail(f"{config.program} is not available. {INSTALL_HINT}")
        fail(f"{path} is not inside a jj workspace")
    return backend


def unbound_backend(ctx: typer.Context) -> JujutsuVCS:
    """Backend for commands that run before a workspace exists."""
    config = config_from(ctx)
    handle = probe_jj(config.program)
    if handle is None:
        fail(f"{config.program} is not available. {INSTALL_HINT}")
    return JujutsuVCS(handle, config)


def run_or_exit(fn: Callable[[], T]) -> T:
    try:
        return fn()
    except VCSError as exc:
        fail(str(exc))
