"""CLI command modules for vc-jj.

Each module exposes plain functions that ``register_commands`` attaches to
the root typer application.
"""

from __future__ import annotations

import typer

from . import history, status, workspace


def register_commands(app: typer.Typer) -> None:
    """Attach every vc-jj command to ``app``."""
    app.command("state")(status.state)
    app.command("status")(status.status)
    app.command("header")(status.header)
    app.command("mode-line")(status.mode_line)

    app.command("log")(history.log)
    app.command("diff")(history.diff)
    app.command("annotate")(history.annotate)
    app.command("show")(history.show)
    app.command("revisions")(history.revisions)

    app.command("track")(workspace.track)
    app.command("untrack")(workspace.untrack)
    app.command("commit")(workspace.commit)
    app.command("restore")(workspace.restore)
    app.command("ignore")(workspace.ignore)
    app.command("init")(workspace.init)


__all__ = ["register_commands"]
