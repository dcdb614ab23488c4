"""Run jj as a subprocess with an explicit working directory."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .detection import JJHandle
from .exceptions import VCSCommandError, VCSError, VCSNotFoundError
from .types import OutputSink

__all__ = [
    "CommandResult",
    "run_jj",
    "jj_lines",
    "jj_output",
]

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Exit status and captured output of one jj invocation."""

    returncode: int
    stdout: str
    stderr: str
    args: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_jj(
    handle: JJHandle,
    args: Sequence[str],
    cwd: Path,
    *,
    sink: OutputSink | None = None,
) -> CommandResult:
    """
    Run ``jj <args>`` in ``cwd`` and return its exit status and output.

    A non-zero exit is returned, not raised; callers decide whether it is a
    benign signal. When ``sink`` is given and jj succeeds, stdout is written
    into it and the returned ``stdout`` is empty; a failed run leaves the
    sink untouched and keeps stdout on the result.

    Raises:
        VCSError: ``cwd`` is not an existing directory.
        VCSNotFoundError: jj could not be launched.
    """
    argv = [handle.program, *args]
    if not Path(cwd).is_dir():
        raise VCSError(f"Working directory {cwd} does not exist")
    logger.debug("Running %s in %s", argv, cwd)
    try:
        completed = subprocess.run(
            argv,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise VCSNotFoundError(f"Could not run {handle.program}: {exc}") from exc

    stdout = completed.stdout or ""
    stderr = completed.stderr or ""
    if completed.returncode != 0:
        logger.debug("%s exited with %d: %s", argv, completed.returncode, stderr.strip())
    if sink is not None and completed.returncode == 0:
        sink.write(stdout)
        stdout = ""
    return CommandResult(
        returncode=completed.returncode,
        stdout=stdout,
        stderr=stderr,
        args=argv,
    )


def jj_output(handle: JJHandle, args: Sequence[str], cwd: Path) -> str:
    """Run jj and return stdout, raising VCSCommandError on failure."""
    result = run_jj(handle, args, cwd)
    if not result.ok:
        raise VCSCommandError(result.args, result.returncode, result.stderr)
    return result.stdout


def jj_lines(handle: JJHandle, args: Sequence[str], cwd: Path) -> list[str]:
    """Run jj and return its non-empty stdout lines."""
    return [line for line in jj_output(handle, args, cwd).splitlines() if line]
