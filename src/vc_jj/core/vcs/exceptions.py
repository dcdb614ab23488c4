"""
VCS Exceptions
==============

Error hierarchy for the jj backend. Benign non-zero exits (for example
``jj resolve --list`` with nothing to list) never reach these classes; they
are folded into empty results by the parser.
"""

from __future__ import annotations

from collections.abc import Sequence


class VCSError(Exception):
    """Base class for all backend errors."""


class VCSNotFoundError(VCSError):
    """The jj executable is missing or could not be launched."""


class VCSCommandError(VCSError):
    """A jj command exited non-zero where that was not an expected signal."""

    def __init__(self, args: Sequence[str], returncode: int, stderr: str = ""):
        self.command = list(args)
        self.returncode = returncode
        self.stderr = stderr
        detail = _first_line(stderr)
        message = f"`{' '.join(self.command)}` exited with status {returncode}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


def _first_line(text: str) -> str:
    for line in text.splitlines():
        stripped = line.strip()
        if stripped:
            return stripped
    return ""
