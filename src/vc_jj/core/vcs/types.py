"""
VCS Types
=========

Enums and dataclasses shared by the jj parser, classifier, formatter and
backend. Every value here is produced fresh per query and never cached.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Protocol, runtime_checkable

from rich.text import Text


# =============================================================================
# Enums
# =============================================================================


class FileStatus(str, Enum):
    """Semantic status of a single file, as reported to the host."""

    UNTRACKED = "unregistered"
    UP_TO_DATE = "up-to-date"
    ADDED = "added"
    EDITED = "edited"
    CONFLICTED = "conflict"


def split_short_id(full: str, short: str) -> tuple[str, str]:
    """Split ``full`` into its unique ``short`` prefix and the remainder."""
    if short and full.startswith(short):
        return short, full[len(short):]
    return "", full


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class ChangeRecord:
    """Metadata for one change, read from a single templated ``jj log``."""

    change_id_short: str
    change_id: str
    commit_id_short: str
    commit_id: str
    description: str = ""
    bookmarks: tuple[str, ...] = ()
    conflict: bool = False
    divergent: bool = False
    hidden: bool = False

    @property
    def change_id_suffix(self) -> str:
        """The part of the full change id after the unique short prefix."""
        return split_short_id(self.change_id, self.change_id_short)[1]

    @property
    def commit_id_suffix(self) -> str:
        """The part of the full commit id after the unique short prefix."""
        return split_short_id(self.commit_id, self.commit_id_short)[1]


@dataclass(frozen=True)
class AnnotationLine:
    """One line of ``jj file annotate`` output."""

    change_id: str
    author: str
    timestamp: datetime | None
    line_number: int
    content: str = ""


@dataclass(frozen=True)
class DirEntry:
    """A (relative path, status) pair from a directory status query."""

    path: str
    status: FileStatus


@dataclass
class DiffSummary:
    """Parsed ``jj diff --summary`` output."""

    added: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    lines: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ModeLineString:
    """Abbreviated status-bar label plus its tooltip."""

    label: str
    tooltip: str


# =============================================================================
# Output sinks
# =============================================================================


@runtime_checkable
class OutputSink(Protocol):
    """Anything a backend can write command output into.

    Plain output is written as ``str``; colorized output is written as a
    rich ``Text`` converted from the tool's ANSI escapes.
    """

    def write(self, text: str | Text) -> object:
        ...
