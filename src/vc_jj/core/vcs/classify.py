"""Map parsed jj listings onto a single FileStatus per file."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .types import DirEntry, FileStatus


def matches_conflict(path: str, conflict_lines: Iterable[str]) -> bool:
    """
    True when any ``jj resolve --list`` line starts with ``path``.

    The listing prints the path and the conflict description with nothing
    separating them, so membership is a prefix test against a known
    candidate path rather than an exact comparison.
    """
    return any(line.startswith(path) for line in conflict_lines)


def classify_file(
    path: str,
    tracked: Iterable[str],
    added: Iterable[str],
    modified: Iterable[str],
    conflicts: Iterable[str],
) -> FileStatus:
    """Conflicted > Added > Edited > UpToDate > Untracked."""
    if matches_conflict(path, conflicts):
        return FileStatus.CONFLICTED
    if path in added:
        return FileStatus.ADDED
    if path in modified:
        return FileStatus.EDITED
    if path in tracked:
        return FileStatus.UP_TO_DATE
    return FileStatus.UNTRACKED


def classify_files(
    tracked: Sequence[str],
    added: Iterable[str],
    modified: Iterable[str],
    conflicts: Iterable[str],
) -> list[DirEntry]:
    """Classify every tracked file, keeping the order jj listed them in."""
    added_set = set(added)
    modified_set = set(modified)
    conflict_lines = list(conflicts)
    tracked_set = set(tracked)
    return [
        DirEntry(
            path=path,
            status=classify_file(path, tracked_set, added_set, modified_set, conflict_lines),
        )
        for path in tracked
    ]
