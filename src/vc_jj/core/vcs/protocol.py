"""
VCS Backend Protocol
====================

The callback contract a generic editor version-control layer calls into.
JujutsuVCS implements it; the host owns buffers (``OutputSink``) and
dispatch, the backend owns subprocess calls and output parsing.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path
from typing import Protocol, runtime_checkable

from rich.text import Text

from .types import ChangeRecord, DirEntry, FileStatus, ModeLineString, OutputSink


@runtime_checkable
class VCBackendProtocol(Protocol):
    """
    Interface contract for editor version-control backends.

    Every method receives explicit paths and must not depend on the
    process's current directory.
    """

    @property
    def name(self) -> str:
        """Short backend name shown by the host (e.g. "JJ")."""
        ...

    # =========================================================================
    # Repository discovery
    # =========================================================================

    def root(self, path: Path) -> Path | None:
        """Workspace root containing ``path``, or None."""
        ...

    def responsible_p(self, path: Path) -> bool:
        """True if this backend should handle ``path``."""
        ...

    def create_repo(self, directory: Path) -> None:
        """Initialize a new repository in ``directory``."""
        ...

    # =========================================================================
    # State queries
    # =========================================================================

    def registered(self, file: Path) -> bool:
        """True if ``file`` is tracked."""
        ...

    def state(self, file: Path) -> FileStatus:
        """Status of a single file."""
        ...

    def dir_status_files(
        self,
        directory: Path,
        files: Sequence[Path] | None,
        update_function: Callable[[list[DirEntry]], object],
    ) -> None:
        """Compute statuses under ``directory`` and hand them to ``update_function``."""
        ...

    def dir_extra_headers(self, directory: Path) -> Text:
        """Header block shown above a directory status listing."""
        ...

    def working_revision(self, file: Path) -> str:
        """Identifier of the working-copy revision."""
        ...

    def mode_line_string(self, file: Path) -> ModeLineString:
        """Status-bar label for ``file``."""
        ...

    def get_change_record(self, directory: Path, revision: str = "@") -> ChangeRecord:
        """Metadata for ``revision``."""
        ...

    # =========================================================================
    # History
    # =========================================================================

    def print_log(
        self,
        files: Sequence[Path],
        sink: OutputSink,
        shortlog: bool = False,
        start_revision: str | None = None,
        limit: int | None = None,
    ) -> None:
        ...

    def diff(
        self,
        files: Sequence[Path],
        rev1: str | None = None,
        rev2: str | None = None,
        sink: OutputSink | None = None,
    ) -> bool:
        """Write a diff into ``sink``; True when there were differences."""
        ...

    def annotate_command(self, file: Path, sink: OutputSink, revision: str | None = None) -> None:
        ...

    def annotate_time(self, line: str) -> datetime | None:
        ...

    def annotate_extract_revision_at_line(self, line: str) -> str | None:
        ...

    def revision_completion_table(self, files: Sequence[Path]) -> list[str]:
        ...

    def previous_revision(self, file: Path, revision: str) -> str | None:
        ...

    def next_revision(self, file: Path, revision: str) -> str | None:
        ...

    def find_revision(self, file: Path, revision: str, sink: OutputSink) -> None:
        """Write the contents of ``file`` at ``revision`` into ``sink``."""
        ...

    # =========================================================================
    # Mutations
    # =========================================================================

    def checkin(self, files: Sequence[Path], comment: str) -> None:
        ...

    def revert(self, file: Path) -> None:
        ...

    def register(self, files: Sequence[Path]) -> None:
        ...

    def unregister(self, file: Path) -> None:
        ...

    # =========================================================================
    # Ignore files
    # =========================================================================

    def find_ignore_file(self, file: Path) -> Path:
        ...

    def ignore(self, pattern: str, directory: Path, remove: bool = False) -> bool:
        """Add (or remove) ``pattern`` in the ignore file; True if it changed."""
        ...
