"""
Jujutsu VCS Implementation
==========================

JujutsuVCS answers the host's version-control callbacks by running jj.
Each callback runs one or more jj commands to completion, parses the output
and returns a status, a record, or writes into a host-supplied sink. Nothing
is cached between calls.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path

from rich.text import Text

# Imported as a module: vc_jj.core.config imports this package's exceptions.
from vc_jj.core import config as vc_config

from .classify import classify_file, classify_files
from .detection import JJHandle, find_repo_root
from .exceptions import VCSCommandError, VCSError
from .formatting import format_mode_line, render_change_record
from .ignore import IGNORE_FILE_NAME, IgnoreFile
from .parsing import (
    CHANGE_RECORD_TEMPLATE,
    parse_annotation_line,
    parse_bookmark_names,
    parse_change_record,
    parse_conflict_list,
    parse_diff_summary,
    parse_file_list,
)
from .process import jj_lines, jj_output, run_jj
from .types import ChangeRecord, DirEntry, FileStatus, ModeLineString, OutputSink

logger = logging.getLogger(__name__)

NO_COLOR = "--color=never"
SHORT_ID_TEMPLATE = 'change_id.shortest() ++ "\\n"'
BOOKMARK_NAME_TEMPLATE = 'name ++ "\\n"'


class JujutsuVCS:
    """
    Jujutsu backend for a generic editor version-control layer.

    Args:
        handle: A probed jj executable (see ``probe_jj``).
        config: Log template, color and diff options for this backend.
    """

    def __init__(self, handle: JJHandle, config: vc_config.VCConfig | None = None):
        self.handle = handle
        self.config = config or vc_config.VCConfig()

    @property
    def name(self) -> str:
        return "JJ"

    # =========================================================================
    # Path helpers
    # =========================================================================

    @staticmethod
    def _locate(file: Path) -> tuple[Path, str]:
        """Directory to run jj in, and the path argument relative to it."""
        file = file.expanduser().resolve()
        if file.is_dir():
            return file, "."
        return file.parent, file.name

    def _require_root(self, path: Path) -> Path:
        root = find_repo_root(path)
        if root is None:
            raise VCSError(f"{path} is not inside a jj workspace")
        return root

    def _root_and_paths(self, files: Sequence[Path]) -> tuple[Path, list[str]]:
        """Workspace root of the first file plus every file relative to it."""
        if not files:
            raise VCSError("At least one file or directory is required")
        root = self._require_root(files[0])
        return root, [os.path.relpath(path.expanduser().resolve(), root) for path in files]

    def _emit(self, args: list[str], cwd: Path, sink: OutputSink | None) -> bool:
        """Run a display command and write its output to ``sink``.

        Output is captured in full first so a failing command leaves the
        sink untouched.
        """
        output = jj_output(self.handle, args, cwd)
        if sink is not None and output:
            if self.config.colorize:
                sink.write(Text.from_ansi(output))
            else:
                sink.write(output)
        return bool(output)

    # =========================================================================
    # Repository discovery
    # =========================================================================

    def root(self, path: Path) -> Path | None:
        return find_repo_root(path)

    def responsible_p(self, path: Path) -> bool:
        return find_repo_root(path) is not None

    def create_repo(self, directory: Path) -> None:
        directory.mkdir(parents=True, exist_ok=True)
        jj_output(self.handle, ["git", "init", NO_COLOR], directory)
        logger.info("Initialized jj repository in %s", directory)

    # =========================================================================
    # State queries
    # =========================================================================

    def _listings(
        self, cwd: Path, paths: Sequence[str]
    ) -> tuple[list[str], list[str], list[str], list[str]]:
        """Tracked, added, modified and raw conflict listings for ``paths``."""
        tracked = parse_file_list(
            jj_output(self.handle, ["file", "list", NO_COLOR, "--", *paths], cwd)
        )
        summary = parse_diff_summary(
            jj_output(self.handle, ["diff", "--summary", NO_COLOR, "--", *paths], cwd)
        )
        conflicts = parse_conflict_list(
            run_jj(self.handle, ["resolve", "--list", NO_COLOR, "--", *paths], cwd)
        )
        return tracked, summary.added, summary.modified, conflicts

    def registered(self, file: Path) -> bool:
        cwd, rel = self._locate(file)
        output = jj_output(self.handle, ["file", "list", NO_COLOR, "--", rel], cwd)
        return bool(parse_file_list(output))

    def state(self, file: Path) -> FileStatus:
        cwd, rel = self._locate(file)
        tracked, added, modified, conflicts = self._listings(cwd, [rel])
        status = classify_file(rel, tracked, added, modified, conflicts)
        logger.debug("state(%s) -> %s", file, status.value)
        return status

    def dir_status_files(
        self,
        directory: Path,
        files: Sequence[Path] | None,
        update_function: Callable[[list[DirEntry]], object],
    ) -> None:
        """
        Classify files under ``directory`` and pass them to ``update_function``.

        Entries follow the order of ``jj file list``. Requested files that
        jj does not track are appended as untracked.
        """
        directory = directory.expanduser().resolve()
        requested = [os.path.relpath(path.expanduser().resolve(), directory) for path in files or []]
        tracked, added, modified, conflicts = self._listings(directory, requested or ["."])
        entries = classify_files(tracked, added, modified, conflicts)
        listed = set(tracked)
        for rel in requested:
            if rel not in listed and (directory / rel).is_file():
                entries.append(DirEntry(path=rel, status=FileStatus.UNTRACKED))
        update_function(entries)

    def get_change_record(self, directory: Path, revision: str = "@") -> ChangeRecord:
        cwd, _ = self._locate(directory)
        output = jj_output(
            self.handle,
            ["log", "--no-graph", NO_COLOR, "-n", "1", "-r", revision, "-T", CHANGE_RECORD_TEMPLATE],
            cwd,
        )
        return parse_change_record(output)

    def dir_extra_headers(self, directory: Path) -> Text:
        return render_change_record(self.get_change_record(directory))

    def working_revision(self, file: Path) -> str:
        return self.get_change_record(file).change_id

    def mode_line_string(self, file: Path) -> ModeLineString:
        return format_mode_line(self.get_change_record(file))

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
        root, paths = self._root_and_paths(files)
        template = vc_config.SHORT_LOG_TEMPLATE if shortlog else self.config.log_template
        args = ["log", self.config.color_flag, "-T", template]
        if start_revision:
            args += ["-r", f"::{start_revision}"]
        if limit:
            args += ["-n", str(limit)]
        self._emit([*args, "--", *paths], root, sink)

    def diff(
        self,
        files: Sequence[Path],
        rev1: str | None = None,
        rev2: str | None = None,
        sink: OutputSink | None = None,
    ) -> bool:
        root, paths = self._root_and_paths(files)
        args = ["diff", self.config.color_flag, *self.config.diff_switches]
        if rev1:
            args += ["--from", rev1]
        if rev2:
            args += ["--to", rev2]
        return self._emit([*args, "--", *paths], root, sink)

    def annotate_command(self, file: Path, sink: OutputSink, revision: str | None = None) -> None:
        cwd, rel = self._locate(file)
        output = jj_output(
            self.handle,
            ["file", "annotate", NO_COLOR, "-r", revision or "@", "--", rel],
            cwd,
        )
        sink.write(output)

    def annotate_time(self, line: str) -> datetime | None:
        parsed = parse_annotation_line(line)
        return parsed.timestamp if parsed else None

    def annotate_extract_revision_at_line(self, line: str) -> str | None:
        parsed = parse_annotation_line(line)
        return parsed.change_id if parsed else None

    def revision_completion_table(self, files: Sequence[Path]) -> list[str]:
        """Short change ids from the default log, followed by bookmark names."""
        root, _ = self._root_and_paths(files)
        candidates = jj_lines(
            self.handle,
            ["log", "--no-graph", NO_COLOR, "-T", SHORT_ID_TEMPLATE],
            root,
        )
        bookmarks = parse_bookmark_names(
            jj_output(self.handle, ["bookmark", "list", NO_COLOR, "-T", BOOKMARK_NAME_TEMPLATE], root)
        )
        return list(dict.fromkeys([*candidates, *bookmarks]))

    def _file_revisions(self, file: Path, revset: str) -> list[str]:
        cwd, rel = self._locate(file)
        return jj_lines(
            self.handle,
            ["log", "--no-graph", NO_COLOR, "-r", revset, "-T", SHORT_ID_TEMPLATE, "--", rel],
            cwd,
        )

    def previous_revision(self, file: Path, revision: str) -> str | None:
        """Closest ancestor of ``revision`` that touched ``file``."""
        revisions = self._file_revisions(file, f"::{revision}-")
        return revisions[0] if revisions else None

    def next_revision(self, file: Path, revision: str) -> str | None:
        """Closest descendant of ``revision`` that touched ``file``."""
        revisions = self._file_revisions(file, f"{revision}+::")
        return revisions[-1] if revisions else None

    def find_revision(self, file: Path, revision: str, sink: OutputSink) -> None:
        cwd, rel = self._locate(file)
        result = run_jj(self.handle, ["file", "show", NO_COLOR, "-r", revision, "--", rel], cwd, sink=sink)
        if not result.ok:
            raise VCSCommandError(result.args, result.returncode, result.stderr)

    # =========================================================================
    # Mutations
    # =========================================================================

    def checkin(self, files: Sequence[Path], comment: str) -> None:
        root, paths = self._root_and_paths(files)
        jj_output(self.handle, ["commit", NO_COLOR, "-m", comment, "--", *paths], root)
        logger.info("Committed %d path(s)", len(paths))

    def revert(self, file: Path) -> None:
        cwd, rel = self._locate(file)
        jj_output(self.handle, ["restore", NO_COLOR, "--", rel], cwd)

    def register(self, files: Sequence[Path]) -> None:
        root, paths = self._root_and_paths(files)
        jj_output(self.handle, ["file", "track", NO_COLOR, "--", *paths], root)

    def unregister(self, file: Path) -> None:
        cwd, rel = self._locate(file)
        jj_output(self.handle, ["file", "untrack", NO_COLOR, "--", rel], cwd)

    # =========================================================================
    # Ignore files
    # =========================================================================

    def find_ignore_file(self, file: Path) -> Path:
        return self._require_root(file) / IGNORE_FILE_NAME

    def ignore(self, pattern: str, directory: Path, remove: bool = False) -> bool:
        """
        Add ``pattern`` to the workspace ignore file, or remove it.

        A pattern given relative to a subdirectory is rewritten relative to
        the workspace root.
        """
        root = self._require_root(directory)
        ignore_file = IgnoreFile(root / IGNORE_FILE_NAME)
        prefix = Path(os.path.relpath(directory.expanduser().resolve(), root)).as_posix()
        entry = pattern if prefix == "." else f"{prefix}/{pattern.lstrip('/')}"
        if remove:
            return ignore_file.remove(entry)
        return ignore_file.add(entry)
