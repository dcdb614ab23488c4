"""
Ignore-file editing for jj workspaces.

jj honours ``.gitignore`` files, so ignoring a path means editing the
``.gitignore`` at the workspace root. Existing line endings are preserved
and the file always ends with a newline after a write.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

IGNORE_FILE_NAME = ".gitignore"


class IgnoreFile:
    """Adds and removes patterns in one ignore file."""

    def __init__(self, path: Path):
        """
        Args:
            path: Location of the ignore file; it need not exist yet.
        """
        if not isinstance(path, Path):
            path = Path(path)
        self.path = path
        self._line_ending = os.linesep

    def patterns(self) -> list[str]:
        """Current lines of the file, or an empty list if it is missing."""
        return self._read_lines()

    def add(self, pattern: str) -> bool:
        """
        Append ``pattern`` unless it is already present.

        Returns:
            True if the file was modified, False otherwise
        """
        pattern = pattern.strip()
        if not pattern:
            return False
        lines = self._read_lines()
        if pattern in lines:
            return False
        lines.append(pattern)
        self._write_lines(lines)
        logger.info("Added %r to %s", pattern, self.path)
        return True

    def remove(self, pattern: str) -> bool:
        """
        Drop every line equal to ``pattern``.

        Returns:
            True if the file was modified, False otherwise
        """
        pattern = pattern.strip()
        if not self.path.exists():
            return False
        lines = self._read_lines()
        kept = [line for line in lines if line != pattern]
        if len(kept) == len(lines):
            return False
        self._write_lines(kept)
        logger.info("Removed %r from %s", pattern, self.path)
        return True

    def _read_lines(self) -> list[str]:
        if not self.path.exists():
            return []
        # newline="" keeps "\r\n" visible so it can be written back unchanged
        with self.path.open("r", encoding="utf-8", newline="") as handle:
            content = handle.read()
        self._line_ending = self._detect_line_ending(content)
        return content.splitlines()

    def _write_lines(self, lines: list[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        content = self._line_ending.join(lines)
        if lines:
            content += self._line_ending
        with self.path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)

    def _detect_line_ending(self, content: str) -> str:
        """
        Detect and return the line ending style used in content.

        Returns:
            Line ending string ('\\r\\n' for Windows, '\\n' for Unix/Mac)
        """
        if "\r\n" in content:
            return "\r\n"
        return "\n"
