"""
jj Output Parsing
=================

Turns the text printed by individual jj subcommands into the facts used by
the classifier and the formatter. Each function accepts the complete output
of one invocation.

Malformed output degrades: an annotate line that does not match yields
``None``, an unreadable timestamp yields ``None``, and a short template
record is padded with empty fields.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime

from .process import CommandResult
from .types import AnnotationLine, ChangeRecord, DiffSummary, split_short_id  # noqa: F401

logger = logging.getLogger(__name__)

# Nine newline-separated fields, in the order parse_change_record reads them.
CHANGE_RECORD_TEMPLATE = (
    'change_id.shortest() ++ "\\n" ++ '
    'change_id ++ "\\n" ++ '
    'commit_id.shortest() ++ "\\n" ++ '
    'commit_id ++ "\\n" ++ '
    'description.first_line() ++ "\\n" ++ '
    'bookmarks.join(",") ++ "\\n" ++ '
    'conflict ++ "\\n" ++ '
    'divergent ++ "\\n" ++ '
    'hidden ++ "\\n"'
)
CHANGE_RECORD_FIELDS = 9

ANNOTATE_LINE_RE = re.compile(
    r"^([a-z]+)\s+(\w+)\s+(\d{4}-\d{2}-\d{2}\s\d{2}:\d{2}:\d{2})\s+(\d+):\s"
)
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_SUMMARY_LINE_RE = re.compile(r"^([A-Z]) (.+)$")


def parse_file_list(text: str) -> list[str]:
    """Paths from ``jj file list``, one per line. Empty means untracked."""
    return [line for line in text.splitlines() if line.strip()]


def parse_diff_summary(text: str) -> DiffSummary:
    """
    Parse ``jj diff --summary`` lines of the form ``<LETTER> <path>``.

    Only ``A`` and ``M`` feed classification; every line is kept verbatim
    in ``lines``.
    """
    summary = DiffSummary()
    for line in text.splitlines():
        if not line.strip():
            continue
        summary.lines.append(line)
        match = _SUMMARY_LINE_RE.match(line)
        if match is None:
            continue
        letter, path = match.groups()
        if letter == "A":
            summary.added.append(path)
        elif letter == "M":
            summary.modified.append(path)
    return summary


def parse_conflict_list(result: CommandResult) -> list[str]:
    """
    Raw lines of ``jj resolve --list``.

    jj exits non-zero when there is nothing to list, so any failure here
    means "no conflicts". Each line is a path immediately followed by a
    conflict description, with no delimiter between the two.
    """
    if not result.ok:
        logger.debug("No conflicts reported (exit %d)", result.returncode)
        return []
    return [line for line in result.stdout.splitlines() if line.strip()]


def _parse_flag(value: str) -> bool:
    return value.strip() == "true"


def parse_change_record(text: str) -> ChangeRecord:
    """Parse the output of ``jj log -T CHANGE_RECORD_TEMPLATE`` for one revision."""
    fields = text.split("\n")
    if len(fields) < CHANGE_RECORD_FIELDS:
        logger.warning(
            "Expected %d template fields, got %d; padding with blanks",
            CHANGE_RECORD_FIELDS,
            len(fields),
        )
        fields.extend([""] * (CHANGE_RECORD_FIELDS - len(fields)))

    (
        change_id_short,
        change_id,
        commit_id_short,
        commit_id,
        description,
        bookmarks,
        conflict,
        divergent,
        hidden,
    ) = fields[:CHANGE_RECORD_FIELDS]

    return ChangeRecord(
        change_id_short=change_id_short.strip(),
        change_id=change_id.strip(),
        commit_id_short=commit_id_short.strip(),
        commit_id=commit_id.strip(),
        description=description.rstrip("\r"),
        bookmarks=tuple(name for name in bookmarks.strip().split(",") if name),
        conflict=_parse_flag(conflict),
        divergent=_parse_flag(divergent),
        hidden=_parse_flag(hidden),
    )


def parse_timestamp(text: str) -> datetime | None:
    """Read a ``YYYY-MM-DD HH:MM:SS`` local timestamp as an aware datetime."""
    try:
        naive = datetime.strptime(" ".join(text.split()), TIMESTAMP_FORMAT)
    except ValueError:
        logger.debug("Unparseable timestamp %r", text)
        return None
    return naive.astimezone()


def parse_annotation_line(line: str) -> AnnotationLine | None:
    """Parse one ``jj file annotate`` line, or return None if it does not match."""
    match = ANNOTATE_LINE_RE.match(line)
    if match is None:
        return None
    change_id, author, timestamp, line_number = match.groups()
    return AnnotationLine(
        change_id=change_id,
        author=author,
        timestamp=parse_timestamp(timestamp),
        line_number=int(line_number),
        content=line[match.end():],
    )


def parse_annotation(text: str) -> list[AnnotationLine]:
    parsed = (parse_annotation_line(line) for line in text.splitlines())
    return [entry for entry in parsed if entry is not None]


def parse_bookmark_names(text: str) -> list[str]:
    """Names from ``jj bookmark list -T 'name ++ "\\n"'``, deduplicated in order."""
    names: list[str] = []
    for line in text.splitlines():
        name = line.strip()
        if name and name not in names:
            names.append(name)
    return names
