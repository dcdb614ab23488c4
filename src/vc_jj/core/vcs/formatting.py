"""
Header and mode-line rendering for a ChangeRecord.

Report lines, in order (Bookmarks and Status only when non-empty)::

    Description: (no description set)
    Change ID  : kmxqyzpwlvnrtsuoqkxzzvopwyrtlmsk
    Commit     : 3f2a9c0e1b7d4e6f8a0b2c4d6e8f0a1b3c5d7e9f
    Bookmarks  : main,feature
    Status     : (conflict)(hidden)
"""

from __future__ import annotations

from rich.text import Text

from .types import ChangeRecord, ModeLineString, split_short_id

HEADER_LABEL_WIDTH = 11
NO_DESCRIPTION = "(no description set)"
MODE_LINE_PREFIX = "JJ:"

LABEL_STYLE = "bold"
CHANGE_ID_STYLE = "bold magenta"
COMMIT_ID_STYLE = "bold blue"
SUFFIX_STYLE = "bright_black"


def _label(label: str) -> str:
    return label[:HEADER_LABEL_WIDTH].ljust(HEADER_LABEL_WIDTH)


def header_line(label: str, value: str | Text) -> Text:
    line = Text()
    line.append(_label(label), style=LABEL_STYLE)
    line.append(": ")
    line.append(value)
    return line


def _split_id(prefix: str, suffix: str, style: str) -> Text:
    text = Text()
    text.append(prefix, style=style)
    text.append(suffix, style=SUFFIX_STYLE)
    return text


def format_status_flags(record: ChangeRecord) -> str:
    tags = []
    if record.conflict:
        tags.append("(conflict)")
    if record.divergent:
        tags.append("(divergent)")
    if record.hidden:
        tags.append("(hidden)")
    return "".join(tags)


def render_change_record(record: ChangeRecord) -> Text:
    """Build the labelled header report with styled id prefixes."""
    lines = [
        header_line("Description", record.description or NO_DESCRIPTION),
        header_line(
            "Change ID",
            _split_id(*split_short_id(record.change_id, record.change_id_short), CHANGE_ID_STYLE),
        ),
        header_line(
            "Commit",
            _split_id(*split_short_id(record.commit_id, record.commit_id_short), COMMIT_ID_STYLE),
        ),
    ]
    if record.bookmarks:
        lines.append(header_line("Bookmarks", ",".join(record.bookmarks)))
    status = format_status_flags(record)
    if status:
        lines.append(header_line("Status", status))
    return Text("\n").join(lines)


def format_change_record(record: ChangeRecord) -> str:
    return render_change_record(record).plain


def format_mode_line(record: ChangeRecord) -> ModeLineString:
    """Short ``JJ:<shortest change id>`` label with the full id as tooltip."""
    tooltip = f"{record.change_id}\n{record.description or NO_DESCRIPTION}"
    return ModeLineString(label=f"{MODE_LINE_PREFIX}{record.change_id_short}", tooltip=tooltip)
