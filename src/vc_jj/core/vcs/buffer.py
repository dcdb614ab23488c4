"""In-memory output buffer backed by rich Text."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text


class OutputBuffer:
    """Collects plain and colorized command output.

    Plain strings are appended unstyled; ``Text`` keeps its spans so a
    colorized log or diff can be rendered later.
    """

    def __init__(self) -> None:
        self.text = Text()

    def write(self, text: str | Text) -> int:
        self.text.append(text)
        return len(text)

    def clear(self) -> None:
        self.text = Text()

    @property
    def plain(self) -> str:
        return self.text.plain

    def __str__(self) -> str:
        return self.plain


class ConsoleSink:
    """Writes command output straight to a rich Console."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def write(self, text: str | Text) -> int:
        if isinstance(text, str):
            # Raw tool output goes to the stream byte for byte.
            self.console.file.write(text)
        else:
            self.console.print(text, end="", soft_wrap=True, crop=False)
        return len(text)
