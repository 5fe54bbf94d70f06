"""Fixed-width table row buffer."""

from __future__ import annotations

from typing import TextIO


class Record:
    """Row of fields joined by one blank; fields may be padded to a column width."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def init(self) -> None:
        """Clear the row."""
        self._parts = []

    def append(self, string: str, width: int = 0, right: bool = False) -> None:
        """Append a field, padded (left-justified unless right) to width."""
        if width > 0:
            string = string.rjust(width) if right else string.ljust(width)
        self._parts.append(string)

    def get_line(self) -> str:
        """Current row as a string, without trailing blanks."""
        return ' '.join(self._parts).rstrip()

    def write(self, stream: TextIO) -> None:
        """Write the row and clear it; empty rows are not written."""
        line = self.get_line()
        if line:
            stream.write(line + '\n')
        self.init()
