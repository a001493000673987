"""Read position and partial-line reassembly for follow mode."""

from dataclasses import dataclass
from typing import List, Optional

LINE_SEPARATOR = "\n"


def split_lines(text: str) -> List[str]:
    """Split on line feeds, dropping empty segments."""
    return [line for line in text.split(LINE_SEPARATOR) if line]


@dataclass
class StreamState:
    """Where the next read starts and the not-yet-terminated tail of decoded text."""

    position: int = 0
    remainder: str = ""

    def reset(self) -> None:
        """Start over from the beginning of a truncated or replaced file."""
        self.position = 0
        self.remainder = ""

    def feed(self, text: str) -> List[str]:
        """
        Append newly decoded text and return the lines it completes.

        The trailing piece after the last line feed (possibly empty) is kept
        as the remainder and only delivered once a later chunk terminates it
        or flush() is called.
        """
        pieces = (self.remainder + text).split(LINE_SEPARATOR)
        self.remainder = pieces.pop()
        return [line for line in pieces if line]

    def flush(self) -> Optional[str]:
        remainder, self.remainder = self.remainder, ""
        return remainder or None
