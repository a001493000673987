"""Backward scan for the byte offset where the last N lines of a file begin."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .file_cursor import AsyncFileCursor, FileCursor

LINE_FEED = b'\n'

logger = logging.getLogger(__name__)


@dataclass
class ScanState:
    """
    Progress of a single backward scan.

    position is the number of bytes not yet scanned, i.e. the offset the
    next backward chunk ends at. start_offset is set once enough line
    boundaries have been found.
    """

    file_size: int
    target_line_count: int
    position: int = field(init=False)
    lines_found: int = 0
    start_offset: Optional[int] = None

    def __post_init__(self):
        self.position = self.file_size

    @property
    def done(self) -> bool:
        return self.start_offset is not None or self.position <= 0

    def next_read_length(self, buffer_size: int) -> int:
        """Step position back by one chunk and return the chunk length."""
        read_length = min(buffer_size, self.position)
        self.position -= read_length
        return read_length

    def scan_chunk(self, chunk, length: int) -> None:
        """
        Count line feeds in chunk[:length], highest index first.

        chunk holds the bytes starting at self.position. A line feed that is
        the very last byte of the file is not counted as the first boundary,
        so "a\\nb\\n" has two lines, not three.
        """
        index = length
        while True:
            index = chunk.rfind(LINE_FEED, 0, index)
            if index < 0:
                return

            absolute = self.position + index
            if absolute != self.file_size - 1 or self.lines_found > 0:
                self.lines_found += 1

            if self.lines_found >= self.target_line_count:
                self.start_offset = absolute + 1
                return

    def result(self) -> int:
        # Fewer lines than requested: the whole file
        return self.start_offset if self.start_offset is not None else 0


def find_start_offset(cursor: FileCursor, target_line_count: int, buffer_size: int) -> int:
    """
    Find the offset where the last target_line_count lines of the file begin.

    Reads backward from the end in chunks of at most buffer_size bytes into
    one reusable buffer and stops as soon as enough boundaries are found.
    The caller handles empty files and non-positive line counts.

    Args:
        cursor: Open cursor whose file_size is current
        target_line_count: Number of lines wanted (>= 1)
        buffer_size: Chunk size in bytes (>= 1)

    Returns:
        Byte offset in [0, file_size]
    """
    state = ScanState(cursor.file_size, target_line_count)
    chunk = bytearray(min(buffer_size, cursor.file_size))
    view = memoryview(chunk)

    while not state.done:
        read_length = state.next_read_length(buffer_size)
        bytes_read = cursor.read_into(state.position, view[:read_length])
        state.scan_chunk(chunk, bytes_read)

    logger.debug(
        f"[BoundaryScanner] {cursor.path}: {state.lines_found} boundaries, "
        f"start offset {state.result()} of {state.file_size}"
    )
    return state.result()


async def afind_start_offset(cursor: AsyncFileCursor, target_line_count: int, buffer_size: int) -> int:
    """Async version of find_start_offset over an AsyncFileCursor."""
    state = ScanState(cursor.file_size, target_line_count)
    chunk = bytearray(min(buffer_size, cursor.file_size))
    view = memoryview(chunk)

    while not state.done:
        read_length = state.next_read_length(buffer_size)
        bytes_read = await cursor.read_into(state.position, view[:read_length])
        state.scan_chunk(chunk, bytes_read)

    logger.debug(
        f"[BoundaryScanner] {cursor.path}: {state.lines_found} boundaries, "
        f"start offset {state.result()} of {state.file_size}"
    )
    return state.result()
