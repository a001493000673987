"""Blocking last-lines reader and file follower."""

import logging
import threading
from typing import Iterator, List, Optional

from ..models.options import ReadOptions, StreamOptions
from ..models.state import TailState
from ..utils.boundary_scanner import find_start_offset
from ..utils.file_cursor import FileCursor, PathLike
from .stream_state import StreamState, split_lines

logger = logging.getLogger(__name__)


class TailReader:
    """Reads the last lines of one file and optionally keeps following it."""

    def __init__(self, file_path: PathLike, options: Optional[ReadOptions] = None):
        """
        Initialize the reader.

        Args:
            file_path: Path to the file
            options: Read or stream options; settings defaults when omitted
        """
        self.file_path = file_path
        self.options = options or StreamOptions()
        self.state: Optional[TailState] = None

    def _read_tail(self, cursor: FileCursor, max_lines: int) -> str:
        """Decode the last max_lines lines of an open cursor."""
        if max_lines <= 0 or cursor.file_size == 0:
            return ""

        start_offset = find_start_offset(cursor, max_lines, self.options.buffer_size)
        data = cursor.read_at(start_offset, cursor.file_size - start_offset)
        return self.options.decode(data)

    def read_last(self, max_lines: int) -> str:
        """
        Read the last max_lines lines of the file.

        Args:
            max_lines: Number of lines to return; <= 0 returns ""

        Returns:
            The decoded text, trailing newline preserved
        """
        with FileCursor(self.file_path) as cursor:
            return self._read_tail(cursor, max_lines)

    def follow(
        self,
        max_lines: int,
        stop_event: Optional[threading.Event] = None
    ) -> Iterator[str]:
        """
        Yield the last max_lines lines, then each line appended afterwards.

        Runs until stop_event is set. Truncation and replacement of the
        file restart reading from the beginning. An I/O error during a poll
        reopens the file once; if that fails the error propagates.

        Args:
            max_lines: Number of existing lines to emit first
            stop_event: Event that ends the iteration when set

        Yields:
            Lines without their line feed; empty lines are skipped
        """
        options = self._stream_options()
        stop_event = stop_event or threading.Event()
        stream = StreamState()
        cursor = FileCursor(self.file_path)

        try:
            self.state = TailState.INITIAL_READ
            cursor.open()
            initial_size = cursor.file_size
            yield from split_lines(self._read_tail(cursor, max_lines))
            stream.position = initial_size

            self.state = TailState.WATCHING
            chunk = bytearray(options.buffer_size)
            view = memoryview(chunk)
            while not stop_event.is_set():
                lines = self._poll(cursor, stream, chunk, view)
                yield from lines

                if stop_event.wait(options.poll_interval):
                    break

            self.state = TailState.STOPPED
            logger.info(f"[TailReader] stopped following: {cursor.path}")
            remainder = stream.flush()
            if remainder is not None:
                yield remainder
        except Exception:
            self.state = TailState.FAILED
            raise
        finally:
            if self.state != TailState.FAILED:
                self.state = TailState.STOPPED
            cursor.close()

    def _poll(self, cursor: FileCursor, stream: StreamState, chunk: bytearray, view: memoryview) -> List[str]:
        """Run one watch cycle and return the lines it completed."""
        try:
            if cursor.replaced():
                logger.info(f"[TailReader] file replaced, reopening: {cursor.path}")
                cursor.reopen()
                stream.reset()

            size = cursor.refresh_size()
            if size < stream.position:
                logger.info(f"[TailReader] file truncated ({size} < {stream.position}): {cursor.path}")
                stream.reset()

            if size <= stream.position:
                return []

            bytes_read = cursor.read_into(stream.position, view[:min(len(chunk), size - stream.position)])
            stream.position += bytes_read
            return stream.feed(self.options.decode(chunk[:bytes_read]))

        except OSError as e:
            logger.warning(f"[TailReader] read failed, reopening {cursor.path}: {e}")
            try:
                cursor.reopen()
            except OSError as reopen_error:
                logger.error(f"[TailReader] reopen failed for {cursor.path}: {reopen_error}")
                raise
            stream.reset()
            return []

    def _stream_options(self) -> StreamOptions:
        if isinstance(self.options, StreamOptions):
            return self.options
        return StreamOptions(**self.options.model_dump())


def read_last(
    file_path: PathLike,
    max_lines: int,
    *,
    encoding: Optional[str] = None,
    buffer_size: Optional[int] = None,
    errors: Optional[str] = None
) -> str:
    """
    Read the last max_lines lines of a file without scanning it from the start.

    Args:
        file_path: Path to the file
        max_lines: Number of lines; <= 0 returns ""
        encoding: Text encoding (default from settings, utf-8)
        buffer_size: Backward chunk size in bytes (default 16KB)
        errors: Codec error handler (default "replace")

    Returns:
        The decoded last lines, trailing newline preserved

    Example:
        >>> read_last("/var/log/app.log", 10)
    """
    options = ReadOptions.resolve(encoding=encoding, buffer_size=buffer_size, errors=errors)
    return TailReader(file_path, options).read_last(max_lines)


def tail_lines(
    file_path: PathLike,
    max_lines: int,
    *,
    encoding: Optional[str] = None,
    buffer_size: Optional[int] = None,
    poll_interval: Optional[float] = None,
    errors: Optional[str] = None,
    stop_event: Optional[threading.Event] = None
) -> Iterator[str]:
    """
    Yield the last max_lines lines of a file, then follow it like ``tail -f``.

    Example:
        >>> stop = threading.Event()
        >>> for line in tail_lines("/var/log/app.log", 10, stop_event=stop):
        ...     print(line)
    """
    options = StreamOptions.resolve(
        encoding=encoding,
        buffer_size=buffer_size,
        poll_interval=poll_interval,
        errors=errors
    )
    return TailReader(file_path, options).follow(max_lines, stop_event)
