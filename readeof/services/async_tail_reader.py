"""asyncio last-lines reader and file follower, backed by aiofiles."""

import asyncio
import logging
from typing import AsyncIterator, List, Optional

from ..models.options import ReadOptions, StreamOptions
from ..models.state import TailState
from ..utils.boundary_scanner import afind_start_offset
from ..utils.file_cursor import AsyncFileCursor, PathLike
from .stream_state import StreamState, split_lines

logger = logging.getLogger(__name__)


async def wait_for_stop(stop_event: asyncio.Event, timeout: float) -> bool:
    """
    Wait up to timeout seconds for stop_event.

    Returns:
        True if the event was set, False if the timeout elapsed first
    """
    try:
        await asyncio.wait_for(stop_event.wait(), timeout=timeout)
    except asyncio.TimeoutError:
        return False
    return True


class AsyncTailReader:
    """Async counterpart of TailReader with the same semantics."""

    def __init__(self, file_path: PathLike, options: Optional[ReadOptions] = None):
        self.file_path = file_path
        self.options = options or StreamOptions()
        self.state: Optional[TailState] = None

    async def _read_tail(self, cursor: AsyncFileCursor, max_lines: int) -> str:
        if max_lines <= 0 or cursor.file_size == 0:
            return ""

        start_offset = await afind_start_offset(cursor, max_lines, self.options.buffer_size)
        data = await cursor.read_at(start_offset, cursor.file_size - start_offset)
        return self.options.decode(data)

    async def read_last(self, max_lines: int) -> str:
        """
        Read the last max_lines lines of the file.

        Args:
            max_lines: Number of lines to return; <= 0 returns ""

        Returns:
            The decoded text, trailing newline preserved
        """
        async with AsyncFileCursor(self.file_path) as cursor:
            return await self._read_tail(cursor, max_lines)

    async def follow(
        self,
        max_lines: int,
        stop_event: Optional[asyncio.Event] = None
    ) -> AsyncIterator[str]:
        """
        Yield the last max_lines lines, then each line appended afterwards.

        Stops when stop_event is set, flushing any partial last line.
        Cancelling the consuming task or calling aclose() releases the file.
        """
        options = self._stream_options()
        stop_event = stop_event or asyncio.Event()
        stream = StreamState()
        cursor = AsyncFileCursor(self.file_path)

        try:
            self.state = TailState.INITIAL_READ
            await cursor.open()
            initial_size = cursor.file_size
            for line in split_lines(await self._read_tail(cursor, max_lines)):
                yield line
            stream.position = initial_size

            self.state = TailState.WATCHING
            chunk = bytearray(options.buffer_size)
            view = memoryview(chunk)
            while not stop_event.is_set():
                for line in await self._poll(cursor, stream, chunk, view):
                    yield line

                if await wait_for_stop(stop_event, options.poll_interval):
                    break

            self.state = TailState.STOPPED
            logger.info(f"[AsyncTailReader] stopped following: {cursor.path}")
            remainder = stream.flush()
            if remainder is not None:
                yield remainder
        except Exception:
            self.state = TailState.FAILED
            raise
        finally:
            if self.state != TailState.FAILED:
                self.state = TailState.STOPPED
            await cursor.close()

    async def _poll(
        self,
        cursor: AsyncFileCursor,
        stream: StreamState,
        chunk: bytearray,
        view: memoryview
    ) -> List[str]:
        try:
            if await cursor.replaced():
                logger.info(f"[AsyncTailReader] file replaced, reopening: {cursor.path}")
                await cursor.reopen()
                stream.reset()

            size = await cursor.refresh_size()
            if size < stream.position:
                logger.info(f"[AsyncTailReader] file truncated ({size} < {stream.position}): {cursor.path}")
                stream.reset()

            if size <= stream.position:
                return []

            bytes_read = await cursor.read_into(stream.position, view[:min(len(chunk), size - stream.position)])
            stream.position += bytes_read
            return stream.feed(self.options.decode(chunk[:bytes_read]))

        except OSError as e:
            logger.warning(f"[AsyncTailReader] read failed, reopening {cursor.path}: {e}")
            try:
                await cursor.reopen()
            except OSError as reopen_error:
                logger.error(f"[AsyncTailReader] reopen failed for {cursor.path}: {reopen_error}")
                raise
            stream.reset()
            return []

    def _stream_options(self) -> StreamOptions:
        if isinstance(self.options, StreamOptions):
            return self.options
        return StreamOptions(**self.options.model_dump())


async def read_last_async(
    file_path: PathLike,
    max_lines: int,
    *,
    encoding: Optional[str] = None,
    buffer_size: Optional[int] = None,
    errors: Optional[str] = None
) -> str:
    """
    Read the last max_lines lines of a file without blocking the event loop.

    Example:
        >>> text = await read_last_async("/var/log/app.log", 10)
    """
    options = ReadOptions.resolve(encoding=encoding, buffer_size=buffer_size, errors=errors)
    return await AsyncTailReader(file_path, options).read_last(max_lines)


def atail_lines(
    file_path: PathLike,
    max_lines: int,
    *,
    encoding: Optional[str] = None,
    buffer_size: Optional[int] = None,
    poll_interval: Optional[float] = None,
    errors: Optional[str] = None,
    stop_event: Optional[asyncio.Event] = None
) -> AsyncIterator[str]:
    """
    Async-iterate the last max_lines lines of a file, then follow it.

    Example:
        >>> stop = asyncio.Event()
        >>> async for line in atail_lines("/var/log/app.log", 10, stop_event=stop):
        ...     print(line)
    """
    options = StreamOptions.resolve(
        encoding=encoding,
        buffer_size=buffer_size,
        poll_interval=poll_interval,
        errors=errors
    )
    return AsyncTailReader(file_path, options).follow(max_lines, stop_event)
