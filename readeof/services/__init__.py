"""Services package."""

from .tail_reader import TailReader, read_last, tail_lines
from .async_tail_reader import AsyncTailReader, read_last_async, atail_lines
from .stream_state import StreamState

__all__ = [
    "TailReader",
    "AsyncTailReader",
    "StreamState",
    "read_last",
    "tail_lines",
    "read_last_async",
    "atail_lines",
]
