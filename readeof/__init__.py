"""Read the last lines of a file efficiently and follow it as it grows."""

from .config import Settings, settings
from .models import ReadOptions, StreamOptions, TailState
from .services import (
    AsyncTailReader,
    TailReader,
    atail_lines,
    read_last,
    read_last_async,
    tail_lines,
)

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "settings",
    "ReadOptions",
    "StreamOptions",
    "TailState",
    "TailReader",
    "AsyncTailReader",
    "read_last",
    "tail_lines",
    "read_last_async",
    "atail_lines",
]
