"""Option and state models."""

from .options import ReadOptions, StreamOptions
from .state import TailState

__all__ = [
    "ReadOptions",
    "StreamOptions",
    "TailState",
]
