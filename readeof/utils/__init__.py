"""Utilities package."""

from .logger import setup_logger, init_app_logger
from .file_cursor import FileCursor, AsyncFileCursor
from .boundary_scanner import ScanState, find_start_offset, afind_start_offset

__all__ = [
    "setup_logger",
    "init_app_logger",
    "FileCursor",
    "AsyncFileCursor",
    "ScanState",
    "find_start_offset",
    "afind_start_offset",
]
