"""Exclusively-owned file handles with byte-range random access."""

import asyncio
import errno
import os
import stat
from pathlib import Path
from typing import Optional, Tuple, Union

import aiofiles
import aiofiles.os

PathLike = Union[str, Path]


def validate_path(file_path: PathLike) -> Path:
    """
    Reject empty paths before touching the filesystem.

    Args:
        file_path: Path to the file

    Returns:
        The path as a Path object

    Raises:
        ValueError: If the path is None or empty
    """
    if file_path is None or (isinstance(file_path, str) and not file_path):
        raise ValueError("File path must not be empty")
    return Path(file_path)


def check_regular_file(st: os.stat_result, file_path: Path) -> None:
    """Raise if the stat result does not describe a regular file."""
    if stat.S_ISDIR(st.st_mode):
        raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), str(file_path))
    if not stat.S_ISREG(st.st_mode):
        # FIFOs and devices would block or never report a size
        raise OSError(errno.ENOTSUP, "Not a regular file", str(file_path))


def file_identity(st: os.stat_result) -> Tuple[int, int]:
    return st.st_dev, st.st_ino


class FileCursor:
    """Open binary handle to a regular file plus its last known size."""

    def __init__(self, file_path: PathLike):
        """
        Initialize the cursor. The file is opened by open() or on entering the context.

        Args:
            file_path: Path to the file
        """
        self.path = validate_path(file_path)
        self.file_size = 0
        self._handle = None
        self._identity: Optional[Tuple[int, int]] = None

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    def open(self) -> "FileCursor":
        """
        Open the file for reading and record its size.

        Raises:
            FileNotFoundError: If the path does not exist
            PermissionError: If the file cannot be read
            IsADirectoryError: If the path names a directory
            OSError: For other non-regular files and I/O failures
        """
        check_regular_file(os.stat(self.path), self.path)

        handle = open(self.path, 'rb')
        try:
            st = os.fstat(handle.fileno())
        except OSError:
            handle.close()
            raise

        self._handle = handle
        self._identity = file_identity(st)
        self.file_size = st.st_size
        return self

    def refresh_size(self) -> int:
        """Stat the open handle and remember the current size."""
        self.file_size = os.fstat(self._handle.fileno()).st_size
        return self.file_size

    def read_into(self, offset: int, view: memoryview) -> int:
        """Fill view with bytes starting at offset, returning the count actually read."""
        self._handle.seek(offset)
        return self._handle.readinto(view) or 0

    def read_at(self, offset: int, length: int) -> bytes:
        self._handle.seek(offset)
        return self._handle.read(length)

    def replaced(self) -> bool:
        """
        Check whether the path now names a different file than the open handle.

        A path that is momentarily missing (mid-rotation) is not a replacement.
        """
        try:
            st = os.stat(self.path)
        except FileNotFoundError:
            return False
        return file_identity(st) != self._identity

    def reopen(self) -> "FileCursor":
        self.close()
        return self.open()

    def close(self) -> None:
        if self._handle is not None:
            handle, self._handle = self._handle, None
            handle.close()

    def __enter__(self) -> "FileCursor":
        if not self.is_open:
            self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class AsyncFileCursor:
    """aiofiles-backed counterpart of FileCursor."""

    def __init__(self, file_path: PathLike):
        self.path = validate_path(file_path)
        self.file_size = 0
        self._handle = None
        self._identity: Optional[Tuple[int, int]] = None

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    async def open(self) -> "AsyncFileCursor":
        """Open the file for reading and record its size. Raises like FileCursor.open()."""
        check_regular_file(await aiofiles.os.stat(self.path), self.path)

        handle = await aiofiles.open(self.path, mode='rb')
        try:
            # Identity of what was opened, not of what the path named before
            st = await asyncio.to_thread(os.fstat, handle.fileno())
        except OSError:
            await handle.close()
            raise

        self._handle = handle
        self._identity = file_identity(st)
        self.file_size = st.st_size
        return self

    async def refresh_size(self) -> int:
        self.file_size = await self._handle.seek(0, os.SEEK_END)
        return self.file_size

    async def read_into(self, offset: int, view: memoryview) -> int:
        await self._handle.seek(offset)
        return await self._handle.readinto(view) or 0

    async def read_at(self, offset: int, length: int) -> bytes:
        await self._handle.seek(offset)
        return await self._handle.read(length)

    async def replaced(self) -> bool:
        try:
            st = await aiofiles.os.stat(self.path)
        except FileNotFoundError:
            return False
        return file_identity(st) != self._identity

    async def reopen(self) -> "AsyncFileCursor":
        await self.close()
        return await self.open()

    async def close(self) -> None:
        if self._handle is not None:
            handle, self._handle = self._handle, None
            await handle.close()

    async def __aenter__(self) -> "AsyncFileCursor":
        if not self.is_open:
            await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
