"""
Read streams backed by temporary files.

TemporaryFileStream owns a temp file and deletes it when closed. Temp
files are also tracked in a process-wide registry that is swept at
interpreter exit, for streams that are never closed.
"""

import atexit
import logging
from contextlib import ExitStack
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

_pending_temp_files: set[Path] = set()


def register_temp_file(path: Path) -> None:
    """Mark path for deletion at interpreter exit."""
    _pending_temp_files.add(Path(path))


def discard_temp_file(path: Path) -> None:
    """Delete path now and drop it from the exit registry."""
    path = Path(path)
    try:
        path.unlink(missing_ok=True)
    finally:
        _pending_temp_files.discard(path)


def pending_temp_files() -> frozenset[Path]:
    """Temp files that are still waiting for deletion."""
    return frozenset(_pending_temp_files)


@atexit.register
def _remove_pending_temp_files() -> None:
    for path in list(_pending_temp_files):
        try:
            discard_temp_file(path)
        except OSError as e:
            logger.warning(f"Could not remove temp file {path}: {e}")


class TemporaryFileStream:
    """
    Binary read stream over a temp file that is deleted on close.

    The file handle and the deletion are held in one ExitStack, so
    close() removes the file even if closing the handle fails or a
    read raised earlier.

    Usage:
        with fetcher.retrieve("index.gz") as stream:
            data = stream.read()
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._stack = ExitStack()
        self._stack.callback(discard_temp_file, self.path)
        try:
            self._file = self._stack.enter_context(open(self.path, "rb"))
        except BaseException:
            self._stack.close()
            raise

    @property
    def name(self) -> str:
        return str(self.path)

    @property
    def closed(self) -> bool:
        return self._file.closed

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return self._file.seekable()

    def read(self, size: int = -1) -> bytes:
        return self._file.read(size)

    def readinto(self, buffer) -> int:
        return self._file.readinto(buffer)

    def readline(self, size: int = -1) -> bytes:
        return self._file.readline(size)

    def readlines(self, hint: int = -1) -> list[bytes]:
        return self._file.readlines(hint)

    def seek(self, offset: int, whence: int = 0) -> int:
        return self._file.seek(offset, whence)

    def tell(self) -> int:
        return self._file.tell()

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._file)

    def close(self) -> None:
        """Close the handle and delete the backing file."""
        self._stack.close()

    def __enter__(self) -> "TemporaryFileStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<TemporaryFileStream({self.path}, {state})>"
