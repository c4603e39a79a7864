"""Tests for TemporaryFileStream and the temp file registry."""

import shutil
from io import BytesIO

import pytest

from repofetch.core.fetchers import stream as stream_module
from repofetch.core.fetchers.stream import (
    TemporaryFileStream,
    discard_temp_file,
    pending_temp_files,
    register_temp_file,
)


class BrokenReader:
    """Stand-in file object whose reads fail."""

    closed = False

    def read(self, size: int = -1) -> bytes:
        raise OSError("device error")


@pytest.fixture
def temp_file(tmp_path):
    path = tmp_path / "resource.tmp"
    path.write_bytes(b"line one\nline two\n")
    register_temp_file(path)
    return path


def test_close_deletes_file(temp_file):
    stream = TemporaryFileStream(temp_file)

    stream.close()

    assert stream.closed
    assert not temp_file.exists()
    assert temp_file not in pending_temp_files()


def test_close_is_idempotent(temp_file):
    stream = TemporaryFileStream(temp_file)

    stream.close()
    stream.close()

    assert not temp_file.exists()


def test_close_after_read_error_deletes_file(temp_file):
    """The file is removed even when a read failed mid-stream."""
    stream = TemporaryFileStream(temp_file)
    real_file = stream._file
    assert stream.read(4) == b"line"

    stream._file = BrokenReader()
    with pytest.raises(OSError, match="device error"):
        stream.read(4)
    stream.close()

    assert real_file.closed
    assert not temp_file.exists()


def test_context_manager_deletes_file_on_exception(temp_file):
    with pytest.raises(ValueError):
        with TemporaryFileStream(temp_file) as stream:
            stream.readline()
            raise ValueError("consumer failed")

    assert not temp_file.exists()


def test_line_iteration(temp_file):
    with TemporaryFileStream(temp_file) as stream:
        assert list(stream) == [b"line one\n", b"line two\n"]


def test_works_with_copyfileobj(temp_file):
    out = BytesIO()

    with TemporaryFileStream(temp_file) as stream:
        shutil.copyfileobj(stream, out)

    assert out.getvalue() == b"line one\nline two\n"


def test_seek_and_tell(temp_file):
    with TemporaryFileStream(temp_file) as stream:
        stream.seek(5)
        assert stream.tell() == 5
        assert stream.read(3) == b"one"


def test_open_failure_discards_registration(tmp_path):
    missing = tmp_path / "never-written.tmp"
    register_temp_file(missing)

    with pytest.raises(FileNotFoundError):
        TemporaryFileStream(missing)

    assert missing not in pending_temp_files()


def test_exit_sweep_removes_unclosed_files(tmp_path):
    leaked = tmp_path / "leaked.tmp"
    leaked.write_bytes(b"x")
    register_temp_file(leaked)

    stream_module._remove_pending_temp_files()

    assert not leaked.exists()
    assert leaked not in pending_temp_files()


def test_discard_missing_file_is_quiet(tmp_path):
    discard_temp_file(tmp_path / "absent.tmp")
