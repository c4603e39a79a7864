"""
Test fixtures for fetcher tests.

Provides a scriptable in-memory transport that records every call.
"""

from pathlib import Path

import pytest

from repofetch.core.transport.base import ConnectOptions, Endpoint, Transport
from repofetch.core.transport.listener import TransferListener


class RecordingTransport(Transport):
    """
    Transport that serves resources from a dict and records calls.

    Set connect_error / disconnect_error to make those calls fail.
    Map a resource name to an exception in `failures` to make get()
    write `partial` bytes (unless it is None) and then raise it.
    """

    def __init__(self, resources: dict[str, bytes] | None = None):
        super().__init__()
        self.resources = resources or {}
        self.failures: dict[str, Exception] = {}
        self.partial = b"partial"
        self.connect_error: Exception | None = None
        self.disconnect_error: Exception | None = None
        self.calls: list[tuple] = []

    def connect(self, endpoint: Endpoint, options: ConnectOptions | None = None) -> None:
        self.calls.append(("connect", endpoint, options))
        if self.connect_error is not None:
            raise self.connect_error

    def get(self, name: str, destination: Path) -> None:
        self.calls.append(("get", name, Path(destination)))
        if name in self.failures:
            if self.partial is not None:
                Path(destination).write_bytes(self.partial)
            raise self.failures[name]
        Path(destination).write_bytes(self.resources[name])

    def disconnect(self) -> None:
        self.calls.append(("disconnect",))
        if self.disconnect_error is not None:
            raise self.disconnect_error


class RecordingListener(TransferListener):
    """Listener that keeps debug messages."""

    def __init__(self):
        self.messages: list[str] = []

    def debug(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport({"a.jar": b"PK\x03\x04jar-bytes"})


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()
