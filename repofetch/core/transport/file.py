"""
Local filesystem transport.

Serves resources from a directory given as a file:// URL or a plain
path. Authentication and proxy settings do not apply and are ignored.
"""

import logging
from pathlib import Path
from urllib.parse import unquote, urlparse

from repofetch.core.transport.base import ConnectOptions, Endpoint, Transport
from repofetch.core.transport.exceptions import (
    AuthorizationError,
    ResourceDoesNotExistError,
    TransferFailedError,
    TransportConnectionError,
    TransportError,
)

logger = logging.getLogger(__name__)


def _url_to_path(url: str) -> Path:
    parsed = urlparse(url)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    return Path(url)


class FileTransport(Transport):
    """Transport for file:// endpoints."""

    def __init__(self, chunk_size: int = 64 * 1024):
        super().__init__()
        self.chunk_size = chunk_size
        self._root: Path | None = None

    def connect(self, endpoint: Endpoint, options: ConnectOptions | None = None) -> None:
        root = _url_to_path(endpoint.url)
        if not root.is_dir():
            raise TransportConnectionError(f"Repository directory not found for {endpoint}")
        self._root = root
        logger.info(f"Connected to {endpoint}")

    def get(self, name: str, destination: Path) -> None:
        if self._root is None:
            raise TransferFailedError("File transport is not connected. Call connect() first.")

        source = self._root / name.lstrip("/")
        destination = Path(destination)

        try:
            if not source.is_file():
                raise ResourceDoesNotExistError(f"Resource missing at {source}")

            try:
                src = open(source, "rb")
            except PermissionError as e:
                raise AuthorizationError(f"Access denied to {source}: {e}") from e

            with src:
                destination.parent.mkdir(parents=True, exist_ok=True)
                self._fire_started(name, destination)
                total = 0
                with open(destination, "wb") as dst:
                    while chunk := src.read(self.chunk_size):
                        dst.write(chunk)
                        total += len(chunk)
                        self._fire_progress(name, len(chunk))

        except TransportError as e:
            self._fire_error(name, e)
            raise
        except OSError as e:
            error = TransferFailedError(f"Copy of {source} failed: {e}")
            self._fire_error(name, error)
            raise error from e

        self._fire_completed(name, total)

    def disconnect(self) -> None:
        if self._root is not None:
            self._root = None
            logger.info("Disconnected file transport")
