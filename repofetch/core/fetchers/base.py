"""
Base resource fetcher interface.

All fetcher implementations inherit from ResourceFetcher.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from repofetch.core.fetchers.exceptions import FetchError
from repofetch.core.fetchers.stream import TemporaryFileStream

logger = logging.getLogger(__name__)


class ResourceFetcher(ABC):
    """
    Abstract base class for resource fetchers.

    Usage:
        fetcher.connect("central", "https://repo.example.org/maven2")
        try:
            with fetcher.retrieve("index.properties") as stream:
                data = stream.read()
            fetcher.retrieve_to("index.gz", Path("index.gz"))
        finally:
            fetcher.disconnect()
    """

    @abstractmethod
    def connect(self, id: str, url: str) -> None:
        """
        Open a session with the repository.

        Args:
            id: Repository identifier, used in diagnostics.
            url: Repository base URL.
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close the session opened by connect()."""
        pass

    @abstractmethod
    def retrieve(self, name: str) -> TemporaryFileStream:
        """
        Retrieve a resource as a read stream.

        The caller must close the stream.
        """
        pass

    @abstractmethod
    def retrieve_to(self, name: str, target_file: Path) -> None:
        """Retrieve a resource into target_file."""
        pass

    @contextmanager
    def connected(self, id: str, url: str) -> Iterator["ResourceFetcher"]:
        """
        Connect for the duration of a with block.

        A disconnect failure while the block is already raising is logged
        and dropped so the original error reaches the caller.
        """
        self.connect(id, url)
        try:
            yield self
        except BaseException:
            try:
                self.disconnect()
            except FetchError as e:
                logger.warning(f"Ignoring disconnect failure after error: {e}")
            raise
        self.disconnect()
