"""
Transfer listeners.

A listener receives progress and diagnostic notifications from a
transport and from the fetcher wrapping it. Listeners are used for
observation only and never influence control flow.
"""

import logging
from pathlib import Path


class TransferListener:
    """
    Listener with no-op hooks.

    Subclasses override the hooks they care about.
    """

    def transfer_started(self, resource: str, destination: Path) -> None:
        """Called before the first byte of a resource is written."""

    def transfer_progress(self, resource: str, length: int) -> None:
        """Called after each chunk with the chunk length in bytes."""

    def transfer_completed(self, resource: str, total: int) -> None:
        """Called once the resource has been written completely."""

    def transfer_error(self, resource: str, error: Exception) -> None:
        """Called when a transfer fails."""

    def debug(self, message: str) -> None:
        """Receive a free-form diagnostic message."""


class LoggingTransferListener(TransferListener):
    """Forwards every notification to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def transfer_started(self, resource: str, destination: Path) -> None:
        self.logger.info(f"Downloading {resource} -> {destination}")

    def transfer_progress(self, resource: str, length: int) -> None:
        self.logger.debug(f"{resource}: +{length} bytes")

    def transfer_completed(self, resource: str, total: int) -> None:
        self.logger.info(f"Downloaded {resource} ({total} bytes)")

    def transfer_error(self, resource: str, error: Exception) -> None:
        self.logger.warning(f"Transfer of {resource} failed: {error}")

    def debug(self, message: str) -> None:
        self.logger.debug(message)
