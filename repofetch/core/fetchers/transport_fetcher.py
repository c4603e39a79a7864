"""
Resource fetcher over a pluggable transport.

TransportResourceFetcher wraps one Transport and gives it the uniform
connect/retrieve/disconnect contract:
1. connect() builds the endpoint and opens the transport session
2. retrieve_to() downloads into a caller-named file
3. retrieve() downloads into a temp file and returns a stream over it
4. disconnect() closes the session

Transport exceptions are translated into FetchError. Partially written
target files are always removed on failure.
"""

import logging
import os
import tempfile
from pathlib import Path

from repofetch.core.fetchers.base import ResourceFetcher
from repofetch.core.fetchers.exceptions import FetchError, FetchErrorKind
from repofetch.core.fetchers.stream import (
    TemporaryFileStream,
    discard_temp_file,
    register_temp_file,
)
from repofetch.core.transport.base import (
    AuthInfo,
    ConnectOptions,
    Endpoint,
    ProxyInfo,
    Transport,
)
from repofetch.core.transport.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ResourceDoesNotExistError,
    TransportError,
)
from repofetch.core.transport.listener import TransferListener

logger = logging.getLogger(__name__)


class TransportResourceFetcher(ResourceFetcher):
    """
    Fetches resources through a Transport.

    Not safe for concurrent use. Give each worker its own fetcher.

    Usage:
        fetcher = TransportResourceFetcher(HttpTransport(), listener)
        with fetcher.connected("central", "https://repo.example.org/maven2"):
            fetcher.retrieve_to("index.gz", Path("index.gz"))
    """

    def __init__(
        self,
        transport: Transport | None,
        listener: TransferListener | None = None,
        auth_info: AuthInfo | None = None,
        proxy_info: ProxyInfo | None = None,
    ):
        """
        Initialize the fetcher.

        Args:
            transport: Protocol client that performs the I/O.
            listener: Optional sink for transfer and debug events.
            auth_info: Optional credentials passed on connect.
            proxy_info: Optional proxy passed on connect.
        """
        self.transport = transport
        self.listener = listener
        self.auth_info = auth_info
        self.proxy_info = proxy_info

    def connect(self, id: str, url: str) -> None:
        """Open a transport session with the repository."""
        endpoint = Endpoint(id, url)

        try:
            if self.listener is not None:
                self.transport.add_transfer_listener(self.listener)

            self.transport.connect(
                endpoint,
                ConnectOptions(auth=self.auth_info, proxy=self.proxy_info),
            )
        except AuthenticationError as e:
            msg = f"Authentication exception connecting to {endpoint}"
            self._log_error(msg, e)
            raise FetchError(msg, FetchErrorKind.CONNECTION) from e
        except TransportError as e:
            msg = f"Transport exception connecting to {endpoint}"
            self._log_error(msg, e)
            raise FetchError(msg, FetchErrorKind.CONNECTION) from e

        logger.debug(f"Fetcher connected to {endpoint}")

    def disconnect(self) -> None:
        """Close the transport session. No-op without a transport."""
        if self.transport is None:
            return

        try:
            self.transport.disconnect()
        except TransportError as e:
            raise FetchError(
                f"Transport exception disconnecting: {e}", FetchErrorKind.CONNECTION
            ) from e

    def retrieve(self, name: str) -> TemporaryFileStream:
        """
        Retrieve a resource as a stream.

        The resource is downloaded into a temp file first. Closing the
        returned stream deletes the temp file.

        Raises:
            FetchError: If the transfer fails. No temp file is left behind.
        """
        prefix = f"{Path(name).name or 'resource'}-"
        fd, tmp_name = tempfile.mkstemp(prefix=prefix, suffix=".tmp")
        os.close(fd)
        target = Path(tmp_name)
        register_temp_file(target)

        try:
            self.retrieve_to(name, target)
        except BaseException:
            discard_temp_file(target)
            raise

        return TemporaryFileStream(target)

    def retrieve_to(self, name: str, target_file: Path) -> None:
        """
        Retrieve a resource into target_file, overwriting it.

        Raises:
            FetchError: AUTHORIZATION, NOT_FOUND or TRANSFER. target_file
                does not exist afterwards.
        """
        target_file = Path(target_file)

        try:
            self.transport.get(name, target_file)
        except AuthorizationError as e:
            self._delete_target(target_file)
            msg = f"Authorization exception retrieving {name}"
            self._log_error(msg, e)
            raise FetchError(msg, FetchErrorKind.AUTHORIZATION, resource=name) from e
        except ResourceDoesNotExistError as e:
            self._delete_target(target_file)
            msg = f"Resource {name} does not exist"
            self._log_error(msg, e)
            raise FetchError(msg, FetchErrorKind.NOT_FOUND, resource=name) from e
        except TransportError as e:
            self._delete_target(target_file)
            msg = f"Transfer for {name} failed"
            self._log_error(msg, e)
            raise FetchError(f"{msg}; {e}", FetchErrorKind.TRANSFER, resource=name) from e
        except BaseException:
            self._delete_target(target_file)
            raise

    @staticmethod
    def _delete_target(target_file: Path) -> None:
        """Remove a partially written target. Never raises."""
        try:
            target_file.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove {target_file}: {e}")

    def _log_error(self, msg: str, error: Exception) -> None:
        """Report a failure to the listener and the module logger."""
        logger.error(f"{msg}; {error}")
        if self.listener is not None:
            self.listener.debug(f"{msg}; {error}")
