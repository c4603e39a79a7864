"""
Base interfaces for transports.

A transport is the concrete protocol client behind a resource fetcher.
All transport implementations must follow this interface so the fetcher
can work with any of them without changes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from fnmatch import fnmatch
from pathlib import Path

from repofetch.core.transport.listener import TransferListener


# =============================================================================
# Session values
# =============================================================================


@dataclass(frozen=True)
class Endpoint:
    """Remote repository a transport connects to."""

    id: str
    url: str

    def __str__(self) -> str:
        return f"{self.id} ({self.url})"


@dataclass(frozen=True)
class AuthInfo:
    """Credentials presented to the endpoint."""

    username: str | None = None
    password: str | None = None

    def __repr__(self) -> str:
        return f"AuthInfo(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class ProxyInfo:
    """
    Proxy the transport should route through.

    non_proxy_hosts is a "|" separated list of host glob patterns,
    e.g. "localhost|*.internal", that bypass the proxy.
    """

    host: str
    port: int
    protocol: str = "http"
    username: str | None = None
    password: str | None = None
    non_proxy_hosts: str = ""

    @property
    def url(self) -> str:
        """Proxy URL without credentials."""
        return f"{self.protocol}://{self.host}:{self.port}"

    def bypasses(self, host: str | None) -> bool:
        """True if requests to host should not use this proxy."""
        if not host or not self.non_proxy_hosts:
            return False
        patterns = [p.strip() for p in self.non_proxy_hosts.split("|") if p.strip()]
        return any(fnmatch(host.lower(), p.lower()) for p in patterns)


@dataclass(frozen=True)
class ConnectOptions:
    """Optional session settings. Both fields may be omitted."""

    auth: AuthInfo | None = None
    proxy: ProxyInfo | None = None


# =============================================================================
# Transport Base
# =============================================================================


class Transport(ABC):
    """
    Abstract base class for transports.

    Usage:
        transport = SomeTransport()
        transport.add_transfer_listener(listener)
        transport.connect(Endpoint("central", url), ConnectOptions())

        transport.get("path/to/file.jar", Path("/tmp/file.jar"))

        transport.disconnect()
    """

    def __init__(self) -> None:
        self._listeners: list[TransferListener] = []

    def add_transfer_listener(self, listener: TransferListener) -> None:
        """Register a listener for transfer events."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_transfer_listener(self, listener: TransferListener) -> None:
        """Unregister a listener. Unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listeners(self) -> tuple[TransferListener, ...]:
        return tuple(self._listeners)

    @abstractmethod
    def connect(self, endpoint: Endpoint, options: ConnectOptions | None = None) -> None:
        """Open a session with the endpoint."""
        pass

    @abstractmethod
    def get(self, name: str, destination: Path) -> None:
        """Write the named resource to destination."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close the session."""
        pass

    def _fire_started(self, resource: str, destination: Path) -> None:
        for listener in self._listeners:
            listener.transfer_started(resource, destination)

    def _fire_progress(self, resource: str, length: int) -> None:
        for listener in self._listeners:
            listener.transfer_progress(resource, length)

    def _fire_completed(self, resource: str, total: int) -> None:
        for listener in self._listeners:
            listener.transfer_completed(resource, total)

    def _fire_error(self, resource: str, error: Exception) -> None:
        for listener in self._listeners:
            listener.transfer_error(resource, error)

    def _fire_debug(self, message: str) -> None:
        for listener in self._listeners:
            listener.debug(message)
