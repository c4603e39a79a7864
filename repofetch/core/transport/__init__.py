"""
Transports — protocol clients behind a resource fetcher.

Provides:
- Transport: abstract base every protocol client implements
- HttpTransport: http:// and https:// via httpx
- FileTransport: file:// and plain directory paths
- TransferListener: progress and debug notifications
"""

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
    TransferFailedError,
    TransportConnectionError,
    TransportError,
)
from repofetch.core.transport.file import FileTransport
from repofetch.core.transport.http import HttpTransport, HttpTransportConfig
from repofetch.core.transport.listener import LoggingTransferListener, TransferListener

__all__ = [
    # Session values
    "AuthInfo",
    "ConnectOptions",
    "Endpoint",
    "ProxyInfo",
    # Transports
    "Transport",
    "HttpTransport",
    "HttpTransportConfig",
    "FileTransport",
    # Listeners
    "TransferListener",
    "LoggingTransferListener",
    # Exceptions
    "TransportError",
    "TransportConnectionError",
    "AuthenticationError",
    "AuthorizationError",
    "ResourceDoesNotExistError",
    "TransferFailedError",
]
