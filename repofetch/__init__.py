"""
repofetch — retrieve named resources from repositories over pluggable transports.

Usage:
    from repofetch import get_resource_fetcher

    fetcher = get_resource_fetcher(protocol="https")
    with fetcher.connected("central", "https://repo.example.org/maven2"):
        with fetcher.retrieve("index.properties") as stream:
            data = stream.read()
"""

from repofetch.core.fetchers import (
    FetchError,
    FetchErrorKind,
    FetcherFactory,
    ResourceFetcher,
    TransportResourceFetcher,
    get_resource_fetcher,
)
from repofetch.core.transport import AuthInfo, ProxyInfo, TransferListener

__version__ = "1.0.0"

__all__ = [
    "AuthInfo",
    "ProxyInfo",
    "TransferListener",
    "ResourceFetcher",
    "TransportResourceFetcher",
    "FetcherFactory",
    "get_resource_fetcher",
    "FetchError",
    "FetchErrorKind",
]
