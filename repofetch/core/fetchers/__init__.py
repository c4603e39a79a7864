"""
Resource fetchers.

This module provides:
- ResourceFetcher: connect/retrieve/disconnect contract
- TransportResourceFetcher: ResourceFetcher over a pluggable Transport
- FetcherFactory / get_resource_fetcher: build fetchers by protocol
- FetchError / FetchErrorKind: uniform failure type
- TemporaryFileStream: read stream that deletes its temp file on close
"""

from repofetch.core.fetchers.base import ResourceFetcher
from repofetch.core.fetchers.exceptions import FetchError, FetchErrorKind
from repofetch.core.fetchers.factory import (
    FetcherFactory,
    get_fetcher_factory,
    get_resource_fetcher,
    reset_fetcher_factory,
)
from repofetch.core.fetchers.stream import TemporaryFileStream
from repofetch.core.fetchers.transport_fetcher import TransportResourceFetcher

__all__ = [
    "ResourceFetcher",
    "TransportResourceFetcher",
    "FetcherFactory",
    "get_fetcher_factory",
    "get_resource_fetcher",
    "reset_fetcher_factory",
    "FetchError",
    "FetchErrorKind",
    "TemporaryFileStream",
]
