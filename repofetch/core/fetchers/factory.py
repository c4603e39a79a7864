"""
Fetcher factory — builds resource fetchers by protocol name.

Reads transport settings from config and keeps a registry of
transport builders keyed by protocol.

Usage:
    # Plain HTTP fetcher with a logging listener
    fetcher = get_resource_fetcher(LoggingTransferListener())

    # HTTPS with credentials and a proxy
    fetcher = get_resource_fetcher(
        listener,
        auth_info=AuthInfo("deployer", "secret"),
        proxy_info=ProxyInfo("proxy.local", 3128),
        protocol="https",
    )
"""

import logging
from typing import Any, Callable

from repofetch.core.config.loader import ConfigurationError, get_fetcher_config
from repofetch.core.fetchers.transport_fetcher import TransportResourceFetcher
from repofetch.core.transport.base import AuthInfo, ProxyInfo, Transport
from repofetch.core.transport.file import FileTransport
from repofetch.core.transport.http import HttpTransport, HttpTransportConfig
from repofetch.core.transport.listener import TransferListener

logger = logging.getLogger(__name__)

TransportBuilder = Callable[[], Transport]

DEFAULT_PROTOCOL = "http"


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def build_http_config(settings: dict[str, Any]) -> HttpTransportConfig:
    """Build HttpTransportConfig from the fetcher.http config section."""
    defaults = HttpTransportConfig()
    try:
        return HttpTransportConfig(
            timeout=float(settings.get("timeout", defaults.timeout)),
            user_agent=str(settings.get("user_agent", defaults.user_agent)),
            extra_headers=dict(settings.get("extra_headers") or {}),
            follow_redirects=_as_bool(settings.get("follow_redirects", defaults.follow_redirects)),
            verify_ssl=_as_bool(settings.get("verify_ssl", defaults.verify_ssl)),
            chunk_size=int(settings.get("chunk_size", defaults.chunk_size)),
            probe_on_connect=_as_bool(settings.get("probe_on_connect", defaults.probe_on_connect)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid fetcher.http configuration: {e}") from e


class FetcherFactory:
    """
    Resolves transports by protocol and wraps them in fetchers.

    Every resolution calls the registered builder, so each fetcher
    owns its own transport instance.
    """

    def __init__(self, transports: dict[str, TransportBuilder] | None = None):
        self._transports: dict[str, TransportBuilder] = {}
        for protocol, builder in (transports or {}).items():
            self.register(protocol, builder)

    @classmethod
    def from_config(cls, config: dict[str, Any] | None = None) -> "FetcherFactory":
        """
        Build the default registry from the fetcher config section.

        Args:
            config: The fetcher section. Loaded from config files if None.
        """
        if config is None:
            config = get_fetcher_config()

        http_config = build_http_config(config.get("http") or {})
        try:
            file_chunk_size = int((config.get("file") or {}).get("chunk_size", 64 * 1024))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid fetcher.file configuration: {e}") from e

        return cls(
            {
                "http": lambda: HttpTransport(http_config),
                "https": lambda: HttpTransport(http_config),
                "file": lambda: FileTransport(chunk_size=file_chunk_size),
            }
        )

    @property
    def protocols(self) -> list[str]:
        return sorted(self._transports)

    def register(self, protocol: str, builder: TransportBuilder) -> None:
        """Add or replace the transport builder for protocol."""
        self._transports[protocol.lower()] = builder

    def get_transport(self, protocol: str) -> Transport:
        """Build a fresh transport for protocol."""
        builder = self._transports.get(protocol.lower())
        if builder is None:
            raise ValueError(
                f"No transport for protocol: {protocol} "
                f"(available: {', '.join(self.protocols)})"
            )
        return builder()

    def get_resource_fetcher(
        self,
        listener: TransferListener | None = None,
        auth_info: AuthInfo | None = None,
        proxy_info: ProxyInfo | None = None,
        protocol: str = DEFAULT_PROTOCOL,
    ) -> TransportResourceFetcher:
        """
        Build a fetcher for protocol. Performs no I/O.

        Args:
            listener: Optional sink for transfer and debug events.
            auth_info: Optional credentials.
            proxy_info: Optional proxy.
            protocol: Transport protocol name, "http" by default.

        Returns:
            An unconnected TransportResourceFetcher.
        """
        transport = self.get_transport(protocol)
        logger.debug(f"Creating fetcher: protocol={protocol}, transport={type(transport).__name__}")
        return TransportResourceFetcher(transport, listener, auth_info, proxy_info)


# Global factory instance
_factory_instance: FetcherFactory | None = None


def get_fetcher_factory() -> FetcherFactory:
    """
    Get the global fetcher factory.

    Built from config on first call. Subsequent calls return the
    same instance.
    """
    global _factory_instance

    if _factory_instance is None:
        _factory_instance = FetcherFactory.from_config()

    return _factory_instance


def reset_fetcher_factory() -> None:
    """Drop the global factory so the next call rebuilds it."""
    global _factory_instance
    _factory_instance = None


def get_resource_fetcher(
    listener: TransferListener | None = None,
    auth_info: AuthInfo | None = None,
    proxy_info: ProxyInfo | None = None,
    protocol: str = DEFAULT_PROTOCOL,
) -> TransportResourceFetcher:
    """Build a fetcher using the global factory."""
    return get_fetcher_factory().get_resource_fetcher(
        listener, auth_info, proxy_info, protocol
    )
