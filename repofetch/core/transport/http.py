"""
HTTP/HTTPS transport built on httpx.

The transport keeps one httpx.Client per session. connect() only builds
the client unless probe_on_connect is enabled, in which case a HEAD
request against the endpoint root verifies reachability and credentials.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx

from repofetch.core.transport.base import ConnectOptions, Endpoint, ProxyInfo, Transport
from repofetch.core.transport.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ResourceDoesNotExistError,
    TransferFailedError,
    TransportConnectionError,
    TransportError,
)

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("http", "https")


@dataclass
class HttpTransportConfig:
    """Configuration for HttpTransport."""

    timeout: float = 30.0
    user_agent: str = "repofetch/1.0"
    extra_headers: dict[str, str] = field(default_factory=dict)
    follow_redirects: bool = True
    verify_ssl: bool = True
    chunk_size: int = 64 * 1024
    probe_on_connect: bool = False


class HttpTransport(Transport):
    """
    Transport for http:// and https:// endpoints.

    Usage:
        transport = HttpTransport(HttpTransportConfig(timeout=10.0))
        transport.connect(Endpoint("central", "https://repo.example.org/maven2"))
        transport.get("org/foo/foo-1.0.jar", Path("foo.jar"))
        transport.disconnect()
    """

    def __init__(
        self,
        config: HttpTransportConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the transport.

        Args:
            config: Timeouts, headers and TLS settings.
            transport: Optional httpx transport the client should use
                instead of the network. It also takes over proxy routing.
        """
        super().__init__()
        self.config = config or HttpTransportConfig()
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def connected(self) -> bool:
        return self._client is not None

    def connect(self, endpoint: Endpoint, options: ConnectOptions | None = None) -> None:
        """Build the session client for endpoint."""
        options = options or ConnectOptions()

        try:
            url = httpx.URL(endpoint.url)
        except httpx.InvalidURL as e:
            raise TransportConnectionError(f"Invalid URL for {endpoint}: {e}") from e

        if url.scheme not in SUPPORTED_SCHEMES or not url.host:
            raise TransportConnectionError(
                f"Unsupported URL for HTTP transport: {endpoint.url}"
            )

        self.disconnect()
        self._client = httpx.Client(**self._client_kwargs(url, options))
        logger.info(f"Connected to {endpoint}")

        if self.config.probe_on_connect:
            try:
                self._probe(endpoint)
            except TransportError:
                self.disconnect()
                raise

    def _client_kwargs(self, url: httpx.URL, options: ConnectOptions) -> dict[str, Any]:
        """Build keyword arguments for httpx.Client."""
        kwargs: dict[str, Any] = {
            "base_url": url,
            "timeout": self.config.timeout,
            "follow_redirects": self.config.follow_redirects,
            "verify": self.config.verify_ssl,
            "headers": {
                "User-Agent": self.config.user_agent,
                **self.config.extra_headers,
            },
        }

        if options.auth is not None:
            kwargs["auth"] = httpx.BasicAuth(
                options.auth.username or "",
                options.auth.password or "",
            )

        if self._transport is not None:
            kwargs["transport"] = self._transport
        elif options.proxy is not None and not options.proxy.bypasses(url.host):
            kwargs["proxy"] = self._build_proxy(options.proxy)

        return kwargs

    @staticmethod
    def _build_proxy(proxy: ProxyInfo) -> httpx.Proxy:
        if proxy.username:
            return httpx.Proxy(proxy.url, auth=(proxy.username, proxy.password or ""))
        return httpx.Proxy(proxy.url)

    def _probe(self, endpoint: Endpoint) -> None:
        """Check the endpoint answers and accepts our credentials."""
        client = self._require_client()
        try:
            response = client.head("")
        except httpx.HTTPError as e:
            raise TransportConnectionError(f"Cannot reach {endpoint}: {e}") from e

        if response.status_code in (401, 407):
            raise AuthenticationError(
                f"Authentication failed for {endpoint}: HTTP {response.status_code}"
            )
        logger.debug(f"Probe of {endpoint} returned HTTP {response.status_code}")

    def _require_client(self) -> httpx.Client:
        if self._client is None:
            raise TransferFailedError("HTTP transport is not connected. Call connect() first.")
        return self._client

    def _resource_url(self, name: str) -> str:
        client = self._require_client()
        return f"{client.base_url}{name.lstrip('/')}"

    def get(self, name: str, destination: Path) -> None:
        """Stream the named resource into destination."""
        client = self._require_client()
        destination = Path(destination)
        url = self._resource_url(name)
        total = 0

        try:
            with client.stream("GET", name.lstrip("/")) as response:
                self._check_status(url, response)
                destination.parent.mkdir(parents=True, exist_ok=True)
                self._fire_started(name, destination)

                with open(destination, "wb") as f:
                    for chunk in response.iter_bytes(self.config.chunk_size):
                        f.write(chunk)
                        total += len(chunk)
                        self._fire_progress(name, len(chunk))

        except TransportError as e:
            self._fire_error(name, e)
            raise
        except httpx.HTTPError as e:
            error = TransferFailedError(f"Transfer of {url} failed: {e}")
            self._fire_error(name, error)
            raise error from e
        except OSError as e:
            error = TransferFailedError(f"Writing {destination} failed: {e}")
            self._fire_error(name, error)
            raise error from e

        self._fire_completed(name, total)
        logger.debug(f"Fetched {url} ({total} bytes)")

    @staticmethod
    def _check_status(url: str, response: httpx.Response) -> None:
        """Raise the transport exception matching a non-2xx status."""
        status = response.status_code
        if 200 <= status < 300:
            return
        if status in (401, 403):
            raise AuthorizationError(f"Access denied to {url}. Return code is: {status}")
        if status in (404, 410):
            raise ResourceDoesNotExistError(f"Resource missing at {url}")
        raise TransferFailedError(f"Failed to transfer file {url}. Return code is: {status}")

    def disconnect(self) -> None:
        """Close the session client. No-op when not connected."""
        if self._client is None:
            return

        client, self._client = self._client, None
        try:
            client.close()
        except httpx.HTTPError as e:
            raise TransportConnectionError(f"Error closing HTTP session: {e}") from e
        logger.info("Disconnected HTTP transport")
