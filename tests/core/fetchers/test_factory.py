"""Tests for FetcherFactory and the module-level helpers."""

import pytest

from repofetch.core.config.loader import ConfigurationError, get_config
from repofetch.core.fetchers import factory as factory_module
from repofetch.core.fetchers.factory import (
    FetcherFactory,
    build_http_config,
    get_resource_fetcher,
    reset_fetcher_factory,
)
from repofetch.core.fetchers.transport_fetcher import TransportResourceFetcher
from repofetch.core.transport.base import AuthInfo, ProxyInfo
from repofetch.core.transport.file import FileTransport
from repofetch.core.transport.http import HttpTransport


class TestFetcherFactory:
    """Tests for protocol resolution."""

    @pytest.fixture
    def factory(self):
        return FetcherFactory.from_config({})

    def test_default_protocols(self, factory):
        assert factory.protocols == ["file", "http", "https"]

    def test_default_protocol_is_http(self, factory, listener):
        fetcher = factory.get_resource_fetcher(listener)

        assert isinstance(fetcher, TransportResourceFetcher)
        assert isinstance(fetcher.transport, HttpTransport)
        assert fetcher.listener is listener
        assert fetcher.auth_info is None
        assert fetcher.proxy_info is None

    def test_passes_auth_and_proxy(self, factory):
        auth = AuthInfo("u", "p")
        proxy = ProxyInfo("proxy.local", 3128)

        fetcher = factory.get_resource_fetcher(None, auth, proxy, protocol="https")

        assert fetcher.auth_info is auth
        assert fetcher.proxy_info is proxy
        assert isinstance(fetcher.transport, HttpTransport)

    def test_file_protocol(self, factory):
        fetcher = factory.get_resource_fetcher(protocol="file")

        assert isinstance(fetcher.transport, FileTransport)

    def test_protocol_is_case_insensitive(self, factory):
        fetcher = factory.get_resource_fetcher(protocol="HTTPS")

        assert isinstance(fetcher.transport, HttpTransport)

    def test_each_fetcher_gets_own_transport(self, factory):
        first = factory.get_resource_fetcher()
        second = factory.get_resource_fetcher()

        assert first.transport is not second.transport

    def test_unknown_protocol(self, factory):
        with pytest.raises(ValueError, match="No transport for protocol: gopher"):
            factory.get_resource_fetcher(protocol="gopher")

    def test_register_custom_transport(self, factory, transport):
        factory.register("mem", lambda: transport)

        fetcher = factory.get_resource_fetcher(protocol="mem")

        assert fetcher.transport is transport
        assert "mem" in factory.protocols

    def test_http_settings_from_config(self):
        factory = FetcherFactory.from_config(
            {"http": {"timeout": "12.5", "user_agent": "test/1", "verify_ssl": "false"}}
        )

        transport = factory.get_transport("http")

        assert transport.config.timeout == 12.5
        assert transport.config.user_agent == "test/1"
        assert transport.config.verify_ssl is False

    def test_invalid_http_settings(self):
        with pytest.raises(ConfigurationError):
            FetcherFactory.from_config({"http": {"timeout": "soon"}})


def test_build_http_config_defaults():
    config = build_http_config({})

    assert config.timeout == 30.0
    assert config.follow_redirects is True
    assert config.probe_on_connect is False


class TestGlobalFactory:
    """Tests for get_resource_fetcher()."""

    @pytest.fixture(autouse=True)
    def _isolated(self, tmp_path, monkeypatch):
        (tmp_path / "fetcher.example.yaml").write_text(
            "fetcher:\n"
            "  http:\n"
            "    timeout: 5\n"
        )
        monkeypatch.setenv("REPOFETCH_CONFIG_DIR", str(tmp_path))
        get_config.cache_clear()
        reset_fetcher_factory()
        yield
        reset_fetcher_factory()
        get_config.cache_clear()

    def test_uses_config(self):
        fetcher = get_resource_fetcher()

        assert isinstance(fetcher.transport, HttpTransport)
        assert fetcher.transport.config.timeout == 5.0

    def test_factory_is_reused(self):
        get_resource_fetcher()
        first = factory_module._factory_instance

        get_resource_fetcher(protocol="https")

        assert factory_module._factory_instance is first
