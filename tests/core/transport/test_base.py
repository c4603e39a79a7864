"""Tests for transport session values and listener plumbing."""

import logging

from repofetch.core.transport.base import AuthInfo, Endpoint, ProxyInfo
from repofetch.core.transport.file import FileTransport
from repofetch.core.transport.listener import LoggingTransferListener, TransferListener


class TestEndpoint:
    def test_str_contains_id_and_url(self):
        endpoint = Endpoint("central", "https://repo.example.org/maven2")

        assert str(endpoint) == "central (https://repo.example.org/maven2)"

    def test_equality(self):
        assert Endpoint("a", "http://x") == Endpoint("a", "http://x")


class TestAuthInfo:
    def test_repr_hides_password(self):
        assert "secret" not in repr(AuthInfo("deployer", "secret"))


class TestProxyInfo:
    def test_url(self):
        assert ProxyInfo("proxy.local", 3128).url == "http://proxy.local:3128"
        assert ProxyInfo("proxy.local", 1080, protocol="socks5").url == "socks5://proxy.local:1080"

    def test_bypasses(self):
        proxy = ProxyInfo("proxy.local", 3128, non_proxy_hosts="localhost | *.Internal")

        assert proxy.bypasses("localhost")
        assert proxy.bypasses("build.internal")
        assert not proxy.bypasses("repo.example.org")
        assert not proxy.bypasses(None)

    def test_no_patterns_never_bypasses(self):
        assert not ProxyInfo("proxy.local", 3128).bypasses("localhost")


class TestListenerRegistration:
    def test_add_is_idempotent(self):
        transport = FileTransport()
        listener = TransferListener()

        transport.add_transfer_listener(listener)
        transport.add_transfer_listener(listener)

        assert transport.listeners == (listener,)

    def test_remove(self):
        transport = FileTransport()
        listener = TransferListener()
        transport.add_transfer_listener(listener)

        transport.remove_transfer_listener(listener)
        transport.remove_transfer_listener(listener)

        assert transport.listeners == ()


def test_logging_listener(caplog):
    listener = LoggingTransferListener(logging.getLogger("repofetch.test"))

    with caplog.at_level(logging.DEBUG, logger="repofetch.test"):
        listener.transfer_completed("a.jar", 10)
        listener.transfer_error("b.jar", RuntimeError("boom"))
        listener.debug("Resource c.jar does not exist; gone")

    messages = [r.getMessage() for r in caplog.records]
    assert messages == [
        "Downloaded a.jar (10 bytes)",
        "Transfer of b.jar failed: boom",
        "Resource c.jar does not exist; gone",
    ]
