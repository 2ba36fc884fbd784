"""Tests for the TCP transport."""

import asyncio
import socket
import threading
from collections.abc import Iterator
from unittest.mock import AsyncMock, patch

import pytest

from notifier.adapters.driven.transport.tcp import TcpTransport
from notifier.core.errors import ConnectError, EndpointParseError

__all__ = []


class TcpSink:
    """Loopback server that records everything one client writes."""

    def __init__(self) -> None:
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.sock.bind(("127.0.0.1", 0))
        self.sock.listen(1)
        self.sock.settimeout(5)
        self.port: int = self.sock.getsockname()[1]
        self.received = bytearray()
        self.done = threading.Event()
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self) -> None:
        try:
            conn, _ = self.sock.accept()
        except OSError:
            return
        with conn:
            conn.settimeout(5)
            while chunk := conn.recv(4096):
                self.received.extend(chunk)
        self.done.set()

    def close(self) -> None:
        self.sock.close()
        self._thread.join(timeout=5)


@pytest.fixture
def tcp_sink() -> Iterator[TcpSink]:
    """Start a loopback TCP sink.

    Yields:
        Running sink.
    """
    sink = TcpSink()
    yield sink
    sink.close()


def test_tcp_send_writes_payload_and_closes(tcp_sink: TcpSink) -> None:
    """Full payload is written and the connection is closed afterwards."""
    TcpTransport().send(f"127.0.0.1:{tcp_sink.port}", b"\x01\x02", 500, False, "")

    assert tcp_sink.done.wait(timeout=5)
    assert bytes(tcp_sink.received) == b"\x01\x02"


def test_tcp_send_resolves_hostname(tcp_sink: TcpSink) -> None:
    """tcp-host:7000 is resolved before connecting."""
    fake_resolve = AsyncMock(
        return_value=(socket.AF_INET, socket.IPPROTO_TCP, ("127.0.0.1", tcp_sink.port))
    )

    with patch("notifier.adapters.driven.transport.tcp.resolve", fake_resolve):
        TcpTransport().send("tcp-host:7000", b"\x01\x02", 500, False, "")

    fake_resolve.assert_awaited_once_with("tcp-host", 7000, socket.SOCK_STREAM)
    assert tcp_sink.done.wait(timeout=5)
    assert bytes(tcp_sink.received) == b"\x01\x02"


def test_tcp_send_large_payload(tcp_sink: TcpSink) -> None:
    """Payloads larger than one socket buffer are written completely."""
    payload = bytes(range(256)) * 4096

    TcpTransport().send(f"127.0.0.1:{tcp_sink.port}", payload, 5000, True, "")

    assert tcp_sink.done.wait(timeout=5)
    assert bytes(tcp_sink.received) == payload


def test_tcp_send_connection_refused() -> None:
    """A closed port is reported as a connect error."""
    reserved = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    reserved.bind(("127.0.0.1", 0))
    port = reserved.getsockname()[1]
    reserved.close()

    with pytest.raises(ConnectError, match=f"127.0.0.1:{port}"):
        TcpTransport().send(f"127.0.0.1:{port}", b"x", 500, False, "")


def test_tcp_send_connect_timeout() -> None:
    """A connect that outlasts the timeout is reported as a connect error."""

    async def never_connects(*args: object, **kwargs: object) -> None:
        await asyncio.sleep(10)

    with (
        patch("notifier.adapters.driven.transport.tcp.asyncio.open_connection", never_connects),
        pytest.raises(ConnectError, match="Timed out"),
    ):
        TcpTransport().send("127.0.0.1:9", b"x", 50, False, "")


def test_tcp_send_rejects_malformed_destination() -> None:
    """Malformed destinations fail before any network activity."""
    with pytest.raises(EndpointParseError):
        TcpTransport().send("tcp-host", b"x", 500, False, "")
