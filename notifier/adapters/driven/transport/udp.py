"""UDP transport: one fire-and-forget datagram per delivery."""

from __future__ import annotations

import asyncio
import logging
import socket

from notifier.adapters.driven.transport.base import BaseTransport, resolve
from notifier.core.endpoint import parse_endpoint
from notifier.core.errors import TransportIOError

__all__ = ["UdpTransport"]

logger = logging.getLogger(__name__)


class _DatagramSender(asyncio.DatagramProtocol):
    """Tracks send errors and socket closure of a datagram endpoint."""

    def __init__(self) -> None:
        self.closed: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self.error: Exception | None = None

    def error_received(self, exc: Exception) -> None:
        self.error = exc

    def connection_lost(self, exc: Exception | None) -> None:
        if not self.closed.done():
            self.closed.set_result(None)


class UdpTransport(BaseTransport):
    """Sends the payload as a single datagram to ``hostname:port``.

    No acknowledgement, no retry; the timeout does not apply.
    """

    async def _send(
        self,
        url: str,
        data: bytes,
        timeout_ms: int,
        is_json: bool,
        secret_key: str | None,
    ) -> None:
        endpoint = parse_endpoint(url)
        family, proto, sockaddr = await resolve(endpoint.hostname, endpoint.port, socket.SOCK_DGRAM)

        loop = asyncio.get_running_loop()
        try:
            transport, protocol = await loop.create_datagram_endpoint(
                _DatagramSender, family=family, proto=proto
            )
        except OSError as e:
            raise TransportIOError(f"Cannot open datagram socket for '{url}': {e}") from e

        try:
            transport.sendto(data, sockaddr)
        finally:
            transport.close()
            await protocol.closed

        if protocol.error is not None:
            raise TransportIOError(
                f"Failed sending datagram to '{url}': {protocol.error}"
            ) from protocol.error

        logger.debug(f"UDP datagram of {len(data)} bytes sent to {url}")
