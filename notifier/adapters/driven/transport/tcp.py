"""TCP transport: connect, write the payload, close."""

from __future__ import annotations

import asyncio
import logging
import socket

from notifier.adapters.driven.transport.base import BaseTransport, resolve, to_seconds
from notifier.core.endpoint import parse_endpoint
from notifier.core.errors import ConnectError, TransportIOError

__all__ = ["TcpTransport"]

logger = logging.getLogger(__name__)


class TcpTransport(BaseTransport):
    """Writes the raw payload over a fresh stream connection.

    The timeout bounds both the connect and the write. No response is read:
    the write side is half-closed once the payload is flushed, then the
    connection is closed.
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
        _, _, sockaddr = await resolve(endpoint.hostname, endpoint.port, socket.SOCK_STREAM)
        timeout = to_seconds(timeout_ms)

        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(sockaddr[0], sockaddr[1]), timeout
            )
        except asyncio.TimeoutError as e:
            raise ConnectError(f"Timed out connecting to '{url}' after {timeout_ms} ms") from e
        except OSError as e:
            raise ConnectError(f"Cannot connect to '{url}': {e}") from e

        try:
            writer.write(data)
            await asyncio.wait_for(writer.drain(), timeout)
            if writer.can_write_eof():
                writer.write_eof()
            writer.close()
            await writer.wait_closed()
        except (OSError, asyncio.TimeoutError) as e:
            writer.transport.abort()
            raise TransportIOError(f"Failed writing to '{url}': {e}") from e

        logger.debug(f"TCP payload of {len(data)} bytes written to {url}")
