"""Behaviour shared by every delivery transport."""

from __future__ import annotations

import asyncio
import socket
from abc import ABC, abstractmethod
from typing import Any

from notifier.core.endpoint import parse_endpoint
from notifier.core.errors import EndpointParseError, ResolutionError
from notifier.ports.transport import TransportPort

__all__ = ["BaseTransport", "is_blank", "invalid_url_prefix", "resolve", "to_seconds"]


def is_blank(value: str | None) -> bool:
    """Return True for None, empty or whitespace-only strings."""
    return value is None or not value.strip()


def invalid_url_prefix(url: str | None) -> str:
    """Build the ``Invalid URL '...'. `` prefix of validation messages."""
    return "" if is_blank(url) else f"Invalid URL '{url}'. "


def to_seconds(timeout_ms: int) -> float | None:
    """Convert a millisecond timeout to seconds; zero or less means no limit."""
    if timeout_ms <= 0:
        return None
    return timeout_ms / 1000


async def resolve(hostname: str, port: int, sock_type: int) -> tuple[int, int, Any]:
    """Resolve a hostname for the given socket type.

    Args:
        hostname: Name or literal address to resolve; IPv6 literals may be
            enclosed in brackets, as in ``[::1]``.
        port: Port to attach to the resolved address.
        sock_type: ``socket.SOCK_DGRAM`` or ``socket.SOCK_STREAM``.

    Returns:
        Tuple of (address family, protocol, socket address) of the first result.

    Raises:
        ResolutionError: If the name does not resolve.
    """
    host = hostname
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]

    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(host, port, type=sock_type)
    except (socket.gaierror, UnicodeError) as e:
        raise ResolutionError(f"Cannot resolve host '{hostname}': {e}") from e
    if not infos:
        raise ResolutionError(f"Cannot resolve host '{hostname}': no addresses")

    family, _, proto, _, sockaddr = infos[0]
    return family, proto, sockaddr


class BaseTransport(TransportPort, ABC):
    """Base class of the UDP, TCP and HTTP transports.

    Subclasses implement the ``_send`` coroutine; ``send`` runs it on a
    private event loop so every delivery is a blocking call for the caller.
    ``send`` must therefore not be called from a running event loop.
    """

    def validate_url(self, url: str) -> None:
        """Check that the destination has the ``hostname:port`` shape.

        Raises:
            EndpointParseError: Naming the offending destination.
        """
        try:
            parse_endpoint(url)
        except EndpointParseError as e:
            raise EndpointParseError(
                f"{invalid_url_prefix(url)}Use hostname:port for endpoint URL"
            ) from e

    def send(
        self,
        url: str,
        data: bytes,
        timeout_ms: int,
        is_json: bool,
        secret_key: str | None = None,
    ) -> None:
        asyncio.run(self._send(url, data, timeout_ms, is_json, secret_key))

    @abstractmethod
    async def _send(
        self,
        url: str,
        data: bytes,
        timeout_ms: int,
        is_json: bool,
        secret_key: str | None,
    ) -> None:
        """Deliver one payload on the current event loop."""
        raise NotImplementedError
