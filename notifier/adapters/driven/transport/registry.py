"""Closed set of delivery transports and their lookup."""

from enum import Enum

from notifier.adapters.driven.transport.base import BaseTransport
from notifier.adapters.driven.transport.http import HttpTransport
from notifier.adapters.driven.transport.tcp import TcpTransport
from notifier.adapters.driven.transport.udp import UdpTransport
from notifier.ports.proxy import ProxySettingsPort

__all__ = ["TransportKind", "transport_for"]


class TransportKind(str, Enum):
    """Wire-level transport a payload is delivered with."""

    UDP = "UDP"
    TCP = "TCP"
    HTTP = "HTTP"

    @classmethod
    def parse(cls, value: "str | TransportKind") -> "TransportKind":
        """Look up a transport by case-insensitive name.

        Raises:
            ValueError: If the name is not UDP, TCP or HTTP.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as e:
            names = ", ".join(kind.value for kind in cls)
            raise ValueError(f"Unknown protocol '{value}' (expected one of: {names})") from e


def transport_for(
    kind: "str | TransportKind",
    proxy_settings: ProxySettingsPort | None = None,
) -> BaseTransport:
    """Create the transport for a protocol name.

    Args:
        kind: Transport name or kind.
        proxy_settings: Proxy source for the HTTP transport; ignored otherwise.

    Returns:
        New transport instance.
    """
    kind = TransportKind.parse(kind)
    if kind is TransportKind.UDP:
        return UdpTransport()
    if kind is TransportKind.TCP:
        return TcpTransport()
    return HttpTransport(proxy_settings=proxy_settings)
