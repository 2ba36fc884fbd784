"""Proxy port definition (interface and DTO)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

__all__ = ["DEFAULT_PROXY_PORT", "ProxyConfig", "ProxySettingsPort"]

DEFAULT_PROXY_PORT = 80


@dataclass(slots=True, frozen=True)
class ProxyConfig:
    """HTTP proxy that outbound HTTP deliveries go through.

    Attributes:
        host: Proxy hostname.
        port: Proxy port (80 when the proxy URL has none).
    """

    host: str
    port: int = DEFAULT_PROXY_PORT


class ProxySettingsPort(Protocol):
    """Source of the process-wide proxy setting.

    Keeps the HTTP transport independent of where the setting lives, so
    tests can inject a fixed value instead of touching the environment.
    """

    def http_proxy(self) -> str | None:
        """Return the raw proxy URL, or None/empty for a direct connection."""
        ...
