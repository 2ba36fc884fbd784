"""Proxy settings read from the process environment."""

import os

from notifier.ports.proxy import ProxySettingsPort

__all__ = ["EnvProxySettings", "HTTP_PROXY_ENV"]

HTTP_PROXY_ENV = "http_proxy"


class EnvProxySettings(ProxySettingsPort):
    """Reads ``http_proxy`` from the environment at every call.

    Looking it up lazily means a delivery always sees the current value,
    including one loaded from ``.env`` after construction.
    """

    def __init__(self, variable: str = HTTP_PROXY_ENV) -> None:
        self.variable = variable

    def http_proxy(self) -> str | None:
        return os.environ.get(self.variable) or None
