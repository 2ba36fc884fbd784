"""HTTP transport with proxy support, payload signing and 307 handling."""

from __future__ import annotations

import asyncio
import base64
import logging
from http import HTTPStatus

import aiohttp
from aiohttp import ClientTimeout, hdrs
from yarl import URL

from notifier.adapters.driven.config.proxy import EnvProxySettings
from notifier.adapters.driven.transport.base import (
    BaseTransport,
    invalid_url_prefix,
    is_blank,
    to_seconds,
)
from notifier.core.errors import (
    ConnectError,
    InvalidArgumentError,
    MalformedUrlError,
    SigningError,
    TooManyRedirectsError,
    TransportIOError,
)
from notifier.core.signing import sign
from notifier.ports.proxy import DEFAULT_PROXY_PORT, ProxyConfig, ProxySettingsPort

__all__ = [
    "HttpTransport",
    "MAX_REDIRECTS",
    "basic_authorization",
    "content_type",
    "display_url",
    "parse_absolute_url",
    "parse_proxy",
    "parse_url",
]

logger = logging.getLogger(__name__)

MAX_REDIRECTS = 5


def parse_absolute_url(value: str) -> URL:
    """Parse a URL of any scheme and structure.

    ``ftp://x``, ``file:///tmp/x`` and ``mailto:a@b`` all qualify; only a
    scheme followed by a non-empty remainder is required.

    Raises:
        MalformedUrlError: If the value is blank, unparsable, has no scheme
            or nothing after it.
    """
    if is_blank(value):
        raise MalformedUrlError("URL is empty")
    try:
        url = URL(value)
    except (TypeError, ValueError) as e:
        raise MalformedUrlError(f"Invalid URL '{value}': {e}") from e
    if not url.scheme or not (url.raw_host or url.raw_path or url.raw_query_string):
        raise MalformedUrlError(f"Invalid URL '{value}': a scheme and a location are required")
    return url


def parse_url(value: str) -> URL:
    """Parse an absolute URL that names a host (any scheme).

    Raises:
        MalformedUrlError: If the value is blank, unparsable or has no
            scheme or host.
    """
    url = parse_absolute_url(value)
    if not url.host:
        raise MalformedUrlError(f"Invalid URL '{value}': scheme and host are required")
    return url


def _require_http(url: URL, raw: str) -> None:
    if not url.scheme.startswith("http"):
        raise InvalidArgumentError(f"Not an http(s) url: {raw}")


def parse_proxy(value: str) -> ProxyConfig:
    """Turn an ``http_proxy`` value into a proxy host and port.

    Raises:
        MalformedUrlError: If the value is not a URL.
        InvalidArgumentError: If its scheme is not HTTP-family.
    """
    url = parse_url(value)
    _require_http(url, value)
    return ProxyConfig(host=url.host, port=url.explicit_port or DEFAULT_PROXY_PORT)


def content_type(is_json: bool) -> str:
    return f"application/{'json' if is_json else 'xml'};charset=UTF-8"


def basic_authorization(url: URL) -> str | None:
    """Basic credentials from the user info embedded in the URL.

    The user info is encoded exactly as written: ``u`` stays ``u`` and
    percent escapes are not decoded.
    """
    if url.raw_user is None:
        return None
    userinfo = url.raw_user if url.raw_password is None else f"{url.raw_user}:{url.raw_password}"
    return f"Basic {base64.b64encode(userinfo.encode('utf-8')).decode('ascii')}"


def _display(url: URL) -> str:
    """URL as safe to log: credentials removed."""
    return str(url.with_user(None))


def display_url(raw: str) -> str:
    """Destination string as safe to log.

    Credentials are removed from absolute URLs; anything else is returned as is.
    """
    try:
        url = URL(raw)
    except (TypeError, ValueError):
        return raw
    return _display(url) if url.host else raw


class HttpTransport(BaseTransport):
    """POSTs the payload to an HTTP(S) URL.

    Features:
    - Optional HTTP proxy taken from ``http_proxy``.
    - Basic auth from credentials embedded in the URL.
    - HMAC-SHA1 bearer signature when a secret key is given (replaces Basic).
    - Follows ``307 Temporary Redirect`` up to ``MAX_REDIRECTS`` hops,
      resending the identical request; other statuses end the delivery.
    """

    def __init__(
        self,
        proxy_settings: ProxySettingsPort | None = None,
        max_redirects: int = MAX_REDIRECTS,
    ) -> None:
        """Initialize HTTP transport.

        Args:
            proxy_settings: Source of the proxy URL; defaults to the
                ``http_proxy`` environment variable.
            max_redirects: Maximum number of 307 responses followed per send.
        """
        self.proxy_settings = proxy_settings if proxy_settings is not None else EnvProxySettings()
        self.max_redirects = max_redirects

    def validate_url(self, url: str) -> None:
        """Check that the destination is a well-formed URL.

        Any scheme is accepted here; ``send`` rejects non-HTTP schemes.

        Raises:
            MalformedUrlError: Naming the offending destination.
        """
        try:
            parse_absolute_url(url)
        except MalformedUrlError as e:
            raise MalformedUrlError(
                f"{invalid_url_prefix(url)}Use http://hostname:port/path for endpoint URL"
            ) from e

    def _proxy_url(self) -> URL | None:
        raw = self.proxy_settings.http_proxy()
        if is_blank(raw):
            return None
        proxy = parse_proxy(raw)
        logger.debug(f"Using HTTP proxy {proxy.host}:{proxy.port}")
        return URL.build(scheme="http", host=proxy.host, port=proxy.port)

    def _target_url(self, raw: str) -> URL:
        url = parse_url(raw)
        _require_http(url, raw)
        return url

    @staticmethod
    def _signature(data: bytes, secret_key: str | None) -> str | None:
        if is_blank(secret_key):
            return None
        try:
            payload_text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SigningError(f"Payload is not valid UTF-8 text: {e}") from e
        return sign(payload_text, secret_key)

    async def _send(
        self,
        url: str,
        data: bytes,
        timeout_ms: int,
        is_json: bool,
        secret_key: str | None,
    ) -> None:
        target = self._target_url(url)
        proxy = self._proxy_url()
        signature = self._signature(data, secret_key)

        timeout = to_seconds(timeout_ms)
        client_timeout = ClientTimeout(total=None, sock_connect=timeout, sock_read=timeout)
        # Connections are never reused, not even across redirect hops
        connector = aiohttp.TCPConnector(force_close=True)

        async with aiohttp.ClientSession(connector=connector, timeout=client_timeout) as session:
            for _ in range(self.max_redirects + 1):
                location = await self._post_once(session, target, data, is_json, signature, proxy)
                if location is None:
                    return
                _require_http(location, str(location))
                logger.info(
                    f"Following temporary redirect from {_display(target)} to {_display(location)}"
                )
                target = location

        raise TooManyRedirectsError(
            f"Too many redirects (> {self.max_redirects}) delivering to '{display_url(url)}'"
        )

    async def _post_once(
        self,
        session: aiohttp.ClientSession,
        target: URL,
        data: bytes,
        is_json: bool,
        signature: str | None,
        proxy: URL | None,
    ) -> URL | None:
        """Send a single POST and release its connection.

        Returns:
            Absolute redirect target for a 307 response, None otherwise.

        Raises:
            ConnectError: If the connection cannot be established.
            TransportIOError: On any other network or protocol failure.
        """
        headers = {hdrs.CONTENT_TYPE: content_type(is_json)}
        basic = basic_authorization(target)
        if basic is not None:
            headers[hdrs.AUTHORIZATION] = basic
        if signature is not None:
            headers[hdrs.AUTHORIZATION] = f"Bearer {signature}"

        shown = _display(target)
        try:
            async with session.post(
                target.with_user(None),
                data=data,
                headers=headers,
                proxy=proxy,
                allow_redirects=False,
            ) as resp:
                logger.debug(f"HTTP delivery to {shown} returned status {resp.status}")
                if resp.status != HTTPStatus.TEMPORARY_REDIRECT:
                    return None
                location = resp.headers.get(hdrs.LOCATION)
        except aiohttp.ClientConnectorError as e:
            raise ConnectError(f"Cannot connect to '{shown}': {e}") from e
        except aiohttp.ConnectionTimeoutError as e:
            raise ConnectError(f"Timed out connecting to '{shown}'") from e
        except asyncio.TimeoutError as e:
            raise TransportIOError(f"Timed out delivering to '{shown}'") from e
        except aiohttp.ClientError as e:
            raise TransportIOError(f"HTTP delivery to '{shown}' failed: {e}") from e

        if not location:
            raise TransportIOError(f"Redirect from '{shown}' has no Location header")
        try:
            redirect = target.join(URL(location))
        except ValueError as e:
            raise TransportIOError(f"Invalid redirect location '{location}' from '{shown}'") from e
        if not redirect.host:
            raise TransportIOError(f"Invalid redirect location '{location}' from '{shown}'")
        return redirect
