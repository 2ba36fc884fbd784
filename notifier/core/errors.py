"""Error taxonomy for notification delivery."""

__all__ = [
    "NotifierError",
    "EndpointParseError",
    "InvalidArgumentError",
    "MalformedUrlError",
    "ResolutionError",
    "TransportIOError",
    "ConnectError",
    "TooManyRedirectsError",
    "SigningError",
]


class NotifierError(Exception):
    """Base class for every error raised by validation or delivery."""


class EndpointParseError(NotifierError, ValueError):
    """Destination does not have the ``host:port`` shape."""


class InvalidArgumentError(NotifierError, ValueError):
    """Target or proxy URL scheme is not HTTP-family."""


class MalformedUrlError(NotifierError, ValueError):
    """Destination is not a syntactically valid URL."""


class ResolutionError(NotifierError, OSError):
    """Hostname cannot be resolved to a network address."""


class TransportIOError(NotifierError, OSError):
    """Transport-level failure while connecting, writing or reading."""


class ConnectError(TransportIOError):
    """Connection refused or not established within the timeout."""


class TooManyRedirectsError(TransportIOError):
    """Redirect chain exceeded the configured number of hops."""


class SigningError(NotifierError):
    """Payload signature could not be computed."""
