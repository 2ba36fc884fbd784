"""Parsing of ``host:port`` destinations."""

from dataclasses import dataclass

from notifier.core.errors import EndpointParseError

__all__ = ["ParsedEndpoint", "parse_endpoint", "MAX_PORT"]

MAX_PORT = 65535


@dataclass(slots=True, frozen=True)
class ParsedEndpoint:
    """Connection parameters derived from a ``host:port`` destination.

    Attributes:
        hostname: Everything before the last colon (never empty).
        port: Numeric suffix after the last colon (1..65535).
    """

    hostname: str
    port: int


def parse_endpoint(destination: str) -> ParsedEndpoint:
    """Split a destination on its last colon into hostname and port.

    Args:
        destination: String such as ``example.com:9999``.

    Returns:
        Parsed hostname and port.

    Raises:
        EndpointParseError: If there is no colon, the hostname is empty or
            the suffix is not a decimal port number.
    """
    if not isinstance(destination, str):
        raise EndpointParseError(f"Destination must be a string (got: {destination!r})")

    hostname, sep, port_text = destination.rpartition(":")
    if not sep:
        raise EndpointParseError(f"Missing ':port' in destination '{destination}'")
    if not hostname:
        raise EndpointParseError(f"Missing hostname in destination '{destination}'")
    if not (port_text.isascii() and port_text.isdigit()):
        raise EndpointParseError(f"Port is not a decimal number in destination '{destination}'")

    port = int(port_text, 10)
    if not 0 < port <= MAX_PORT:
        raise EndpointParseError(f"Port out of range in destination '{destination}'")

    return ParsedEndpoint(hostname=hostname, port=port)
