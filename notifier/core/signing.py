"""HMAC-SHA1 payload signatures sent as bearer credentials."""

import hashlib
import hmac

from notifier.core.errors import SigningError

__all__ = ["sign", "render_hex"]


def render_hex(mac: bytes) -> str:
    """Render a MAC as a big-endian unsigned integer in lowercase hex.

    Leading zero bytes disappear in the integer rendering; when that leaves an
    odd number of digits a single ``0`` is prepended.

    Args:
        mac: Raw MAC output.

    Returns:
        Even-length lowercase hex string.
    """
    digest = format(int.from_bytes(mac, "big"), "x")
    if len(digest) % 2 != 0:
        digest = "0" + digest
    return digest


def sign(payload_text: str, secret_key: str) -> str:
    """Compute the bearer signature of a payload.

    Args:
        payload_text: Payload decoded as text.
        secret_key: Shared secret used as the HMAC key.

    Returns:
        Hex signature, see ``render_hex``.

    Raises:
        SigningError: If key or payload cannot be encoded or the MAC fails.
    """
    try:
        key = secret_key.encode("utf-8")
        message = payload_text.encode("utf-8")
        mac = hmac.new(key, message, hashlib.sha1).digest()
    except (AttributeError, TypeError, UnicodeEncodeError, ValueError) as e:
        raise SigningError(f"Cannot sign payload: {e}") from e
    return render_hex(mac)
