"""Transport port definition (interface)."""

from __future__ import annotations

from typing import Protocol

__all__ = ["TransportPort"]


class TransportPort(Protocol):
    """Capability shared by every delivery transport.

    Callers run ``validate_url`` first so configuration mistakes surface
    without a network side effect, then ``send``.
    """

    def validate_url(self, url: str) -> None:
        """Check that the destination is usable by this transport.

        Args:
            url: Destination string.

        Raises:
            NotifierError: If the destination is malformed.
        """
        ...

    def send(
        self,
        url: str,
        data: bytes,
        timeout_ms: int,
        is_json: bool,
        secret_key: str | None = None,
    ) -> None:
        """Deliver one payload, blocking until it has been handed off.

        Args:
            url: Destination string.
            data: Payload bytes.
            timeout_ms: Connect/read timeout in milliseconds.
            is_json: Selects the JSON (True) or XML (False) content type.
            secret_key: Optional shared secret used to sign the payload.

        Raises:
            NotifierError: On validation, transport or signing failures.
        """
        ...
