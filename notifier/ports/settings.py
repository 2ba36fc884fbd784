"""Settings port definition (DTO)."""

from dataclasses import dataclass

__all__ = ["SettingsPort"]


@dataclass
class SettingsPort:
    """Runtime settings for a single delivery.

    Decouples the delivery entrypoint from concrete configuration sources,
    enabling easy testing and implementation swapping.

    Attributes:
        protocol: Transport name (UDP, TCP or HTTP).
        endpoint_url: Destination the payload is sent to.
        payload: Raw bytes to deliver.
        timeout_ms: Connect/read timeout in milliseconds.
        is_json: True for JSON payloads, False for XML.
        secret_key: Optional shared secret used to sign HTTP payloads.
    """

    protocol: str
    endpoint_url: str
    payload: bytes
    timeout_ms: int = 30_000
    is_json: bool = True
    secret_key: str | None = None
