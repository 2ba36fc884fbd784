"""Configuration loading from environment variables and files."""

import logging
import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

from notifier.adapters.driven.transport.http import display_url
from notifier.adapters.driven.transport.registry import TransportKind, transport_for

__all__ = ["Settings", "load_settings", "DEFAULT_TIMEOUT_MS"]

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30_000


class Settings(BaseModel):
    """Runtime configuration for one notification delivery.

    Attributes:
        protocol: Transport used for delivery.
        endpoint_url: Destination (``host:port`` for UDP/TCP, URL for HTTP).
        timeout_ms: Connect/read timeout in milliseconds (must be positive).
        payload_format: ``json`` or ``xml``; selects the HTTP content type.
        secret_key: Optional shared secret used to sign HTTP payloads.
        payload_file_path: Path to the file holding the payload.
        payload: Payload bytes (loaded from file).
    """

    protocol: TransportKind = Field(
        default=TransportKind.HTTP, description="Transport used for delivery."
    )
    endpoint_url: str = Field(..., description="Destination the payload is sent to.")
    timeout_ms: int = Field(
        default=DEFAULT_TIMEOUT_MS, gt=0, description="Connect/read timeout in milliseconds."
    )
    payload_format: Literal["json", "xml"] = Field(
        default="json", description="Payload format, selects the content type."
    )
    secret_key: str | None = Field(
        default=None,
        description="Optional shared secret. If not set, payloads are not signed.",
    )
    payload_file_path: str = Field(..., description="Path to file containing the payload")
    payload: bytes = Field(default=b"", description="Payload bytes (populated from file).")

    @field_validator("protocol", mode="before")
    @classmethod
    def validate_protocol(cls, v: object) -> TransportKind:
        """Accept protocol names case-insensitively.

        Raises:
            ValueError: If the protocol is not UDP, TCP or HTTP.
        """
        return TransportKind.parse(v)  # type: ignore[arg-type]

    @field_validator("payload_format", mode="before")
    @classmethod
    def normalize_payload_format(cls, v: object) -> object:
        return v.strip().lower() if isinstance(v, str) else v

    @model_validator(mode="after")
    def validate_endpoint_url(self) -> "Settings":
        """Validate the endpoint with the chosen transport's own rules.

        Raises:
            ValueError: If the endpoint is malformed for the transport.
        """
        transport_for(self.protocol).validate_url(self.endpoint_url)
        return self

    @property
    def is_json(self) -> bool:
        return self.payload_format == "json"

    def load_payload(self) -> None:
        """Load the payload bytes from file.

        Raises:
            ValueError: If file not found, unreadable or empty.
        """
        try:
            with open(self.payload_file_path, "rb") as f:
                data = f.read()
        except FileNotFoundError as e:
            raise ValueError(f"Payload file not found: {self.payload_file_path}") from e
        except OSError as e:
            raise ValueError(f"Payload file cannot be read: {self.payload_file_path}: {e}") from e

        if not data:
            raise ValueError(f"Payload file is empty: {self.payload_file_path}")

        self.payload = data
        logger.debug(f"Loaded {len(data)} payload bytes from {self.payload_file_path}")


def load_settings() -> Settings:
    """Load and validate settings from environment and files.

    Required environment variables:
    - ENDPOINT_URL: Destination of the notification.
    - PAYLOAD_FILE_PATH: Path to the payload file.

    Optional:
    - PROTOCOL: UDP, TCP or HTTP (default HTTP).
    - TIMEOUT_MS: Positive integer timeout in milliseconds (default 30000).
    - PAYLOAD_FORMAT: json or xml (default json).
    - SECRET_KEY: Shared secret used to sign HTTP payloads.

    Returns:
        Validated Settings object with the payload loaded.

    Raises:
        RuntimeError: If required env vars missing or invalid.
        ValueError: If configuration is invalid.
    """
    try:
        endpoint_url = os.environ["ENDPOINT_URL"]
        payload_path = os.environ["PAYLOAD_FILE_PATH"]
    except KeyError as e:
        raise RuntimeError(f"Missing required environment variable: {e.args[0]}") from e

    timeout_raw = os.getenv("TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS))
    try:
        timeout_ms = int(timeout_raw)
        if timeout_ms <= 0:
            raise ValueError("Must be positive")
    except ValueError as e:
        raise RuntimeError(f"TIMEOUT_MS must be a positive integer (got: {timeout_raw})") from e

    settings = Settings(
        protocol=os.getenv("PROTOCOL", TransportKind.HTTP.value),
        endpoint_url=endpoint_url,
        timeout_ms=timeout_ms,
        payload_format=os.getenv("PAYLOAD_FORMAT", "json"),
        secret_key=os.getenv("SECRET_KEY") or None,
        payload_file_path=payload_path,
    )

    settings.load_payload()

    logger.info(
        f"Notifier configured: protocol={settings.protocol.value}, "
        f"endpoint={display_url(settings.endpoint_url)}, "
        f"timeout={settings.timeout_ms}ms, "
        f"format={settings.payload_format}, "
        f"signing={'enabled' if settings.secret_key else '<disabled>'}"
    )

    return settings
