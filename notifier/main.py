"""Application entrypoint."""

import logging

from notifier.adapters.driven.config.settings import load_settings
from notifier.adapters.driven.logging.logging_config import configure_logs
from notifier.adapters.driven.transport.http import display_url
from notifier.adapters.driven.transport.registry import transport_for
from notifier.core.errors import NotifierError
from notifier.ports.settings import SettingsPort
from notifier.ports.transport import TransportPort

__all__ = ["main", "deliver"]

logger = logging.getLogger(__name__)


def main() -> int:
    """Deliver one notification configured through the environment.

    Startup sequence:
    1. Configure logging.
    2. Load and validate configuration.
    3. Validate the endpoint for the chosen transport and send the payload.

    Returns:
        0 on success, 1 on configuration or delivery failure.
    """
    configure_logs()
    logger.info("Starting notification delivery...")

    try:
        config = load_settings()
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check PROTOCOL, ENDPOINT_URL, TIMEOUT_MS, PAYLOAD_FORMAT, "
            "PAYLOAD_FILE_PATH and that the payload file exists.",
            exc,
        )
        return 1

    # Wrap config into port so delivery depends on interface (hexagonal)
    settings_port = SettingsPort(
        protocol=config.protocol.value,
        endpoint_url=config.endpoint_url,
        payload=config.payload,
        timeout_ms=config.timeout_ms,
        is_json=config.is_json,
        secret_key=config.secret_key,
    )

    return deliver(settings_port, transport_for(settings_port.protocol))


def deliver(settings_port: SettingsPort, transport: TransportPort) -> int:
    """Validate the endpoint and send the payload once.

    Args:
        settings_port: Runtime settings.
        transport: Transport used for delivery.

    Returns:
        0 if the payload was delivered, 1 otherwise.
    """
    shown = display_url(settings_port.endpoint_url)
    try:
        transport.validate_url(settings_port.endpoint_url)
        transport.send(
            settings_port.endpoint_url,
            settings_port.payload,
            settings_port.timeout_ms,
            settings_port.is_json,
            settings_port.secret_key,
        )
    except NotifierError as e:
        logger.error(f"Delivery to {shown} failed: {e}")
        return 1

    logger.info(
        f"Delivered {len(settings_port.payload)} bytes to {shown} over {settings_port.protocol}"
    )
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except KeyboardInterrupt:
        logger.info("Delivery interrupted by user (Ctrl+C).")
        raise SystemExit(130) from None
