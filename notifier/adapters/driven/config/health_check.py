"""Configuration check for container orchestration."""

import logging

from notifier.adapters.driven.config.settings import load_settings
from notifier.adapters.driven.logging.logging_config import configure_logs
from notifier.adapters.driven.transport.http import display_url
from notifier.adapters.driven.transport.registry import transport_for
from notifier.core.errors import NotifierError

__all__ = ["main"]

logger = logging.getLogger(__name__)


def main() -> int:
    """Validate delivery configuration without sending anything.

    Validates:
    - Required environment variables are set.
    - Payload file exists and is not empty.
    - Endpoint is accepted by the configured protocol's transport.

    Returns:
        0 if healthy, 1 if unhealthy.
    """
    configure_logs()

    try:
        settings = load_settings()
    except (RuntimeError, ValueError) as exc:
        logger.error(f"Notifier healthcheck FAILED: {exc}")
        return 1

    try:
        transport_for(settings.protocol).validate_url(settings.endpoint_url)
    except NotifierError as exc:
        logger.error(f"Notifier healthcheck FAILED for {settings.protocol.value}: {exc}")
        return 1

    logger.info(
        f"Notifier healthcheck OK: {settings.protocol.value} "
        f"endpoint {display_url(settings.endpoint_url)}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
