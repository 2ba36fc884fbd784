"""Console logging setup for notification delivery."""

import logging
import os

__all__ = ["configure_logs", "LOG_FORMAT"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%d/%m/%y %H:%M:%S"


def configure_logs(app_level: str | None = None) -> None:
    """Configure console logging.

    Sets up:
    - Root logger at INFO level with one stderr handler.
    - Framework loggers (aiohttp, asyncio) at WARNING level.
    - Application loggers (notifier) at ``app_level``, else ``LOG_LEVEL``
      from the environment, else DEBUG.

    Args:
        app_level: Level name for the application loggers.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.addHandler(handler)

    # Framework loggers only report problems
    for name in ("aiohttp", "asyncio"):
        logging.getLogger(name).setLevel(logging.WARNING)

    level_name = (app_level or os.getenv("LOG_LEVEL") or "DEBUG").upper()
    level = logging.getLevelName(level_name)
    logging.getLogger("notifier").setLevel(level if isinstance(level, int) else logging.DEBUG)
