"""Process-wide logging setup."""

import logging
import sys
from typing import Optional

from recurra_config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite")


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging from settings (or an explicit ``level``)."""
    settings = get_settings()
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    # SQL echo is controlled by database_echo, not the root level
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(
            logging.INFO if settings.database_echo else logging.WARNING,
        )
