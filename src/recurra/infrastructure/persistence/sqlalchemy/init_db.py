"""Database initialization entry points."""

import asyncio
import logging
import sys

from recurra.infrastructure.logging_config import configure_logging
from recurra.infrastructure.persistence.sqlalchemy.database import (
    create_tables,
    drop_tables,
    get_engine,
)
from recurra_config.settings import get_settings

logger = logging.getLogger(__name__)


def _display_url(database_url: str) -> str:
    return database_url.split("@")[-1] if "@" in database_url else database_url


async def _init_database() -> None:
    logger.info("Initializing database: %s", _display_url(get_settings().database_url))
    await create_tables()
    await get_engine().dispose()
    logger.info("Database initialized successfully!")


async def _reset_database() -> None:
    logger.info("Resetting database: %s", _display_url(get_settings().database_url))
    await drop_tables()
    await create_tables()
    await get_engine().dispose()
    logger.info("Database recreated successfully!")


def db_init():
    """Initialize database (create tables)."""
    configure_logging()
    asyncio.run(_init_database())


def db_reset():
    """Drop and recreate all database tables. Requires --force."""
    configure_logging()
    if "--force" not in sys.argv and "-f" not in sys.argv:
        logger.error("Refusing to drop all data without --force")
        sys.exit(1)
    asyncio.run(_reset_database())
