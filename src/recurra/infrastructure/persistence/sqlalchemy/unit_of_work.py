"""Unit of work over a single AsyncSession transaction."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recurra.domain.shared.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class SQLAlchemyUnitOfWork:
    """Commit every flushed write on success, roll all of them back otherwise.

    Database errors, whether raised by a repository inside the block or by
    the final commit, are rolled back and re-raised as PersistenceError.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def __aenter__(self) -> SQLAlchemyUnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        if exc is not None:
            await self._session.rollback()
            if isinstance(exc, SQLAlchemyError):
                logger.exception("Database error, transaction rolled back")
                raise PersistenceError(details={"reason": str(exc)}) from exc
            return False

        try:
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.exception("Commit failed, transaction rolled back")
            raise PersistenceError(details={"reason": str(e)}) from e
        return False
