"""Unit of work port."""

from __future__ import annotations

from types import TracebackType
from typing import Optional, Protocol


class UnitOfWork(Protocol):
    """All-or-nothing scope for a group of repository writes.

    Leaving the ``async with`` block normally commits every write made by
    the repositories sharing this unit of work. Leaving it with an exception
    rolls all of them back. Store failures surface as PersistenceError.
    """

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool: ...
