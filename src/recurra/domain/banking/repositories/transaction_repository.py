"""Repository interface for booked transactions."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional
from uuid import UUID

from recurra.domain.banking.value_objects import TransactionRecord


class TransactionRepository(ABC):
    """User-scoped access to booked transactions."""

    @abstractmethod
    async def save(self, transaction: TransactionRecord) -> None:
        """Save or update a transaction record."""

    @abstractmethod
    async def find_since(
        self,
        since: date,
        bank_account_id: Optional[UUID] = None,
    ) -> list[TransactionRecord]:
        """
        Find transactions dated on or after ``since``, oldest first.

        Parameters
        ----------
        since
            Earliest transaction date to include
        bank_account_id
            Restrict to a single bank account
        """

    @abstractmethod
    async def find_by_recurring_transaction(
        self,
        recurring_transaction_id: UUID,
        offset: int = 0,
        limit: int = 20,
    ) -> list[TransactionRecord]:
        """Transactions linked to a recurring series, newest first."""

    @abstractmethod
    async def count_by_recurring_transaction(
        self,
        recurring_transaction_id: UUID,
    ) -> int:
        """Number of transactions linked to a recurring series."""

    @abstractmethod
    async def unlink_recurring_transaction(
        self,
        recurring_transaction_id: UUID,
    ) -> int:
        """Clear the back-reference on every transaction linked to the series."""

    @abstractmethod
    async def link_to_recurring_transaction(
        self,
        transaction_ids: list[UUID],
        recurring_transaction_id: UUID,
    ) -> int:
        """
        Stamp the back-reference on the given transactions.

        Returns
        -------
        Number of transactions that were updated
        """
