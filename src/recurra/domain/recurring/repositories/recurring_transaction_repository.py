"""Repository interface for recurring transactions."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from uuid import UUID

from recurra.domain.recurring.aggregates import RecurringTransaction
from recurra.domain.recurring.value_objects import (
    RecurringStatus,
    TransactionFrequency,
)


@dataclass(frozen=True)
class RecurringTransactionFilter:
    """Optional filters for listing recurring transactions.

    ``title`` and ``merchant_name`` match case-insensitive substrings.
    """

    title: Optional[str] = None
    merchant_name: Optional[str] = None
    status: Optional[RecurringStatus] = None
    frequency: Optional[TransactionFrequency] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None
    bank_account_id: Optional[UUID] = None


class RecurringTransactionRepository(ABC):
    """Repository for recurring transactions of the current user.

    Ownership is resolved through the owning bank account: series on
    accounts of other users are invisible.
    """

    @abstractmethod
    async def save(self, recurring_transaction: RecurringTransaction) -> None:
        """Insert or update a recurring transaction."""

    @abstractmethod
    async def find_by_id(
        self,
        recurring_transaction_id: UUID,
    ) -> Optional[RecurringTransaction]:
        """Find a series by id, or None if missing or not owned."""

    @abstractmethod
    async def delete(self, recurring_transaction_id: UUID) -> bool:
        """
        Delete a series.

        Returns
        -------
        True if a row was removed
        """

    @abstractmethod
    async def find_with_filters(
        self,
        filters: RecurringTransactionFilter,
        offset: int = 0,
        limit: int = 20,
    ) -> list[RecurringTransaction]:
        """Filtered page of series ordered by next scheduled date."""

    @abstractmethod
    async def count_with_filters(self, filters: RecurringTransactionFilter) -> int:
        """Number of series matching ``filters``."""
