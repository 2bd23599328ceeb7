"""Repository interface for bank accounts."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from recurra.domain.banking.value_objects import BankAccount
from recurra.domain.recurring.value_objects import ProjectionDelta


class BankAccountRepository(ABC):
    """User-scoped access to bank accounts and their projection counters."""

    @abstractmethod
    async def save(self, bank_account: BankAccount) -> None:
        """
        Save or update a bank account.

        Parameters
        ----------
        bank_account
            The bank account to save
        """

    @abstractmethod
    async def find_by_id(self, bank_account_id: UUID) -> Optional[BankAccount]:
        """
        Find a bank account owned by the current user.

        Returns
        -------
        The bank account, or None if it does not exist or belongs to
        someone else
        """

    @abstractmethod
    async def adjust_projections(
        self,
        bank_account_id: UUID,
        delta: ProjectionDelta,
    ) -> None:
        """
        Atomically add ``delta`` to the account's projection counters.

        Implementations must issue the change as a single increment on the
        store, never as read-modify-write in application code.
        """
