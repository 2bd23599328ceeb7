"""Repository factory protocol for application layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from recurra.domain.banking.repositories import (
    BankAccountRepository,
    TransactionRepository,
)
from recurra.domain.billing import TierLimits
from recurra.domain.recurring.repositories import RecurringTransactionRepository

if TYPE_CHECKING:
    from recurra.application.context import UserContext
    from recurra.application.ports import UnitOfWork


class RepositoryFactory(Protocol):
    """Protocol for creating user-scoped repositories."""

    @property
    def user_context(self) -> UserContext:
        """Get the current user for repository scoping."""
        ...

    def bank_account_repository(self) -> BankAccountRepository:
        """Get bank account repository."""
        ...

    def transaction_repository(self) -> TransactionRepository:
        """Get transaction repository."""
        ...

    def recurring_transaction_repository(self) -> RecurringTransactionRepository:
        """Get recurring transaction repository."""
        ...

    def unit_of_work(self) -> UnitOfWork:
        """Get a unit of work spanning every repository of this factory."""
        ...

    def tier_limits(self) -> TierLimits:
        """Get the plan limits that apply to the current user."""
        ...
