"""Load a single recurring transaction."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from recurra.domain.recurring.aggregates import RecurringTransaction
from recurra.domain.recurring.exceptions import RecurringTransactionNotFoundError
from recurra.domain.recurring.repositories import RecurringTransactionRepository

if TYPE_CHECKING:
    from recurra.application.factories import RepositoryFactory


class GetRecurringTransactionQuery:
    def __init__(self, recurring_transaction_repository: RecurringTransactionRepository):
        self._recurring_repo = recurring_transaction_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> GetRecurringTransactionQuery:
        return cls(
            recurring_transaction_repository=factory.recurring_transaction_repository(),
        )

    async def execute(self, recurring_transaction_id: UUID) -> RecurringTransaction:
        recurring = await self._recurring_repo.find_by_id(recurring_transaction_id)
        if recurring is None:
            raise RecurringTransactionNotFoundError(recurring_transaction_id)
        return recurring
