"""List the transactions that were matched to a recurring series."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from recurra.application.dtos.recurring import (
    AssociatedTransactionsPageDTO,
    PaginationDTO,
)
from recurra.application.queries.recurring.list_recurring_transactions_query import (
    validate_page,
)
from recurra.domain.banking.repositories import TransactionRepository
from recurra.domain.recurring.exceptions import RecurringTransactionNotFoundError
from recurra.domain.recurring.repositories import RecurringTransactionRepository

if TYPE_CHECKING:
    from recurra.application.factories import RepositoryFactory


class GetAssociatedTransactionsQuery:
    """Page through the transactions linked to a series, newest first."""

    def __init__(
        self,
        recurring_transaction_repository: RecurringTransactionRepository,
        transaction_repository: TransactionRepository,
    ):
        self._recurring_repo = recurring_transaction_repository
        self._transaction_repo = transaction_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> GetAssociatedTransactionsQuery:
        return cls(
            recurring_transaction_repository=factory.recurring_transaction_repository(),
            transaction_repository=factory.transaction_repository(),
        )

    async def execute(
        self,
        recurring_transaction_id: UUID,
        page: int = 1,
        limit: int = 20,
    ) -> AssociatedTransactionsPageDTO:
        validate_page(page, limit)
        recurring = await self._recurring_repo.find_by_id(recurring_transaction_id)
        if recurring is None:
            raise RecurringTransactionNotFoundError(recurring_transaction_id)

        transactions = await self._transaction_repo.find_by_recurring_transaction(
            recurring.id,
            offset=(page - 1) * limit,
            limit=limit,
        )
        total = await self._transaction_repo.count_by_recurring_transaction(
            recurring.id,
        )
        return AssociatedTransactionsPageDTO(
            transactions=transactions,
            pagination=PaginationDTO(total=total, page=page, limit=limit),
        )
