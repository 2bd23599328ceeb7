"""Delete recurring transactions and withdraw their projections."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from recurra.application.commands.recurring._shared import (
    apply_projection_adjustments,
)
from recurra.domain.banking.repositories import (
    BankAccountRepository,
    TransactionRepository,
)
from recurra.domain.recurring.exceptions import RecurringTransactionNotFoundError
from recurra.domain.recurring.repositories import RecurringTransactionRepository
from recurra.domain.recurring.services import ProjectionService

if TYPE_CHECKING:
    from recurra.application.factories import RepositoryFactory
    from recurra.application.ports import UnitOfWork

logger = logging.getLogger(__name__)


class DeleteRecurringTransactionCommand:
    """Remove a series and reverse its projection contribution atomically."""

    def __init__(
        self,
        recurring_transaction_repository: RecurringTransactionRepository,
        bank_account_repository: BankAccountRepository,
        transaction_repository: TransactionRepository,
        unit_of_work: UnitOfWork,
    ):
        self._recurring_repo = recurring_transaction_repository
        self._bank_account_repo = bank_account_repository
        self._transaction_repo = transaction_repository
        self._uow = unit_of_work

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
    ) -> DeleteRecurringTransactionCommand:
        return cls(
            recurring_transaction_repository=factory.recurring_transaction_repository(),
            bank_account_repository=factory.bank_account_repository(),
            transaction_repository=factory.transaction_repository(),
            unit_of_work=factory.unit_of_work(),
        )

    async def execute(self, recurring_transaction_id: UUID) -> None:
        async with self._uow:
            recurring = await self._recurring_repo.find_by_id(
                recurring_transaction_id,
            )
            if recurring is None:
                raise RecurringTransactionNotFoundError(recurring_transaction_id)

            await apply_projection_adjustments(
                self._bank_account_repo,
                ProjectionService.for_removal(recurring.projection_state),
            )
            unlinked = await self._transaction_repo.unlink_recurring_transaction(
                recurring_transaction_id,
            )
            await self._recurring_repo.delete(recurring_transaction_id)

        logger.info(
            "Deleted recurring transaction %s (%d linked transactions released)",
            recurring_transaction_id,
            unlinked,
        )
