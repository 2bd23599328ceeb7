"""Pause, resume or cancel recurring transactions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from recurra.domain.recurring.aggregates import RecurringTransaction
from recurra.domain.recurring.exceptions import RecurringTransactionNotFoundError
from recurra.domain.recurring.repositories import RecurringTransactionRepository
from recurra.domain.recurring.value_objects import RecurringStatus

if TYPE_CHECKING:
    from recurra.application.context import UserContext
    from recurra.application.factories import RepositoryFactory
    from recurra.application.ports import UnitOfWork

logger = logging.getLogger(__name__)


class ChangeRecurringStatusCommand:
    """Move a series between ACTIVE, PAUSED and CANCELLED.

    Projection counters are left alone: only ``affect_available_balance``
    decides whether a series contributes to them.
    """

    def __init__(
        self,
        recurring_transaction_repository: RecurringTransactionRepository,
        unit_of_work: UnitOfWork,
        user_context: UserContext,
    ):
        self._recurring_repo = recurring_transaction_repository
        self._uow = unit_of_work
        self._user_id = user_context.user_id

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> ChangeRecurringStatusCommand:
        return cls(
            recurring_transaction_repository=factory.recurring_transaction_repository(),
            unit_of_work=factory.unit_of_work(),
            user_context=factory.user_context,
        )

    async def pause(self, recurring_transaction_id: UUID) -> RecurringTransaction:
        return await self.execute(recurring_transaction_id, RecurringStatus.PAUSED)

    async def resume(self, recurring_transaction_id: UUID) -> RecurringTransaction:
        return await self.execute(recurring_transaction_id, RecurringStatus.ACTIVE)

    async def cancel(self, recurring_transaction_id: UUID) -> RecurringTransaction:
        return await self.execute(recurring_transaction_id, RecurringStatus.CANCELLED)

    async def execute(
        self,
        recurring_transaction_id: UUID,
        status: RecurringStatus,
    ) -> RecurringTransaction:
        async with self._uow:
            recurring = await self._recurring_repo.find_by_id(
                recurring_transaction_id,
            )
            if recurring is None:
                raise RecurringTransactionNotFoundError(recurring_transaction_id)

            previous = recurring.status
            recurring.change_status(status)
            recurring.mark_modified_by(self._user_id)
            await self._recurring_repo.save(recurring)

        logger.info(
            "Recurring transaction %s status %s -> %s",
            recurring.id,
            previous.value,
            recurring.status.value,
        )
        return recurring
