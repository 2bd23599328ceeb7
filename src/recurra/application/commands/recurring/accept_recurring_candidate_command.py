"""Turn a detected candidate into a persisted recurring transaction."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from recurra.application.commands.recurring.create_recurring_transaction_command import (  # NOQA: E501
    CreateRecurringTransactionCommand,
)
from recurra.application.dtos.recurring import RecurringTransactionCreateInput
from recurra.domain.banking.repositories import TransactionRepository
from recurra.domain.recurring.aggregates import RecurringTransaction
from recurra.domain.recurring.value_objects import RecurringCandidate

if TYPE_CHECKING:
    from recurra.application.factories import RepositoryFactory
    from recurra.application.ports import UnitOfWork

logger = logging.getLogger(__name__)


class AcceptRecurringCandidateCommand:
    """Create the series and link the matched transactions in one commit."""

    def __init__(
        self,
        create_command: CreateRecurringTransactionCommand,
        transaction_repository: TransactionRepository,
        unit_of_work: UnitOfWork,
    ):
        self._create = create_command
        self._transaction_repo = transaction_repository
        self._uow = unit_of_work

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> AcceptRecurringCandidateCommand:
        return cls(
            create_command=CreateRecurringTransactionCommand.from_factory(factory),
            transaction_repository=factory.transaction_repository(),
            unit_of_work=factory.unit_of_work(),
        )

    async def execute(
        self,
        candidate: RecurringCandidate,
        **overrides: Any,
    ) -> RecurringTransaction:
        """Accept ``candidate``; ``overrides`` replace any create-payload field."""
        data = RecurringTransactionCreateInput.from_candidate(candidate, **overrides)

        async with self._uow:
            recurring = await self._create.stage(data)
            linked = await self._transaction_repo.link_to_recurring_transaction(
                candidate.transaction_ids,
                recurring.id,
            )

        logger.info(
            "Accepted recurring candidate %r as %s, linked %d of %d transactions",
            candidate.title,
            recurring.id,
            linked,
            candidate.occurrences,
        )
        return recurring
