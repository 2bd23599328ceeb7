"""Create recurring transactions and register their projections."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from recurra.application.commands.recurring._shared import (
    apply_projection_adjustments,
    require_owned_account,
)
from recurra.application.dtos.recurring import RecurringTransactionCreateInput
from recurra.domain.banking.repositories import BankAccountRepository
from recurra.domain.billing import LimitableResource, TierLimits
from recurra.domain.recurring.aggregates import RecurringTransaction
from recurra.domain.recurring.repositories import (
    RecurringTransactionFilter,
    RecurringTransactionRepository,
)
from recurra.domain.recurring.services import ProjectionService
from recurra.domain.recurring.value_objects import normalize_tags
from recurra.domain.shared.time import today_utc

if TYPE_CHECKING:
    from recurra.application.context import UserContext
    from recurra.application.factories import RepositoryFactory
    from recurra.application.ports import UnitOfWork

logger = logging.getLogger(__name__)


class CreateRecurringTransactionCommand:
    """Create a recurring series on one of the user's bank accounts.

    The series is persisted and its contribution added to the account's
    projection counters inside one unit of work.
    """

    def __init__(  # NOQA: PLR0913
        self,
        recurring_transaction_repository: RecurringTransactionRepository,
        bank_account_repository: BankAccountRepository,
        unit_of_work: UnitOfWork,
        tier_limits: TierLimits,
        user_context: UserContext,
    ):
        self._recurring_repo = recurring_transaction_repository
        self._bank_account_repo = bank_account_repository
        self._uow = unit_of_work
        self._tier_limits = tier_limits
        self._user_id = user_context.user_id

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
    ) -> CreateRecurringTransactionCommand:
        return cls(
            recurring_transaction_repository=factory.recurring_transaction_repository(),
            bank_account_repository=factory.bank_account_repository(),
            unit_of_work=factory.unit_of_work(),
            tier_limits=factory.tier_limits(),
            user_context=factory.user_context,
        )

    async def execute(
        self,
        data: RecurringTransactionCreateInput,
    ) -> RecurringTransaction:
        async with self._uow:
            recurring = await self.stage(data)

        logger.info(
            "Created recurring transaction %s (%s %s, %s) on account %s",
            recurring.id,
            recurring.amount,
            recurring.currency,
            recurring.frequency.value,
            recurring.bank_account_id,
        )
        return recurring

    async def stage(
        self,
        data: RecurringTransactionCreateInput,
    ) -> RecurringTransaction:
        """Persist a new series without committing.

        The caller owns the surrounding unit of work.
        """
        account = await require_owned_account(
            self._bank_account_repo,
            data.bank_account_id,
        )
        if data.target_account_id is not None:
            await require_owned_account(
                self._bank_account_repo,
                data.target_account_id,
                role="Target",
            )
        await self._ensure_within_limits(data)

        recurring = RecurringTransaction(
            bank_account_id=data.bank_account_id,
            title=data.title,
            amount=data.amount,
            frequency=data.frequency,
            start_date=data.start_date,
            as_of=today_utc(),
            interval=data.interval,
            currency=data.currency,
            anchors=data.anchors(),
            end_date=data.end_date,
            target_account_id=data.target_account_id,
            description=data.description,
            merchant_name=data.merchant_name,
            merchant_id=data.merchant_id,
            category_slug=data.category_slug,
            tags=data.tags,
            notes=data.notes,
            status=data.status,
            is_variable=data.is_variable,
            is_automated=data.is_automated,
            requires_approval=data.requires_approval,
            affect_available_balance=data.affect_available_balance,
            initial_account_balance=account.current_balance,
            source=data.source,
            confidence_score=data.confidence_score,
            created_by=self._user_id,
        )

        await self._recurring_repo.save(recurring)
        await apply_projection_adjustments(
            self._bank_account_repo,
            ProjectionService.for_creation(recurring.projection_state),
        )
        return recurring

    async def _ensure_within_limits(
        self,
        data: RecurringTransactionCreateInput,
    ) -> None:
        existing = await self._recurring_repo.count_with_filters(
            RecurringTransactionFilter(),
        )
        self._tier_limits.ensure_can_add(
            LimitableResource.RECURRING_TRANSACTIONS,
            used=existing,
        )
        self._tier_limits.ensure_can_add(
            LimitableResource.TAGS_PER_RECURRING_TRANSACTION,
            used=0,
            adding=len(normalize_tags(data.tags)),
        )
