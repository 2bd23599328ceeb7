"""Apply partial updates to recurring transactions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from recurra.application.commands.recurring._shared import (
    apply_projection_adjustments,
    require_owned_account,
)
from recurra.application.dtos.recurring import RecurringTransactionUpdateInput
from recurra.domain.banking.repositories import BankAccountRepository
from recurra.domain.billing import LimitableResource, TierLimits
from recurra.domain.recurring.aggregates import RecurringTransaction
from recurra.domain.recurring.exceptions import RecurringTransactionNotFoundError
from recurra.domain.recurring.repositories import RecurringTransactionRepository
from recurra.domain.recurring.services import ProjectionService
from recurra.domain.recurring.value_objects import normalize_tags
from recurra.domain.shared.time import today_utc

if TYPE_CHECKING:
    from recurra.application.context import UserContext
    from recurra.application.factories import RepositoryFactory
    from recurra.application.ports import UnitOfWork

logger = logging.getLogger(__name__)


class UpdateRecurringTransactionCommand:
    """Merge a partial payload into an existing series.

    Projection counters are reconciled from the contribution before and
    after the merge, which covers amount sign changes, moves to another
    bank account and toggling ``affect_available_balance``.
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
    ) -> UpdateRecurringTransactionCommand:
        return cls(
            recurring_transaction_repository=factory.recurring_transaction_repository(),
            bank_account_repository=factory.bank_account_repository(),
            unit_of_work=factory.unit_of_work(),
            tier_limits=factory.tier_limits(),
            user_context=factory.user_context,
        )

    async def execute(
        self,
        recurring_transaction_id: UUID,
        data: RecurringTransactionUpdateInput,
    ) -> RecurringTransaction:
        async with self._uow:
            recurring = await self._recurring_repo.find_by_id(
                recurring_transaction_id,
            )
            if recurring is None:
                raise RecurringTransactionNotFoundError(recurring_transaction_id)
            recurring.ensure_not_cancelled()
            await self._check_referenced_accounts(recurring, data)
            self._check_tag_limit(data)

            before = recurring.projection_state
            self._merge(recurring, data)
            recurring.mark_modified_by(self._user_id)

            await self._recurring_repo.save(recurring)
            await apply_projection_adjustments(
                self._bank_account_repo,
                ProjectionService.reconcile(before, recurring.projection_state),
            )

        logger.info(
            "Updated recurring transaction %s (%s)",
            recurring.id,
            ", ".join(sorted(data.changes())) or "no changes",
        )
        return recurring

    async def _check_referenced_accounts(
        self,
        recurring: RecurringTransaction,
        data: RecurringTransactionUpdateInput,
    ) -> None:
        changes = data.changes()
        if (
            "bank_account_id" in changes
            and data.bank_account_id != recurring.bank_account_id
        ):
            await require_owned_account(self._bank_account_repo, data.bank_account_id)
        if (
            "target_account_id" in changes
            and data.target_account_id is not None
            and data.target_account_id != recurring.target_account_id
        ):
            await require_owned_account(
                self._bank_account_repo,
                data.target_account_id,
                role="Target",
            )

    def _check_tag_limit(self, data: RecurringTransactionUpdateInput) -> None:
        if data.tags is None:
            return
        self._tier_limits.ensure_can_add(
            LimitableResource.TAGS_PER_RECURRING_TRANSACTION,
            used=0,
            adding=len(normalize_tags(data.tags)),
        )

    def _merge(  # NOQA: C901, PLR0912
        self,
        recurring: RecurringTransaction,
        data: RecurringTransactionUpdateInput,
    ) -> None:
        changes = data.changes()

        recurring.update_details(
            title=data.title,
            is_variable=data.is_variable,
            is_automated=data.is_automated,
            requires_approval=data.requires_approval,
        )
        if "description" in changes:
            recurring.set_description(data.description)
        if "amount" in changes:
            recurring.change_amount(data.amount)
        if "currency" in changes:
            recurring.change_currency(data.currency)
        if "bank_account_id" in changes:
            recurring.move_to_account(data.bank_account_id)
        if "target_account_id" in changes:
            recurring.set_target_account(data.target_account_id)
        if "affect_available_balance" in changes:
            recurring.set_affects_available_balance(data.affect_available_balance)

        # Cleared first so a moved start_date is checked against the new end_date
        if "end_date" in changes:
            recurring.set_end_date(None)
        anchors = data.merged_anchors(recurring.anchors)
        if data.touches_schedule():
            recurring.reschedule(
                as_of=today_utc(),
                frequency=data.frequency,
                interval=data.interval,
                start_date=data.start_date,
                anchors=anchors,
            )
        elif data.touches_anchors():
            recurring.replace_anchors(anchors)
        if "end_date" in changes:
            recurring.set_end_date(data.end_date)

        if "tags" in changes:
            recurring.replace_tags(data.tags)
        if "notes" in changes:
            recurring.update_notes(data.notes)
        if "category_slug" in changes:
            recurring.update_category(data.category_slug)
        if changes & {"merchant_name", "merchant_id"}:
            recurring.update_merchant(
                data.merchant_name
                if "merchant_name" in changes
                else recurring.merchant_name,
                data.merchant_id if "merchant_id" in changes else recurring.merchant_id,
            )
        if "status" in changes:
            recurring.change_status(data.status)
