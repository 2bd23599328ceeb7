"""Narrow metadata updates on recurring transactions.

None of these touch the schedule or the projection counters. They are
allowed on cancelled series.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from recurra.domain.billing import LimitableResource, TierLimits
from recurra.domain.recurring.aggregates import RecurringTransaction
from recurra.domain.recurring.exceptions import RecurringTransactionNotFoundError
from recurra.domain.recurring.repositories import RecurringTransactionRepository
from recurra.domain.recurring.value_objects import merge_tags, normalize_tags

if TYPE_CHECKING:
    from recurra.application.context import UserContext
    from recurra.application.factories import RepositoryFactory
    from recurra.application.ports import UnitOfWork

logger = logging.getLogger(__name__)


class _RecurringMetadataCommand:
    """Load, mutate, stamp and save one series."""

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
    def from_factory(cls, factory: RepositoryFactory):
        return cls(
            recurring_transaction_repository=factory.recurring_transaction_repository(),
            unit_of_work=factory.unit_of_work(),
            user_context=factory.user_context,
        )

    async def _load(self, recurring_transaction_id: UUID) -> RecurringTransaction:
        recurring = await self._recurring_repo.find_by_id(recurring_transaction_id)
        if recurring is None:
            raise RecurringTransactionNotFoundError(recurring_transaction_id)
        return recurring

    async def _save(self, recurring: RecurringTransaction, what: str) -> None:
        recurring.mark_modified_by(self._user_id)
        await self._recurring_repo.save(recurring)
        logger.info("Updated %s of recurring transaction %s", what, recurring.id)


class _TagCommand(_RecurringMetadataCommand):
    def __init__(
        self,
        recurring_transaction_repository: RecurringTransactionRepository,
        unit_of_work: UnitOfWork,
        user_context: UserContext,
        tier_limits: TierLimits,
    ):
        super().__init__(recurring_transaction_repository, unit_of_work, user_context)
        self._tier_limits = tier_limits

    @classmethod
    def from_factory(cls, factory: RepositoryFactory):
        return cls(
            recurring_transaction_repository=factory.recurring_transaction_repository(),
            unit_of_work=factory.unit_of_work(),
            user_context=factory.user_context,
            tier_limits=factory.tier_limits(),
        )

    def _check_tag_count(self, tags: list[str]) -> None:
        self._tier_limits.ensure_can_add(
            LimitableResource.TAGS_PER_RECURRING_TRANSACTION,
            used=0,
            adding=len(tags),
        )


class ReplaceRecurringTagsCommand(_TagCommand):
    """Replace the whole tag list."""

    async def execute(
        self,
        recurring_transaction_id: UUID,
        tags: Iterable[str],
    ) -> RecurringTransaction:
        tags = normalize_tags(tags)
        async with self._uow:
            recurring = await self._load(recurring_transaction_id)
            self._check_tag_count(tags)
            recurring.replace_tags(tags)
            await self._save(recurring, "tags")
        return recurring


class AddRecurringTagsCommand(_TagCommand):
    """Union-merge tags into the existing list, ignoring case duplicates."""

    async def execute(
        self,
        recurring_transaction_id: UUID,
        tags: Iterable[str],
    ) -> RecurringTransaction:
        async with self._uow:
            recurring = await self._load(recurring_transaction_id)
            self._check_tag_count(merge_tags(recurring.tags, tags))
            recurring.add_tags(tags)
            await self._save(recurring, "tags")
        return recurring


class UpdateRecurringNotesCommand(_RecurringMetadataCommand):
    async def execute(
        self,
        recurring_transaction_id: UUID,
        notes: Optional[str],
    ) -> RecurringTransaction:
        async with self._uow:
            recurring = await self._load(recurring_transaction_id)
            recurring.update_notes(notes)
            await self._save(recurring, "notes")
        return recurring


class UpdateRecurringCategoryCommand(_RecurringMetadataCommand):
    async def execute(
        self,
        recurring_transaction_id: UUID,
        category_slug: Optional[str],
    ) -> RecurringTransaction:
        async with self._uow:
            recurring = await self._load(recurring_transaction_id)
            recurring.update_category(category_slug)
            await self._save(recurring, "category")
        return recurring


class UpdateRecurringMerchantCommand(_RecurringMetadataCommand):
    async def execute(
        self,
        recurring_transaction_id: UUID,
        merchant_name: Optional[str],
        merchant_id: Optional[str] = None,
    ) -> RecurringTransaction:
        async with self._uow:
            recurring = await self._load(recurring_transaction_id)
            recurring.update_merchant(merchant_name, merchant_id)
            await self._save(recurring, "merchant")
        return recurring


class AssignRecurringTransactionCommand(_RecurringMetadataCommand):
    """Set the user responsible for a series."""

    async def execute(
        self,
        recurring_transaction_id: UUID,
        assignee_id: UUID,
    ) -> RecurringTransaction:
        async with self._uow:
            recurring = await self._load(recurring_transaction_id)
            recurring.assign_to(assignee_id)
            await self._save(recurring, "assignee")
        return recurring
