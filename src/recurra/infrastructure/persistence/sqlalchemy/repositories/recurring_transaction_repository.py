"""SQLAlchemy implementation of RecurringTransactionRepository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from recurra.domain.recurring.aggregates import RecurringTransaction
from recurra.domain.recurring.repositories import (
    RecurringTransactionFilter,
    RecurringTransactionRepository,
)
from recurra.domain.recurring.value_objects import (
    RecurringStatus,
    ScheduleAnchors,
    TransactionFrequency,
)
from recurra.infrastructure.persistence.sqlalchemy.models import (
    BankAccountModel,
    RecurringTransactionModel,
)
from recurra.infrastructure.persistence.sqlalchemy.repositories._utils import (
    ensure_uuid,
)

if TYPE_CHECKING:
    from recurra.application.context import UserContext

logger = logging.getLogger(__name__)


class RecurringTransactionRepositorySQLAlchemy(RecurringTransactionRepository):
    """SQLAlchemy implementation scoped through the owning bank account."""

    def __init__(self, session: AsyncSession, user_context: UserContext):
        self._session = session
        self._user_id = ensure_uuid(user_context.user_id)

    async def save(self, recurring_transaction: RecurringTransaction) -> None:
        model = await self._find_model(recurring_transaction.id)

        if model:
            logger.debug("Updating recurring transaction: %s", recurring_transaction.id)
            self._update_model_from_domain(model, recurring_transaction)
        else:
            logger.debug("Creating recurring transaction: %s", recurring_transaction.id)
            model = RecurringTransactionModel(id=recurring_transaction.id)
            self._update_model_from_domain(model, recurring_transaction)
            self._session.add(model)

        await self._session.flush()

    async def find_by_id(
        self,
        recurring_transaction_id: UUID,
    ) -> Optional[RecurringTransaction]:
        model = await self._find_model(recurring_transaction_id)
        if not model:
            return None
        return self._map_to_domain(model)

    async def delete(self, recurring_transaction_id: UUID) -> bool:
        stmt = delete(RecurringTransactionModel).where(
            RecurringTransactionModel.id == recurring_transaction_id,
            RecurringTransactionModel.bank_account_id.in_(self._owned_accounts()),
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount > 0  # type: ignore

    async def find_with_filters(
        self,
        filters: RecurringTransactionFilter,
        offset: int = 0,
        limit: int = 20,
    ) -> list[RecurringTransaction]:
        stmt = (
            self._apply_filters(select(RecurringTransactionModel), filters)
            .order_by(
                RecurringTransactionModel.next_scheduled_date.asc(),
                RecurringTransactionModel.id,
            )
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def count_with_filters(self, filters: RecurringTransactionFilter) -> int:
        stmt = self._apply_filters(
            select(func.count()).select_from(RecurringTransactionModel),
            filters,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    def _owned_accounts(self) -> Select:
        return select(BankAccountModel.id).where(
            BankAccountModel.user_id == self._user_id,
        )

    def _apply_filters(
        self,
        stmt: Select,
        filters: RecurringTransactionFilter,
    ) -> Select:
        stmt = stmt.where(
            RecurringTransactionModel.bank_account_id.in_(self._owned_accounts()),
        )
        if filters.title:
            stmt = stmt.where(
                func.lower(RecurringTransactionModel.title).contains(
                    filters.title.lower(),
                    autoescape=True,
                ),
            )
        if filters.merchant_name:
            stmt = stmt.where(
                func.lower(RecurringTransactionModel.merchant_name).contains(
                    filters.merchant_name.lower(),
                    autoescape=True,
                ),
            )
        if filters.status is not None:
            stmt = stmt.where(RecurringTransactionModel.status == filters.status.value)
        if filters.frequency is not None:
            stmt = stmt.where(
                RecurringTransactionModel.frequency == filters.frequency.value,
            )
        if filters.min_amount is not None:
            stmt = stmt.where(RecurringTransactionModel.amount >= filters.min_amount)
        if filters.max_amount is not None:
            stmt = stmt.where(RecurringTransactionModel.amount <= filters.max_amount)
        if filters.bank_account_id is not None:
            stmt = stmt.where(
                RecurringTransactionModel.bank_account_id == filters.bank_account_id,
            )
        return stmt

    async def _find_model(
        self,
        recurring_transaction_id: UUID,
    ) -> Optional[RecurringTransactionModel]:
        stmt = select(RecurringTransactionModel).where(
            RecurringTransactionModel.id == recurring_transaction_id,
            RecurringTransactionModel.bank_account_id.in_(self._owned_accounts()),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _update_model_from_domain(
        self,
        model: RecurringTransactionModel,
        recurring: RecurringTransaction,
    ) -> None:
        anchors = recurring.anchors
        model.bank_account_id = recurring.bank_account_id
        model.target_account_id = recurring.target_account_id
        model.title = recurring.title
        model.description = recurring.description
        model.amount = recurring.amount
        model.currency = recurring.currency
        model.initial_account_balance = recurring.initial_account_balance
        model.frequency = recurring.frequency.value
        model.interval = recurring.interval
        model.start_date = recurring.start_date
        model.end_date = recurring.end_date
        model.day_of_month = anchors.day_of_month
        model.day_of_week = anchors.day_of_week
        model.week_of_month = anchors.week_of_month
        model.month_of_year = anchors.month_of_year
        model.next_scheduled_date = recurring.next_scheduled_date
        model.execution_count = recurring.execution_count
        model.total_executed = recurring.total_executed
        model.merchant_name = recurring.merchant_name
        model.merchant_id = recurring.merchant_id
        model.category_slug = recurring.category_slug
        model.tags = recurring.tags
        model.notes = recurring.notes
        model.status = recurring.status.value
        model.is_variable = recurring.is_variable
        model.is_automated = recurring.is_automated
        model.requires_approval = recurring.requires_approval
        model.affect_available_balance = recurring.affect_available_balance
        model.source = recurring.source
        model.confidence_score = recurring.confidence_score
        model.assigned_to_user_id = recurring.assigned_to_user_id
        model.last_modified_by = recurring.last_modified_by
        model.created_at = recurring.created_at
        model.updated_at = recurring.updated_at

    def _map_to_domain(self, model: RecurringTransactionModel) -> RecurringTransaction:
        return RecurringTransaction.reconstitute(
            id=model.id,
            bank_account_id=model.bank_account_id,
            title=model.title,
            amount=model.amount,
            currency=model.currency,
            frequency=TransactionFrequency(model.frequency),
            interval=model.interval,
            start_date=model.start_date,
            next_scheduled_date=model.next_scheduled_date,
            anchors=ScheduleAnchors(
                day_of_month=model.day_of_month,
                day_of_week=model.day_of_week,
                week_of_month=model.week_of_month,
                month_of_year=model.month_of_year,
            ),
            status=RecurringStatus(model.status),
            tags=list(model.tags or []),
            execution_count=model.execution_count,
            total_executed=model.total_executed,
            created_at=model.created_at,
            updated_at=model.updated_at,
            end_date=model.end_date,
            target_account_id=model.target_account_id,
            description=model.description,
            merchant_name=model.merchant_name,
            merchant_id=model.merchant_id,
            category_slug=model.category_slug,
            notes=model.notes,
            is_variable=model.is_variable,
            is_automated=model.is_automated,
            requires_approval=model.requires_approval,
            affect_available_balance=model.affect_available_balance,
            initial_account_balance=model.initial_account_balance,
            source=model.source,
            confidence_score=model.confidence_score,
            assigned_to_user_id=model.assigned_to_user_id,
            last_modified_by=model.last_modified_by,
        )
