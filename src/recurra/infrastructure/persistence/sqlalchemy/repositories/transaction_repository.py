"""SQLAlchemy implementation of TransactionRepository."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from recurra.domain.banking.repositories import TransactionRepository
from recurra.domain.banking.value_objects import TransactionRecord
from recurra.infrastructure.persistence.sqlalchemy.models import TransactionModel
from recurra.infrastructure.persistence.sqlalchemy.repositories._utils import (
    ensure_uuid,
)

if TYPE_CHECKING:
    from recurra.application.context import UserContext

logger = logging.getLogger(__name__)


class TransactionRepositorySQLAlchemy(TransactionRepository):
    """SQLAlchemy implementation of transaction repository."""

    def __init__(self, session: AsyncSession, user_context: UserContext):
        self._session = session
        self._user_id = ensure_uuid(user_context.user_id)

    async def save(self, transaction: TransactionRecord) -> None:
        model = await self._session.get(TransactionModel, transaction.id)
        if model and model.user_id == self._user_id:
            model.bank_account_id = transaction.bank_account_id
            model.amount = transaction.amount
            model.date = transaction.date
            model.name = transaction.name
            model.merchant_name = transaction.merchant_name
            model.recurring_transaction_id = transaction.recurring_transaction_id
        else:
            self._session.add(
                TransactionModel(
                    id=transaction.id,
                    user_id=self._user_id,
                    bank_account_id=transaction.bank_account_id,
                    amount=transaction.amount,
                    date=transaction.date,
                    name=transaction.name,
                    merchant_name=transaction.merchant_name,
                    recurring_transaction_id=transaction.recurring_transaction_id,
                ),
            )
        await self._session.flush()
        logger.debug("Transaction saved: %s", transaction.id)

    async def find_since(
        self,
        since: date,
        bank_account_id: Optional[UUID] = None,
    ) -> list[TransactionRecord]:
        stmt = select(TransactionModel).where(
            TransactionModel.user_id == self._user_id,
            TransactionModel.date >= since,
        )
        if bank_account_id is not None:
            stmt = stmt.where(TransactionModel.bank_account_id == bank_account_id)
        stmt = stmt.order_by(TransactionModel.date.asc(), TransactionModel.id)

        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def find_by_recurring_transaction(
        self,
        recurring_transaction_id: UUID,
        offset: int = 0,
        limit: int = 20,
    ) -> list[TransactionRecord]:
        stmt = (
            select(TransactionModel)
            .where(
                TransactionModel.user_id == self._user_id,
                TransactionModel.recurring_transaction_id == recurring_transaction_id,
            )
            .order_by(TransactionModel.date.desc(), TransactionModel.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def count_by_recurring_transaction(
        self,
        recurring_transaction_id: UUID,
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(TransactionModel)
            .where(
                TransactionModel.user_id == self._user_id,
                TransactionModel.recurring_transaction_id == recurring_transaction_id,
            )
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def link_to_recurring_transaction(
        self,
        transaction_ids: list[UUID],
        recurring_transaction_id: UUID,
    ) -> int:
        if not transaction_ids:
            return 0
        return await self._set_back_reference(
            TransactionModel.id.in_(transaction_ids),
            recurring_transaction_id,
        )

    async def unlink_recurring_transaction(
        self,
        recurring_transaction_id: UUID,
    ) -> int:
        return await self._set_back_reference(
            TransactionModel.recurring_transaction_id == recurring_transaction_id,
            None,
        )

    async def _set_back_reference(
        self,
        condition,
        recurring_transaction_id: Optional[UUID],
    ) -> int:
        stmt = (
            update(TransactionModel)
            .where(TransactionModel.user_id == self._user_id, condition)
            .values(recurring_transaction_id=recurring_transaction_id)
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount  # type: ignore

    def _map_to_domain(self, model: TransactionModel) -> TransactionRecord:
        return TransactionRecord(
            id=model.id,
            bank_account_id=model.bank_account_id,
            amount=model.amount,
            date=model.date,
            name=model.name,
            merchant_name=model.merchant_name,
            recurring_transaction_id=model.recurring_transaction_id,
        )
