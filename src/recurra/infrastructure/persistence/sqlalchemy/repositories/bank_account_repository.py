"""SQLAlchemy implementation of BankAccountRepository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from recurra.domain.banking.repositories import BankAccountRepository
from recurra.domain.banking.value_objects import BankAccount
from recurra.domain.recurring.exceptions import BankAccountAccessDeniedError
from recurra.domain.recurring.value_objects import ProjectionDelta
from recurra.infrastructure.persistence.sqlalchemy.models import BankAccountModel
from recurra.infrastructure.persistence.sqlalchemy.repositories._utils import (
    ensure_uuid,
)

if TYPE_CHECKING:
    from recurra.application.context import UserContext

logger = logging.getLogger(__name__)


class BankAccountRepositorySQLAlchemy(BankAccountRepository):
    """SQLAlchemy implementation of bank account repository."""

    def __init__(self, session: AsyncSession, user_context: UserContext):
        self._session = session
        self._user_id = ensure_uuid(user_context.user_id)

    async def save(self, bank_account: BankAccount) -> None:
        if bank_account.user_id != self._user_id:
            raise BankAccountAccessDeniedError(bank_account.id)

        model = await self._find_model(bank_account.id)
        if model:
            logger.debug("Updating existing bank account: %s", bank_account.id)
            # Projection counters are only changed via adjust_projections
            model.name = bank_account.name
            model.currency = bank_account.currency
            model.current_balance = bank_account.current_balance
        else:
            logger.debug("Creating new bank account: %s", bank_account.id)
            self._session.add(self._create_model_from_domain(bank_account))

        await self._session.flush()
        logger.info("Bank account saved: %s", bank_account.id)

    async def find_by_id(self, bank_account_id: UUID) -> Optional[BankAccount]:
        model = await self._find_model(bank_account_id)
        if not model:
            return None
        return self._map_to_domain(model)

    async def adjust_projections(
        self,
        bank_account_id: UUID,
        delta: ProjectionDelta,
    ) -> None:
        if delta.is_zero():
            return

        stmt = (
            update(BankAccountModel)
            .where(
                BankAccountModel.id == bank_account_id,
                BankAccountModel.user_id == self._user_id,
            )
            .values(
                scheduled_inflows=BankAccountModel.scheduled_inflows + delta.inflows,
                scheduled_outflows=BankAccountModel.scheduled_outflows
                + delta.outflows,
            )
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:  # type: ignore
            raise BankAccountAccessDeniedError(bank_account_id)

        logger.debug(
            "Adjusted projections of %s: inflows %s, outflows %s",
            bank_account_id,
            delta.inflows,
            delta.outflows,
        )

    async def _find_model(self, bank_account_id: UUID) -> Optional[BankAccountModel]:
        stmt = select(BankAccountModel).where(
            BankAccountModel.id == bank_account_id,
            BankAccountModel.user_id == self._user_id,
        ).execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _create_model_from_domain(self, bank_account: BankAccount) -> BankAccountModel:
        return BankAccountModel(
            id=bank_account.id,
            user_id=self._user_id,
            name=bank_account.name,
            currency=bank_account.currency,
            current_balance=bank_account.current_balance,
            scheduled_inflows=bank_account.scheduled_inflows,
            scheduled_outflows=bank_account.scheduled_outflows,
        )

    def _map_to_domain(self, model: BankAccountModel) -> BankAccount:
        return BankAccount(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            currency=model.currency,
            current_balance=model.current_balance,
            scheduled_inflows=model.scheduled_inflows,
            scheduled_outflows=model.scheduled_outflows,
        )
