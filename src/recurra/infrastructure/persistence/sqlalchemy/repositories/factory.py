"""SQLAlchemy repository factory for creating user-scoped repositories."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from recurra.domain.billing import PlanTier, TierLimits
from recurra.infrastructure.persistence.sqlalchemy.repositories.bank_account_repository import (  # NOQA: E501
    BankAccountRepositorySQLAlchemy,
)
from recurra.infrastructure.persistence.sqlalchemy.repositories.recurring_transaction_repository import (  # NOQA: E501
    RecurringTransactionRepositorySQLAlchemy,
)
from recurra.infrastructure.persistence.sqlalchemy.repositories.transaction_repository import (  # NOQA: E501
    TransactionRepositorySQLAlchemy,
)
from recurra.infrastructure.persistence.sqlalchemy.unit_of_work import (
    SQLAlchemyUnitOfWork,
)
from recurra_config.settings import get_settings

if TYPE_CHECKING:
    from recurra.application.context import UserContext


class SQLAlchemyRepositoryFactory:
    """SQLAlchemy implementation of the RepositoryFactory Protocol.

    All repositories and units of work handed out share one session, so
    writes from different repositories commit together.
    """

    def __init__(
        self,
        session: AsyncSession,
        user_context: UserContext,
        plan_tier: Optional[PlanTier | str] = None,
    ):
        self._session = session
        self._user_context = user_context
        self._plan_tier = plan_tier or get_settings().plan_tier

        # Cached instances (created on demand)
        self._bank_account_repo: BankAccountRepositorySQLAlchemy | None = None
        self._transaction_repo: TransactionRepositorySQLAlchemy | None = None
        self._recurring_repo: RecurringTransactionRepositorySQLAlchemy | None = None

    @property
    def user_context(self) -> UserContext:
        return self._user_context

    @property
    def session(self) -> AsyncSession:
        return self._session

    def bank_account_repository(self) -> BankAccountRepositorySQLAlchemy:
        if self._bank_account_repo is None:
            self._bank_account_repo = BankAccountRepositorySQLAlchemy(
                self._session,
                self._user_context,
            )
        return self._bank_account_repo

    def transaction_repository(self) -> TransactionRepositorySQLAlchemy:
        if self._transaction_repo is None:
            self._transaction_repo = TransactionRepositorySQLAlchemy(
                self._session,
                self._user_context,
            )
        return self._transaction_repo

    def recurring_transaction_repository(
        self,
    ) -> RecurringTransactionRepositorySQLAlchemy:
        if self._recurring_repo is None:
            self._recurring_repo = RecurringTransactionRepositorySQLAlchemy(
                self._session,
                self._user_context,
            )
        return self._recurring_repo

    def unit_of_work(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(self._session)

    def tier_limits(self) -> TierLimits:
        return TierLimits.for_tier(self._plan_tier)
