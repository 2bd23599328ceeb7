"""Suggest recurring schedules from the user's transaction history."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from recurra.domain.banking.repositories import TransactionRepository
from recurra.domain.recurring.services import RecurringPatternDetector
from recurra.domain.recurring.value_objects import RecurringCandidate
from recurra.domain.shared.time import today_utc
from recurra_config import get_settings

if TYPE_CHECKING:
    from recurra.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


class DetectionParameters(BaseModel):
    """Tuning knobs for a detection run."""

    min_confidence: float = Field(default=0.7, ge=0.0, le=1.0)
    minimum_occurrences: int = Field(default=2, ge=2)
    lookback_days: int = Field(default=90, ge=1)
    bank_account_id: Optional[UUID] = None

    @classmethod
    def from_settings(cls, **overrides) -> DetectionParameters:
        settings = get_settings()
        values = {
            "min_confidence": settings.detection_min_confidence,
            "minimum_occurrences": settings.detection_minimum_occurrences,
            "lookback_days": settings.detection_lookback_days,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


class DetectRecurringTransactionsQuery:
    """Run the pattern detector over recent transactions. Never writes."""

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        currency: str = "USD",
    ):
        self._transaction_repo = transaction_repository
        self._currency = currency

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> DetectRecurringTransactionsQuery:
        return cls(
            transaction_repository=factory.transaction_repository(),
            currency=get_settings().default_currency,
        )

    async def execute(
        self,
        parameters: Optional[DetectionParameters] = None,
        today: Optional[date] = None,
    ) -> list[RecurringCandidate]:
        parameters = parameters or DetectionParameters.from_settings()
        today = today or today_utc()

        transactions = await self._transaction_repo.find_since(
            today - timedelta(days=parameters.lookback_days),
            bank_account_id=parameters.bank_account_id,
        )
        candidates = RecurringPatternDetector.detect(
            transactions,
            today=today,
            min_confidence=parameters.min_confidence,
            minimum_occurrences=parameters.minimum_occurrences,
            lookback_days=parameters.lookback_days,
            bank_account_id=parameters.bank_account_id,
            currency=self._currency,
        )
        logger.info(
            "Detection over %d transactions produced %d candidates",
            len(transactions),
            len(candidates),
        )
        return candidates
