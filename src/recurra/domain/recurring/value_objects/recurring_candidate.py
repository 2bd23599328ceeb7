"""Recurring candidate produced by pattern detection."""

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from recurra.domain.recurring.value_objects.frequency import TransactionFrequency

DETECTED_SOURCE = "detected"


class RecurringCandidate(BaseModel):
    """Unpersisted suggestion that a group of transactions is a recurring series.

    Lives only for the duration of a detection call. Accepting it creates a
    real recurring transaction and stamps ``transaction_ids`` with the new id.
    """

    bank_account_id: UUID
    title: str
    description: str
    amount: Decimal
    currency: str
    frequency: TransactionFrequency
    interval: int = Field(..., ge=1)
    start_date: date
    next_scheduled_date: date
    day_of_month: Optional[int] = None
    day_of_week: Optional[int] = None
    merchant_name: str
    is_variable: bool
    confidence_score: float = Field(..., ge=0.0, le=1.0)
    source: str = DETECTED_SOURCE
    transaction_ids: list[UUID]

    model_config = ConfigDict(frozen=True)

    @field_serializer("amount")
    def serialize_amount(self, value: Decimal) -> str:
        return str(value)

    @property
    def occurrences(self) -> int:
        return len(self.transaction_ids)
