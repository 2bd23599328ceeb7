"""Command payloads for recurring transaction mutations."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from recurra.domain.recurring.value_objects import (
    RecurringCandidate,
    RecurringStatus,
    ScheduleAnchors,
    TransactionFrequency,
    WeekOfMonth,
)

ANCHOR_FIELDS = frozenset(
    {"day_of_month", "day_of_week", "week_of_month", "month_of_year"},
)

# Changing any of these re-derives next_scheduled_date.
SCHEDULE_FIELDS = frozenset(
    {"frequency", "start_date", "interval", "day_of_month", "day_of_week"},
)

# Fields that may be sent as null to clear them on update.
CLEARABLE_FIELDS = frozenset(
    {
        "description",
        "end_date",
        "target_account_id",
        "category_slug",
        "merchant_name",
        "merchant_id",
        "notes",
        *ANCHOR_FIELDS,
    },
)


class _RecurringFields(BaseModel):
    """Fields shared by create and update payloads."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    @field_validator("currency", check_fields=False)
    @classmethod
    def _upper_currency(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v else v


class RecurringTransactionCreateInput(_RecurringFields):
    """Payload for creating a recurring transaction."""

    bank_account_id: UUID
    title: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., decimal_places=2)
    frequency: TransactionFrequency
    start_date: date
    interval: int = Field(default=1, ge=1)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    description: Optional[str] = None
    end_date: Optional[date] = None
    day_of_month: Optional[int] = Field(default=None, ge=1, le=31)
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    week_of_month: WeekOfMonth = None
    month_of_year: Optional[int] = Field(default=None, ge=1, le=12)
    category_slug: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    merchant_name: Optional[str] = None
    merchant_id: Optional[str] = None
    status: RecurringStatus = RecurringStatus.ACTIVE
    is_automated: bool = True
    requires_approval: bool = False
    is_variable: bool = False
    affect_available_balance: bool = True
    notes: Optional[str] = None
    target_account_id: Optional[UUID] = None
    source: Optional[str] = None
    confidence_score: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    @field_validator("status")
    @classmethod
    def _not_cancelled(cls, v: RecurringStatus) -> RecurringStatus:
        if v.is_terminal():
            msg = "A recurring transaction cannot be created as cancelled"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def _end_after_start(self) -> RecurringTransactionCreateInput:
        if self.end_date is not None and self.end_date < self.start_date:
            msg = "end_date must not be before start_date"
            raise ValueError(msg)
        return self

    def anchors(self) -> ScheduleAnchors:
        return ScheduleAnchors(
            day_of_month=self.day_of_month,
            day_of_week=self.day_of_week,
            week_of_month=self.week_of_month,
            month_of_year=self.month_of_year,
        )

    @classmethod
    def from_candidate(
        cls,
        candidate: RecurringCandidate,
        **overrides: Any,
    ) -> RecurringTransactionCreateInput:
        """Build a create payload from an accepted detection candidate."""
        data: dict[str, Any] = {
            "bank_account_id": candidate.bank_account_id,
            "title": candidate.title,
            "description": candidate.description,
            "amount": candidate.amount,
            "currency": candidate.currency,
            "frequency": candidate.frequency,
            "interval": candidate.interval,
            "start_date": candidate.start_date,
            "day_of_month": candidate.day_of_month,
            "day_of_week": candidate.day_of_week,
            "merchant_name": candidate.merchant_name,
            "is_variable": candidate.is_variable,
            "source": candidate.source,
            "confidence_score": candidate.confidence_score,
        }
        data.update(overrides)
        return cls(**data)


class RecurringTransactionUpdateInput(_RecurringFields):
    """Partial payload for updating a recurring transaction.

    Only fields that were explicitly set are applied. Fields in
    ``CLEARABLE_FIELDS`` may be set to None to clear them.
    """

    bank_account_id: Optional[UUID] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    amount: Optional[Decimal] = Field(default=None, decimal_places=2)
    frequency: Optional[TransactionFrequency] = None
    start_date: Optional[date] = None
    interval: Optional[int] = Field(default=None, ge=1)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    description: Optional[str] = None
    end_date: Optional[date] = None
    day_of_month: Optional[int] = Field(default=None, ge=1, le=31)
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    week_of_month: WeekOfMonth = None
    month_of_year: Optional[int] = Field(default=None, ge=1, le=12)
    category_slug: Optional[str] = None
    tags: Optional[list[str]] = None
    merchant_name: Optional[str] = None
    merchant_id: Optional[str] = None
    status: Optional[RecurringStatus] = None
    is_automated: Optional[bool] = None
    requires_approval: Optional[bool] = None
    is_variable: Optional[bool] = None
    affect_available_balance: Optional[bool] = None
    notes: Optional[str] = None
    target_account_id: Optional[UUID] = None

    @model_validator(mode="after")
    def _no_null_for_required(self) -> RecurringTransactionUpdateInput:
        nulled = sorted(
            name
            for name in self.model_fields_set - CLEARABLE_FIELDS
            if getattr(self, name) is None
        )
        if nulled:
            msg = f"Fields cannot be cleared: {', '.join(nulled)}"
            raise ValueError(msg)
        return self

    def changes(self) -> set[str]:
        return set(self.model_fields_set)

    def touches_schedule(self) -> bool:
        return bool(self.model_fields_set & SCHEDULE_FIELDS)

    def touches_anchors(self) -> bool:
        return bool(self.model_fields_set & ANCHOR_FIELDS)

    def merged_anchors(self, current: ScheduleAnchors) -> ScheduleAnchors:
        update = {
            name: getattr(self, name)
            for name in ANCHOR_FIELDS & self.model_fields_set
        }
        return ScheduleAnchors(**{**current.model_dump(), **update})
