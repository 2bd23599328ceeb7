"""Normalized transaction record used for pattern detection."""

import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class TransactionRecord(BaseModel):
    """A booked bank transaction as seen by the recurring engine.

    Negative amounts are outflows, positive amounts are inflows. Records are
    read-only here except for the back-reference to a recurring series.
    """

    id: UUID
    bank_account_id: UUID
    amount: Decimal
    date: datetime.date
    name: str = Field(..., min_length=1)
    merchant_name: Optional[str] = None
    recurring_transaction_id: Optional[UUID] = None

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_serializer("amount")
    def serialize_amount(self, value: Decimal) -> str:
        return str(value)

    @property
    def merchant_key(self) -> str:
        return self.merchant_name or self.name
