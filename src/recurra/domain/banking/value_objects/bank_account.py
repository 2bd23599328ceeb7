"""Bank account value object."""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class BankAccount(BaseModel):
    """
    Value object representing a user's bank account.

    ``scheduled_inflows`` and ``scheduled_outflows`` are running sums of the
    magnitudes of every balance-affecting recurring transaction on the
    account. They are only ever changed through atomic counter adjustments.
    """

    id: UUID
    user_id: UUID
    name: str = Field(..., max_length=255)
    currency: str = Field(default="USD", max_length=3)
    current_balance: Decimal = Decimal(0)
    scheduled_inflows: Decimal = Decimal(0)
    scheduled_outflows: Decimal = Decimal(0)

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
    )

    @field_serializer("current_balance", "scheduled_inflows", "scheduled_outflows")
    def serialize_decimal(self, value: Decimal) -> str:
        return str(value)

    @property
    def available_balance(self) -> Decimal:
        """Current balance after all scheduled flows have settled."""
        return self.current_balance + self.scheduled_inflows - self.scheduled_outflows

    def __str__(self) -> str:
        return f"{self.name} ({self.current_balance} {self.currency})"
