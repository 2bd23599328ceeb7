"""SQLAlchemy model for bank accounts."""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from recurra.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class BankAccountModel(Base, TimestampMixin):
    """Database model for bank accounts and their projection counters."""

    __tablename__ = "bank_accounts"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    # User association
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="USD")

    # Balances
    current_balance: Mapped[Decimal] = mapped_column(
        Numeric(15, 2),
        nullable=False,
        default=Decimal(0),
    )
    scheduled_inflows: Mapped[Decimal] = mapped_column(
        Numeric(15, 2),
        nullable=False,
        default=Decimal(0),
    )
    scheduled_outflows: Mapped[Decimal] = mapped_column(
        Numeric(15, 2),
        nullable=False,
        default=Decimal(0),
    )

    def __repr__(self) -> str:
        return (
            f"<BankAccountModel(id={self.id}, name={self.name}, "
            f"in={self.scheduled_inflows}, out={self.scheduled_outflows})>"
        )
