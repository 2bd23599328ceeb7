"""SQLAlchemy model for imported bank transactions."""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from recurra.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class TransactionModel(Base, TimestampMixin):
    """Database model for transactions read by detection."""

    __tablename__ = "transactions"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    bank_account_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("bank_accounts.id", ondelete="CASCADE"),
        nullable=False,
    )

    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    merchant_name: Mapped[Optional[str]] = mapped_column(String(255))

    # Back-reference, stamped when matched to a recurring series
    recurring_transaction_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid,
        index=True,
    )

    __table_args__ = (Index("idx_transactions_user_date", "user_id", "date"),)

    def __repr__(self) -> str:
        return (
            f"<TransactionModel(id={self.id}, date={self.date}, "
            f"amount={self.amount}, name={self.name})>"
        )
