"""SQLAlchemy model for recurring transactions."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from recurra.infrastructure.persistence.sqlalchemy.models.base import Base


class RecurringTransactionModel(Base):
    """Database model for recurring series.

    Ownership is resolved through ``bank_account_id``; timestamps are
    owned by the aggregate and written explicitly.
    """

    __tablename__ = "recurring_transactions"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    bank_account_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("bank_accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    target_account_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid,
        ForeignKey("bank_accounts.id", ondelete="SET NULL"),
    )

    # Description
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)

    # Money
    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    initial_account_balance: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(15, 2),
    )

    # Schedule
    frequency: Mapped[str] = mapped_column(String(20), nullable=False)
    interval: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[Optional[date]] = mapped_column(Date)
    day_of_month: Mapped[Optional[int]] = mapped_column(Integer)
    day_of_week: Mapped[Optional[int]] = mapped_column(Integer)
    week_of_month: Mapped[Optional[int]] = mapped_column(Integer)
    month_of_year: Mapped[Optional[int]] = mapped_column(Integer)
    next_scheduled_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        index=True,
    )

    # Execution tracking
    execution_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_executed: Mapped[Decimal] = mapped_column(
        Numeric(15, 2),
        nullable=False,
        default=Decimal(0),
    )

    # Classification
    merchant_name: Mapped[Optional[str]] = mapped_column(String(255))
    merchant_id: Mapped[Optional[str]] = mapped_column(String(255))
    category_slug: Mapped[Optional[str]] = mapped_column(String(100))
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[Optional[str]] = mapped_column(Text)

    # Flags
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    is_variable: Mapped[bool] = mapped_column(Boolean, default=False)
    is_automated: Mapped[bool] = mapped_column(Boolean, default=True)
    requires_approval: Mapped[bool] = mapped_column(Boolean, default=False)
    affect_available_balance: Mapped[bool] = mapped_column(Boolean, default=True)

    # Detection provenance
    source: Mapped[Optional[str]] = mapped_column(String(50))
    confidence_score: Mapped[Optional[float]] = mapped_column(Float)

    # People
    assigned_to_user_id: Mapped[Optional[UUID]] = mapped_column(Uuid)
    last_modified_by: Mapped[Optional[UUID]] = mapped_column(Uuid)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<RecurringTransactionModel(id={self.id}, title={self.title}, "
            f"amount={self.amount}, frequency={self.frequency})>"
        )
