"""SQLAlchemy ORM models."""

from recurra.infrastructure.persistence.sqlalchemy.models.bank_account_model import (
    BankAccountModel,
)
from recurra.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from recurra.infrastructure.persistence.sqlalchemy.models.recurring_transaction_model import (  # NOQA: E501
    RecurringTransactionModel,
)
from recurra.infrastructure.persistence.sqlalchemy.models.transaction_model import (
    TransactionModel,
)

__all__ = [
    "BankAccountModel",
    "Base",
    "RecurringTransactionModel",
    "TimestampMixin",
    "TransactionModel",
]
