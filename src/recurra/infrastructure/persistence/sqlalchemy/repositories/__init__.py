"""SQLAlchemy repository implementations."""

from recurra.infrastructure.persistence.sqlalchemy.repositories.bank_account_repository import (  # NOQA: E501
    BankAccountRepositorySQLAlchemy,
)
from recurra.infrastructure.persistence.sqlalchemy.repositories.recurring_transaction_repository import (  # NOQA: E501
    RecurringTransactionRepositorySQLAlchemy,
)
from recurra.infrastructure.persistence.sqlalchemy.repositories.transaction_repository import (  # NOQA: E501
    TransactionRepositorySQLAlchemy,
)

__all__ = [
    "BankAccountRepositorySQLAlchemy",
    "RecurringTransactionRepositorySQLAlchemy",
    "TransactionRepositorySQLAlchemy",
]
