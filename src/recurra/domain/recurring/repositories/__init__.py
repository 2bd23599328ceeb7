from recurra.domain.recurring.repositories.recurring_transaction_repository import (
    RecurringTransactionFilter,
    RecurringTransactionRepository,
)

__all__ = ["RecurringTransactionFilter", "RecurringTransactionRepository"]
