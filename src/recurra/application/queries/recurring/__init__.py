"""Recurring transaction queries - detection and read side."""

from recurra.application.queries.recurring.detect_recurring_transactions_query import (
    DetectionParameters,
    DetectRecurringTransactionsQuery,
)
from recurra.application.queries.recurring.get_associated_transactions_query import (
    GetAssociatedTransactionsQuery,
)
from recurra.application.queries.recurring.get_recurring_transaction_query import (
    GetRecurringTransactionQuery,
)
from recurra.application.queries.recurring.list_recurring_transactions_query import (
    MAX_PAGE_SIZE,
    ListRecurringTransactionsQuery,
)

__all__ = [
    "MAX_PAGE_SIZE",
    "DetectRecurringTransactionsQuery",
    "DetectionParameters",
    "GetAssociatedTransactionsQuery",
    "GetRecurringTransactionQuery",
    "ListRecurringTransactionsQuery",
]
