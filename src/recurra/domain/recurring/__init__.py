"""Recurring transaction context.

Detection of recurring patterns, the RecurringTransaction aggregate with
its calendar arithmetic, and the reconciliation of bank account projection
counters.
"""

from recurra.domain.recurring.aggregates import RecurringTransaction
from recurra.domain.recurring.exceptions import (
    BankAccountAccessDeniedError,
    InvalidScheduleError,
    InvalidStatusTransitionError,
    RecurringTransactionCancelledError,
    RecurringTransactionNotFoundError,
)
from recurra.domain.recurring.value_objects import (
    ProjectionDelta,
    RecurringCandidate,
    RecurringStatus,
    ScheduleAnchors,
    TransactionFrequency,
)

__all__ = [
    "BankAccountAccessDeniedError",
    "InvalidScheduleError",
    "InvalidStatusTransitionError",
    "ProjectionDelta",
    "RecurringCandidate",
    "RecurringStatus",
    "RecurringTransaction",
    "RecurringTransactionCancelledError",
    "RecurringTransactionNotFoundError",
    "ScheduleAnchors",
    "TransactionFrequency",
]
