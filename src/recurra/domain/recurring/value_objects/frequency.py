"""Recurrence frequency enumeration."""

from enum import Enum


class TransactionFrequency(str, Enum):
    """How often a recurring transaction repeats.

    ``interval`` on the owning series multiplies the base period, except for
    SEMI_MONTHLY which always alternates between the 1st and the 15th.
    """

    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    SEMI_MONTHLY = "SEMI_MONTHLY"
    MONTHLY = "MONTHLY"
    ANNUALLY = "ANNUALLY"
    IRREGULAR = "IRREGULAR"

    def uses_day_of_month(self) -> bool:
        return self in (
            TransactionFrequency.MONTHLY,
            TransactionFrequency.SEMI_MONTHLY,
            TransactionFrequency.ANNUALLY,
        )

    def uses_day_of_week(self) -> bool:
        return self in (TransactionFrequency.WEEKLY, TransactionFrequency.BIWEEKLY)
