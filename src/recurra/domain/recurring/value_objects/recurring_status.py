"""Lifecycle status of a recurring transaction."""

from enum import Enum


class RecurringStatus(str, Enum):
    """Status of a recurring series.

    ACTIVE and PAUSED can be switched back and forth. CANCELLED is terminal.
    """

    ACTIVE = "active"
    PAUSED = "paused"
    CANCELLED = "cancelled"

    def is_terminal(self) -> bool:
        return self is RecurringStatus.CANCELLED

    def can_transition_to(self, target: "RecurringStatus") -> bool:
        if self.is_terminal():
            return False
        if target is RecurringStatus.CANCELLED:
            return True
        return {self, target} == {RecurringStatus.ACTIVE, RecurringStatus.PAUSED}
