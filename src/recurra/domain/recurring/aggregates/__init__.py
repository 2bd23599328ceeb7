from recurra.domain.recurring.aggregates.recurring_transaction import (
    RecurringTransaction,
)

__all__ = ["RecurringTransaction"]
