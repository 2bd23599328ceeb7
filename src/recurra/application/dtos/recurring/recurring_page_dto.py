"""DTOs for paginated recurring transaction reads."""

from __future__ import annotations

import math
from dataclasses import dataclass

from recurra.domain.banking.value_objects import TransactionRecord
from recurra.domain.recurring.aggregates import RecurringTransaction


@dataclass(frozen=True)
class PaginationDTO:
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "pages": self.pages,
        }


@dataclass(frozen=True)
class RecurringTransactionPageDTO:
    """One page of recurring transactions plus pagination info."""

    recurring_transactions: list[RecurringTransaction]
    pagination: PaginationDTO


@dataclass(frozen=True)
class AssociatedTransactionsPageDTO:
    """One page of transactions linked to a recurring series."""

    transactions: list[TransactionRecord]
    pagination: PaginationDTO
