"""List recurring transactions with filters and pagination."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from recurra.application.dtos.recurring import (
    PaginationDTO,
    RecurringTransactionPageDTO,
)
from recurra.domain.recurring.repositories import (
    RecurringTransactionFilter,
    RecurringTransactionRepository,
)
from recurra.domain.recurring.value_objects import (
    RecurringStatus,
    TransactionFrequency,
)
from recurra.domain.shared.exceptions import ValidationError

if TYPE_CHECKING:
    from recurra.application.factories import RepositoryFactory

MAX_PAGE_SIZE = 100


def validate_page(page: int, limit: int) -> None:
    if page < 1:
        raise ValidationError("page must be at least 1", details={"page": page})
    if not 1 <= limit <= MAX_PAGE_SIZE:
        raise ValidationError(
            f"limit must be between 1 and {MAX_PAGE_SIZE}",
            details={"limit": limit},
        )


class ListRecurringTransactionsQuery:
    """Page through the user's series, soonest next date first."""

    def __init__(self, recurring_transaction_repository: RecurringTransactionRepository):
        self._recurring_repo = recurring_transaction_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> ListRecurringTransactionsQuery:
        return cls(
            recurring_transaction_repository=factory.recurring_transaction_repository(),
        )

    async def execute(  # NOQA: PLR0913
        self,
        page: int = 1,
        limit: int = 20,
        title: Optional[str] = None,
        merchant_name: Optional[str] = None,
        status: Optional[RecurringStatus] = None,
        frequency: Optional[TransactionFrequency] = None,
        min_amount: Optional[Decimal] = None,
        max_amount: Optional[Decimal] = None,
        bank_account_id: Optional[UUID] = None,
    ) -> RecurringTransactionPageDTO:
        validate_page(page, limit)
        filters = RecurringTransactionFilter(
            title=title,
            merchant_name=merchant_name,
            status=status,
            frequency=frequency,
            min_amount=min_amount,
            max_amount=max_amount,
            bank_account_id=bank_account_id,
        )

        items = await self._recurring_repo.find_with_filters(
            filters,
            offset=(page - 1) * limit,
            limit=limit,
        )
        total = await self._recurring_repo.count_with_filters(filters)

        return RecurringTransactionPageDTO(
            recurring_transactions=items,
            pagination=PaginationDTO(total=total, page=page, limit=limit),
        )
