from recurra.application.dtos.recurring.recurring_page_dto import (
    AssociatedTransactionsPageDTO,
    PaginationDTO,
    RecurringTransactionPageDTO,
)
from recurra.application.dtos.recurring.recurring_transaction_input import (
    CLEARABLE_FIELDS,
    SCHEDULE_FIELDS,
    RecurringTransactionCreateInput,
    RecurringTransactionUpdateInput,
)

__all__ = [
    "CLEARABLE_FIELDS",
    "SCHEDULE_FIELDS",
    "AssociatedTransactionsPageDTO",
    "PaginationDTO",
    "RecurringTransactionCreateInput",
    "RecurringTransactionPageDTO",
    "RecurringTransactionUpdateInput",
]
