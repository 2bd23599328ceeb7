"""Recurring transaction domain exceptions."""

from uuid import UUID

from recurra.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ForbiddenError,
    ValidationError,
)


class RecurringTransactionNotFoundError(EntityNotFoundError):
    """Raised when a recurring transaction cannot be found for the caller."""

    def __init__(self, recurring_transaction_id: UUID | str) -> None:
        super().__init__(
            message=f"Recurring transaction '{recurring_transaction_id}' not found",
            code=ErrorCode.RECURRING_TRANSACTION_NOT_FOUND,
            details={"recurring_transaction_id": str(recurring_transaction_id)},
        )


class BankAccountAccessDeniedError(ForbiddenError):
    """Raised when a bank account is missing or owned by another user."""

    def __init__(self, bank_account_id: UUID | str, role: str = "Bank") -> None:
        super().__init__(
            message=f"{role} account not found or unauthorized",
            code=ErrorCode.FORBIDDEN,
            details={"bank_account_id": str(bank_account_id), "role": role},
        )


class InvalidScheduleError(ValidationError):
    """Raised when frequency, interval or anchors do not form a valid schedule."""

    def __init__(self, reason: str, **details: object) -> None:
        super().__init__(
            message=f"Invalid schedule: {reason}",
            code=ErrorCode.INVALID_SCHEDULE,
            details=dict(details),
        )


class RecurringTransactionCancelledError(ConflictError):
    """Raised when a cancelled series is edited."""

    def __init__(self, recurring_transaction_id: UUID | str) -> None:
        super().__init__(
            message=(
                f"Recurring transaction '{recurring_transaction_id}' is cancelled "
                "and can no longer be changed"
            ),
            code=ErrorCode.RECURRING_TRANSACTION_CANCELLED,
            details={"recurring_transaction_id": str(recurring_transaction_id)},
        )


class InvalidStatusTransitionError(ConflictError):
    """Raised when a status change is not allowed from the current status."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            message=f"Cannot change status from '{current}' to '{target}'",
            code=ErrorCode.INVALID_STATUS_TRANSITION,
            details={"current_status": current, "target_status": target},
        )
