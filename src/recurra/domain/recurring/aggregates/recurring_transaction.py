"""RecurringTransaction aggregate."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from recurra.domain.recurring.exceptions import (
    InvalidScheduleError,
    InvalidStatusTransitionError,
    RecurringTransactionCancelledError,
)
from recurra.domain.recurring.services.calendar_stepper import CalendarStepper
from recurra.domain.recurring.services.projection_service import ProjectionState
from recurra.domain.recurring.value_objects import (
    RecurringStatus,
    ScheduleAnchors,
    TransactionFrequency,
    merge_tags,
    normalize_tags,
)
from recurra.domain.shared.time import utc_now


class RecurringTransaction:
    """
    A scheduled, repeating payment or deposit on a bank account.

    ``next_scheduled_date`` is always derived through the CalendarStepper
    from the schedule and a reference day; it cannot be set directly.
    Status and ``affect_available_balance`` are independent: pausing or
    cancelling a series leaves its projection contribution in place.
    """

    def __init__(  # NOQA: PLR0913
        self,
        bank_account_id: UUID,
        title: str,
        amount: Decimal,
        frequency: TransactionFrequency,
        start_date: date,
        as_of: date,
        interval: int = 1,
        currency: str = "USD",
        anchors: Optional[ScheduleAnchors] = None,
        end_date: Optional[date] = None,
        target_account_id: Optional[UUID] = None,
        description: Optional[str] = None,
        merchant_name: Optional[str] = None,
        merchant_id: Optional[str] = None,
        category_slug: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
        notes: Optional[str] = None,
        status: RecurringStatus = RecurringStatus.ACTIVE,
        is_variable: bool = False,
        is_automated: bool = True,
        requires_approval: bool = False,
        affect_available_balance: bool = True,
        initial_account_balance: Optional[Decimal] = None,
        source: Optional[str] = None,
        confidence_score: Optional[float] = None,
        created_by: Optional[UUID] = None,
        id: Optional[UUID] = None,
    ):
        _validate_schedule(frequency, interval, start_date, end_date)
        if not title.strip():
            raise InvalidScheduleError("title must not be empty")

        self._id = id if id is not None else uuid4()
        self._bank_account_id = bank_account_id
        self._target_account_id = target_account_id
        self._title = title.strip()
        self._description = description
        self._amount = Decimal(amount)
        self._currency = currency.upper()
        self._frequency = frequency
        self._interval = interval
        self._start_date = start_date
        self._end_date = end_date
        self._anchors = anchors or ScheduleAnchors.none()
        self._merchant_name = merchant_name
        self._merchant_id = merchant_id
        self._category_slug = category_slug
        self._tags = normalize_tags(tags or [])
        self._notes = notes
        self._status = status
        self._is_variable = is_variable
        self._is_automated = is_automated
        self._requires_approval = requires_approval
        self._affect_available_balance = affect_available_balance
        self._initial_account_balance = initial_account_balance
        self._source = source
        self._confidence_score = confidence_score
        self._assigned_to_user_id: Optional[UUID] = None
        self._execution_count = 0
        self._total_executed = Decimal(0)
        self._last_modified_by = created_by
        self._created_at = utc_now()
        self._updated_at = self._created_at
        self._next_scheduled_date = self._compute_next_scheduled_date(as_of)

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: UUID,
        bank_account_id: UUID,
        title: str,
        amount: Decimal,
        currency: str,
        frequency: TransactionFrequency,
        interval: int,
        start_date: date,
        next_scheduled_date: date,
        anchors: ScheduleAnchors,
        status: RecurringStatus,
        tags: list[str],
        execution_count: int,
        total_executed: Decimal,
        created_at: datetime,
        updated_at: datetime,
        end_date: Optional[date] = None,
        target_account_id: Optional[UUID] = None,
        description: Optional[str] = None,
        merchant_name: Optional[str] = None,
        merchant_id: Optional[str] = None,
        category_slug: Optional[str] = None,
        notes: Optional[str] = None,
        is_variable: bool = False,
        is_automated: bool = True,
        requires_approval: bool = False,
        affect_available_balance: bool = True,
        initial_account_balance: Optional[Decimal] = None,
        source: Optional[str] = None,
        confidence_score: Optional[float] = None,
        assigned_to_user_id: Optional[UUID] = None,
        last_modified_by: Optional[UUID] = None,
    ) -> RecurringTransaction:
        """Rebuild a persisted series without re-deriving any state."""
        instance = cls.__new__(cls)
        instance._id = id
        instance._bank_account_id = bank_account_id
        instance._target_account_id = target_account_id
        instance._title = title
        instance._description = description
        instance._amount = amount
        instance._currency = currency
        instance._frequency = frequency
        instance._interval = interval
        instance._start_date = start_date
        instance._end_date = end_date
        instance._anchors = anchors
        instance._merchant_name = merchant_name
        instance._merchant_id = merchant_id
        instance._category_slug = category_slug
        instance._tags = list(tags)
        instance._notes = notes
        instance._status = status
        instance._is_variable = is_variable
        instance._is_automated = is_automated
        instance._requires_approval = requires_approval
        instance._affect_available_balance = affect_available_balance
        instance._initial_account_balance = initial_account_balance
        instance._source = source
        instance._confidence_score = confidence_score
        instance._assigned_to_user_id = assigned_to_user_id
        instance._execution_count = execution_count
        instance._total_executed = total_executed
        instance._last_modified_by = last_modified_by
        instance._created_at = created_at
        instance._updated_at = updated_at
        instance._next_scheduled_date = next_scheduled_date
        return instance

    # ------------------------------------------------------------------
    # Identity and schedule
    # ------------------------------------------------------------------

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def bank_account_id(self) -> UUID:
        return self._bank_account_id

    @property
    def target_account_id(self) -> Optional[UUID]:
        return self._target_account_id

    @property
    def frequency(self) -> TransactionFrequency:
        return self._frequency

    @property
    def interval(self) -> int:
        return self._interval

    @property
    def start_date(self) -> date:
        return self._start_date

    @property
    def end_date(self) -> Optional[date]:
        return self._end_date

    @property
    def anchors(self) -> ScheduleAnchors:
        return self._anchors

    @property
    def next_scheduled_date(self) -> date:
        return self._next_scheduled_date

    # ------------------------------------------------------------------
    # Money
    # ------------------------------------------------------------------

    @property
    def amount(self) -> Decimal:
        return self._amount

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def affect_available_balance(self) -> bool:
        return self._affect_available_balance

    @property
    def initial_account_balance(self) -> Optional[Decimal]:
        return self._initial_account_balance

    @property
    def execution_count(self) -> int:
        return self._execution_count

    @property
    def total_executed(self) -> Decimal:
        return self._total_executed

    @property
    def projection_state(self) -> ProjectionState:
        return ProjectionState(
            bank_account_id=self._bank_account_id,
            amount=self._amount,
            affects_balance=self._affect_available_balance,
        )

    # ------------------------------------------------------------------
    # Classification and metadata
    # ------------------------------------------------------------------

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def merchant_name(self) -> Optional[str]:
        return self._merchant_name

    @property
    def merchant_id(self) -> Optional[str]:
        return self._merchant_id

    @property
    def category_slug(self) -> Optional[str]:
        return self._category_slug

    @property
    def tags(self) -> list[str]:
        return list(self._tags)

    @property
    def notes(self) -> Optional[str]:
        return self._notes

    @property
    def status(self) -> RecurringStatus:
        return self._status

    @property
    def is_variable(self) -> bool:
        return self._is_variable

    @property
    def is_automated(self) -> bool:
        return self._is_automated

    @property
    def requires_approval(self) -> bool:
        return self._requires_approval

    @property
    def source(self) -> Optional[str]:
        return self._source

    @property
    def confidence_score(self) -> Optional[float]:
        return self._confidence_score

    @property
    def assigned_to_user_id(self) -> Optional[UUID]:
        return self._assigned_to_user_id

    @property
    def last_modified_by(self) -> Optional[UUID]:
        return self._last_modified_by

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def is_cancelled(self) -> bool:
        return self._status.is_terminal()

    # ------------------------------------------------------------------
    # Schedule and amount changes
    # ------------------------------------------------------------------

    def reschedule(  # NOQA: PLR0913
        self,
        as_of: date,
        frequency: Optional[TransactionFrequency] = None,
        interval: Optional[int] = None,
        start_date: Optional[date] = None,
        anchors: Optional[ScheduleAnchors] = None,
    ):
        """Replace schedule fields and re-derive ``next_scheduled_date``."""
        self.ensure_not_cancelled()
        new_frequency = frequency or self._frequency
        new_interval = interval if interval is not None else self._interval
        new_start = start_date or self._start_date
        _validate_schedule(new_frequency, new_interval, new_start, self._end_date)

        self._frequency = new_frequency
        self._interval = new_interval
        self._start_date = new_start
        if anchors is not None:
            self._anchors = anchors
        self._next_scheduled_date = self._compute_next_scheduled_date(as_of)

    def replace_anchors(self, anchors: ScheduleAnchors):
        """Swap anchors without re-deriving the next date."""
        self.ensure_not_cancelled()
        self._anchors = anchors

    def set_end_date(self, end_date: Optional[date]):
        self.ensure_not_cancelled()
        _validate_schedule(self._frequency, self._interval, self._start_date, end_date)
        self._end_date = end_date

    def change_amount(self, amount: Decimal):
        self.ensure_not_cancelled()
        self._amount = Decimal(amount)

    def change_currency(self, currency: str):
        self.ensure_not_cancelled()
        self._currency = currency.upper()

    def move_to_account(self, bank_account_id: UUID):
        self.ensure_not_cancelled()
        self._bank_account_id = bank_account_id

    def set_target_account(self, target_account_id: Optional[UUID]):
        self.ensure_not_cancelled()
        self._target_account_id = target_account_id

    def set_affects_available_balance(self, value: bool):
        self.ensure_not_cancelled()
        self._affect_available_balance = value

    def set_description(self, description: Optional[str]):
        self.ensure_not_cancelled()
        self._description = description

    def update_details(  # NOQA: PLR0913
        self,
        title: Optional[str] = None,
        description: Optional[str] = None,
        is_variable: Optional[bool] = None,
        is_automated: Optional[bool] = None,
        requires_approval: Optional[bool] = None,
    ):
        self.ensure_not_cancelled()
        if title is not None:
            if not title.strip():
                raise InvalidScheduleError("title must not be empty")
            self._title = title.strip()
        if description is not None:
            self._description = description
        if is_variable is not None:
            self._is_variable = is_variable
        if is_automated is not None:
            self._is_automated = is_automated
        if requires_approval is not None:
            self._requires_approval = requires_approval

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def pause(self):
        self._transition_to(RecurringStatus.PAUSED)

    def resume(self):
        self._transition_to(RecurringStatus.ACTIVE)

    def cancel(self):
        self._transition_to(RecurringStatus.CANCELLED)

    def change_status(self, target: RecurringStatus):
        self._transition_to(target)

    def ensure_not_cancelled(self):
        if self.is_cancelled:
            raise RecurringTransactionCancelledError(self._id)

    def _transition_to(self, target: RecurringStatus):
        if target is self._status:
            return
        if not self._status.can_transition_to(target):
            raise InvalidStatusTransitionError(self._status.value, target.value)
        self._status = target

    # ------------------------------------------------------------------
    # Metadata (no schedule or projection side effects)
    # ------------------------------------------------------------------

    def replace_tags(self, tags: Iterable[str]):
        self._tags = normalize_tags(tags)

    def add_tags(self, tags: Iterable[str]):
        self._tags = merge_tags(self._tags, tags)

    def update_notes(self, notes: Optional[str]):
        self._notes = notes

    def update_category(self, category_slug: Optional[str]):
        self._category_slug = category_slug

    def update_merchant(
        self,
        merchant_name: Optional[str],
        merchant_id: Optional[str] = None,
    ):
        self._merchant_name = merchant_name
        self._merchant_id = merchant_id

    def assign_to(self, user_id: UUID):
        self._assigned_to_user_id = user_id

    def mark_modified_by(self, user_id: UUID):
        self._last_modified_by = user_id
        self._updated_at = utc_now()

    def _compute_next_scheduled_date(self, as_of: date) -> date:
        return CalendarStepper.advance_until(
            self._start_date,
            self._frequency,
            self._interval,
            self._anchors,
            not_before=as_of,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecurringTransaction):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"RecurringTransaction(id={self._id}, title={self._title!r}, "
            f"amount={self._amount} {self._currency}, "
            f"frequency={self._frequency.value}, status={self._status.value})"
        )


def _validate_schedule(
    frequency: TransactionFrequency,
    interval: int,
    start_date: date,
    end_date: Optional[date],
):
    if not isinstance(frequency, TransactionFrequency):
        raise InvalidScheduleError("unknown frequency", frequency=str(frequency))
    if interval < 1:
        raise InvalidScheduleError("interval must be at least 1", interval=interval)
    if end_date is not None and end_date < start_date:
        raise InvalidScheduleError(
            "end_date must not be before start_date",
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
        )
