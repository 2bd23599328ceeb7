"""Calendar arithmetic for recurring schedules."""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Optional

from recurra.domain.recurring.exceptions import InvalidScheduleError
from recurra.domain.recurring.value_objects import (
    ScheduleAnchors,
    TransactionFrequency,
)

SEMI_MONTHLY_SECOND_DAY = 15


class CalendarStepper:
    """Pure date stepping for every supported frequency.

    Rules per frequency:
    - WEEKLY / BIWEEKLY: add 7 / 14 days times ``interval``
    - MONTHLY: add ``interval`` months, keeping the day of month where the
      target month is long enough and clamping to its last day otherwise
    - SEMI_MONTHLY: 1st-14th moves to the 15th, 15th onwards moves to the
      1st of the next month; ``interval`` is ignored
    - ANNUALLY: add ``interval`` years (29 February clamps to the 28th)
    - IRREGULAR: one day
    """

    @staticmethod
    def next_occurrence(
        reference: date,
        frequency: TransactionFrequency,
        interval: int = 1,
        anchors: Optional[ScheduleAnchors] = None,
    ) -> date:
        CalendarStepper._validate_interval(interval)
        day_anchor = anchors.day_of_month if anchors else None

        if frequency is TransactionFrequency.WEEKLY:
            return reference + timedelta(days=7 * interval)
        if frequency is TransactionFrequency.BIWEEKLY:
            return reference + timedelta(days=14 * interval)
        if frequency is TransactionFrequency.MONTHLY:
            return _add_months(reference, interval, day_anchor or reference.day)
        if frequency is TransactionFrequency.SEMI_MONTHLY:
            if reference.day < SEMI_MONTHLY_SECOND_DAY:
                return reference.replace(day=SEMI_MONTHLY_SECOND_DAY)
            return _add_months(reference, 1, 1)
        if frequency is TransactionFrequency.ANNUALLY:
            return _add_months(reference, 12 * interval, day_anchor or reference.day)
        return reference + timedelta(days=1)

    @staticmethod
    def advance_until(
        start: date,
        frequency: TransactionFrequency,
        interval: int,
        anchors: Optional[ScheduleAnchors],
        not_before: date,
    ) -> date:
        """Step forward from ``start`` until the date is on or after ``not_before``.

        Returns ``start`` unchanged when it already is. Every step moves the
        date strictly forward, so the loop always terminates. Without a
        ``day_of_month`` anchor the day of ``start`` is kept, so a clamped
        step (31 January -> 29 February) does not shift later occurrences.
        """
        CalendarStepper._validate_interval(interval)
        anchors = anchors or ScheduleAnchors.none()
        if anchors.day_of_month is None:
            anchors = anchors.model_copy(update={"day_of_month": start.day})

        current = start
        while current < not_before:
            current = CalendarStepper.next_occurrence(
                current,
                frequency,
                interval,
                anchors,
            )
        return current

    @staticmethod
    def _validate_interval(interval: int) -> None:
        if interval < 1:
            raise InvalidScheduleError("interval must be at least 1", interval=interval)


def _add_months(reference: date, months: int, preferred_day: int) -> date:
    month_index = reference.month - 1 + months
    year = reference.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(preferred_day, last_day))
