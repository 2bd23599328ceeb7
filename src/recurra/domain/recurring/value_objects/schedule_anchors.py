"""Schedule anchor value object."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

LAST_WEEK_OF_MONTH = -1


def _check_week_of_month(v: Optional[int]) -> Optional[int]:
    if v is None or v == LAST_WEEK_OF_MONTH or 1 <= v <= 5:  # NOQA: PLR2004
        return v
    msg = "week_of_month must be between 1 and 5, or -1 for the last week"
    raise ValueError(msg)


WeekOfMonth = Annotated[Optional[int], AfterValidator(_check_week_of_month)]


class ScheduleAnchors(BaseModel):
    """Calendar anchors of a recurring schedule.

    Which anchors are meaningful depends on the frequency: ``day_of_month``
    for MONTHLY, SEMI_MONTHLY and ANNUALLY; ``day_of_week`` for WEEKLY and
    BIWEEKLY. ``day_of_week`` counts from 0 = Sunday to 6 = Saturday.
    ``week_of_month`` is 1-5, or -1 for the last week of the month.
    """

    day_of_month: Optional[int] = Field(default=None, ge=1, le=31)
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    week_of_month: WeekOfMonth = None
    month_of_year: Optional[int] = Field(default=None, ge=1, le=12)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def none(cls) -> ScheduleAnchors:
        return cls()

    @staticmethod
    def sunday_based_weekday(value: date) -> int:
        """Weekday of ``value`` where 0 is Sunday."""
        return (value.weekday() + 1) % 7
