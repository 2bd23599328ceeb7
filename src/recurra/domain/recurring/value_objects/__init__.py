"""Value objects of the recurring transaction context."""

from recurra.domain.recurring.value_objects.frequency import TransactionFrequency
from recurra.domain.recurring.value_objects.projection_delta import ProjectionDelta
from recurra.domain.recurring.value_objects.recurring_candidate import (
    DETECTED_SOURCE,
    RecurringCandidate,
)
from recurra.domain.recurring.value_objects.recurring_status import RecurringStatus
from recurra.domain.recurring.value_objects.schedule_anchors import (
    LAST_WEEK_OF_MONTH,
    ScheduleAnchors,
    WeekOfMonth,
)
from recurra.domain.recurring.value_objects.tags import merge_tags, normalize_tags

__all__ = [
    "DETECTED_SOURCE",
    "LAST_WEEK_OF_MONTH",
    "ProjectionDelta",
    "RecurringCandidate",
    "RecurringStatus",
    "ScheduleAnchors",
    "TransactionFrequency",
    "WeekOfMonth",
    "merge_tags",
    "normalize_tags",
]
