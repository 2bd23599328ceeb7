"""Domain services of the recurring transaction context."""

from recurra.domain.recurring.services.calendar_stepper import CalendarStepper
from recurra.domain.recurring.services.pattern_detector import (
    FREQUENCY_BANDS,
    FrequencyClassification,
    IntervalStatistics,
    RecurringPatternDetector,
)
from recurra.domain.recurring.services.projection_service import (
    ProjectionAdjustment,
    ProjectionService,
    ProjectionState,
)

__all__ = [
    "FREQUENCY_BANDS",
    "CalendarStepper",
    "FrequencyClassification",
    "IntervalStatistics",
    "ProjectionAdjustment",
    "ProjectionService",
    "ProjectionState",
    "RecurringPatternDetector",
]
