"""Detection of recurring payment patterns in transaction history."""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional
from uuid import UUID

import numpy as np

from recurra.domain.banking.value_objects import TransactionRecord
from recurra.domain.recurring.services.calendar_stepper import CalendarStepper
from recurra.domain.recurring.value_objects import (
    RecurringCandidate,
    ScheduleAnchors,
    TransactionFrequency,
)

logger = logging.getLogger(__name__)

# Frequency bands in priority order: the first band containing the average
# interval wins. SEMI_MONTHLY (13-15) is checked before BIWEEKLY (12-16).
FREQUENCY_BANDS: tuple[tuple[TransactionFrequency, float, float], ...] = (
    (TransactionFrequency.MONTHLY, 25, 35),
    (TransactionFrequency.SEMI_MONTHLY, 13, 15),
    (TransactionFrequency.BIWEEKLY, 12, 16),
    (TransactionFrequency.WEEKLY, 6, 8),
    (TransactionFrequency.ANNUALLY, 350, 380),
)

# Fallback buckets for averages outside every band: (exclusive lower bound,
# frequency, base period in days). Checked top to bottom.
FALLBACK_BUCKETS: tuple[tuple[float, TransactionFrequency, int], ...] = (
    (90, TransactionFrequency.ANNUALLY, 365),
    (21, TransactionFrequency.MONTHLY, 30),
    (10, TransactionFrequency.BIWEEKLY, 14),
    (float("-inf"), TransactionFrequency.WEEKLY, 7),
)

# Share of the average interval that the interval std-dev may reach before
# confidence drops to zero.
MAX_RELATIVE_DEVIATION = 0.3

# Coefficient of variation above which an amount counts as variable.
VARIABLE_AMOUNT_THRESHOLD = 0.05

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class IntervalStatistics:
    """Day-gap statistics of one merchant group."""

    intervals: tuple[int, ...]
    average: float
    std_dev: float


@dataclass(frozen=True)
class FrequencyClassification:
    frequency: TransactionFrequency
    interval: int


class RecurringPatternDetector:
    """Infer recurring schedules from a batch of transactions.

    Detection is a pure computation: it reads the records it is given and
    returns candidates without persisting anything.
    """

    @staticmethod
    def detect(  # NOQA: PLR0913
        transactions: Iterable[TransactionRecord],
        today: date,
        min_confidence: float = 0.7,
        minimum_occurrences: int = 2,
        lookback_days: int = 90,
        bank_account_id: Optional[UUID] = None,
        currency: str = "USD",
    ) -> list[RecurringCandidate]:
        window_start = today - timedelta(days=lookback_days)
        in_window = [
            txn
            for txn in transactions
            if txn.date >= window_start
            and (bank_account_id is None or txn.bank_account_id == bank_account_id)
        ]

        candidates: list[RecurringCandidate] = []
        for merchant_key, group in RecurringPatternDetector.group_by_merchant(
            in_window,
        ).items():
            if len(group) < minimum_occurrences:
                continue

            candidate = RecurringPatternDetector._analyze_group(
                merchant_key,
                group,
                min_confidence,
                currency,
            )
            if candidate is not None:
                candidates.append(candidate)

        logger.debug(
            "Detected %d recurring candidates from %d transactions",
            len(candidates),
            len(in_window),
        )
        return candidates

    @staticmethod
    def group_by_merchant(
        transactions: Iterable[TransactionRecord],
    ) -> dict[str, list[TransactionRecord]]:
        """Group records by merchant name (falling back to the raw name).

        Each group is sorted by date ascending.
        """
        groups: dict[str, list[TransactionRecord]] = defaultdict(list)
        for txn in sorted(transactions, key=lambda t: t.date):
            groups[txn.merchant_key].append(txn)
        return dict(groups)

    @staticmethod
    def interval_statistics(dates: Sequence[date]) -> IntervalStatistics:
        intervals = tuple(
            (later - earlier).days for earlier, later in zip(dates, dates[1:])
        )
        if not intervals:
            return IntervalStatistics(intervals=(), average=0.0, std_dev=0.0)
        return IntervalStatistics(
            intervals=intervals,
            average=float(np.mean(intervals)),
            std_dev=float(np.std(intervals)),
        )

    @staticmethod
    def classify_frequency(average_interval: float) -> FrequencyClassification:
        for frequency, lower, upper in FREQUENCY_BANDS:
            if lower <= average_interval <= upper:
                return FrequencyClassification(frequency=frequency, interval=1)

        _, frequency, base_days = next(
            bucket for bucket in FALLBACK_BUCKETS if average_interval > bucket[0]
        )
        interval = _round_half_up(average_interval / base_days)
        return FrequencyClassification(frequency=frequency, interval=max(1, interval))

    @staticmethod
    def confidence_score(average_interval: float, std_dev: float) -> float:
        """Score in [0, 1]; lower deviation between gaps scores higher."""
        if average_interval <= 0:
            return 0.0
        max_allowed = average_interval * MAX_RELATIVE_DEVIATION
        return max(0.0, min(1.0, 1 - std_dev / max_allowed))

    @staticmethod
    def is_variable_amount(amounts: Sequence[Decimal]) -> bool:
        values = np.array([float(a) for a in amounts])
        mean = float(np.mean(values))
        std_dev = float(np.std(values))
        if mean == 0:
            return std_dev > 0
        return std_dev / abs(mean) > VARIABLE_AMOUNT_THRESHOLD

    @staticmethod
    def _analyze_group(
        merchant_key: str,
        group: list[TransactionRecord],
        min_confidence: float,
        currency: str,
    ) -> Optional[RecurringCandidate]:
        stats = RecurringPatternDetector.interval_statistics([t.date for t in group])
        if stats.average <= 0:
            # Every occurrence on the same day: no cadence to infer
            return None

        classification = RecurringPatternDetector.classify_frequency(stats.average)
        confidence = RecurringPatternDetector.confidence_score(
            stats.average,
            stats.std_dev,
        )
        if confidence < min_confidence:
            return None

        amounts = [t.amount for t in group]
        mean_amount = (sum(amounts, Decimal(0)) / len(amounts)).quantize(
            CENTS,
            rounding=ROUND_HALF_UP,
        )

        first, last = group[0], group[-1]
        anchors = _anchors_for(classification.frequency, last.date)
        next_date = CalendarStepper.next_occurrence(
            last.date,
            classification.frequency,
            classification.interval,
            anchors,
        )

        return RecurringCandidate(
            bank_account_id=first.bank_account_id,
            title=merchant_key,
            description=f"Auto-detected recurring transaction for {merchant_key}",
            amount=mean_amount,
            currency=currency,
            frequency=classification.frequency,
            interval=classification.interval,
            start_date=first.date,
            next_scheduled_date=next_date,
            day_of_month=anchors.day_of_month,
            day_of_week=anchors.day_of_week,
            merchant_name=merchant_key,
            is_variable=RecurringPatternDetector.is_variable_amount(amounts),
            confidence_score=confidence,
            transaction_ids=[t.id for t in group],
        )


def _anchors_for(frequency: TransactionFrequency, last_date: date) -> ScheduleAnchors:
    if frequency.uses_day_of_month():
        return ScheduleAnchors(day_of_month=last_date.day)
    if frequency.uses_day_of_week():
        return ScheduleAnchors(
            day_of_week=ScheduleAnchors.sunday_based_weekday(last_date),
        )
    return ScheduleAnchors.none()


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
