"""Validation of the create and update payloads."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from recurra.application.dtos.recurring import (
    RecurringTransactionCreateInput,
    RecurringTransactionUpdateInput,
)
from recurra.domain.recurring.value_objects import (
    RecurringStatus,
    ScheduleAnchors,
    TransactionFrequency,
)


def _create(**overrides) -> RecurringTransactionCreateInput:
    values = {
        "bank_account_id": uuid4(),
        "title": "Gym",
        "amount": Decimal("-39.90"),
        "frequency": TransactionFrequency.MONTHLY,
        "start_date": date(2024, 2, 1),
    }
    values.update(overrides)
    return RecurringTransactionCreateInput(**values)


class TestRecurringTransactionCreateInput:
    def test_defaults(self):
        data = _create()

        assert data.interval == 1
        assert data.currency == "USD"
        assert data.status is RecurringStatus.ACTIVE
        assert data.affect_available_balance is True
        assert data.tags == []

    def test_currency_is_uppercased(self):
        assert _create(currency="eur").currency == "EUR"

    def test_title_is_stripped(self):
        assert _create(title="  Gym  ").title == "Gym"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"title": ""},
            {"interval": 0},
            {"day_of_month": 32},
            {"day_of_week": 7},
            {"week_of_month": 0},
            {"week_of_month": 6},
            {"month_of_year": 13},
            {"confidence_score": 1.5},
            {"status": RecurringStatus.CANCELLED},
            {"end_date": date(2024, 1, 31)},
            {"amount": Decimal("-15.999")},
            {"unknown_field": "x"},
        ],
    )
    def test_rejects_invalid_payloads(self, overrides):
        with pytest.raises(ValidationError):
            _create(**overrides)

    def test_whole_amount_is_accepted(self):
        assert _create(amount=Decimal("-1500")).amount == Decimal("-1500")

    def test_last_week_of_month_is_allowed(self):
        assert _create(week_of_month=-1).week_of_month == -1

    def test_anchors(self):
        data = _create(day_of_month=31, month_of_year=12)

        assert data.anchors() == ScheduleAnchors(day_of_month=31, month_of_year=12)


class TestRecurringTransactionUpdateInput:
    def test_changes_lists_only_sent_fields(self):
        data = RecurringTransactionUpdateInput(title="Gym+", notes=None)

        assert data.changes() == {"title", "notes"}

    def test_amount_with_sub_cent_precision_is_rejected(self):
        with pytest.raises(ValidationError):
            RecurringTransactionUpdateInput(amount=Decimal("12.345"))

    def test_amount_in_cents_is_accepted(self):
        data = RecurringTransactionUpdateInput(amount=Decimal("-12.34"))

        assert data.amount == Decimal("-12.34")

    def test_empty_payload_changes_nothing(self):
        data = RecurringTransactionUpdateInput()

        assert data.changes() == set()
        assert not data.touches_schedule()
        assert not data.touches_anchors()

    @pytest.mark.parametrize(
        "field",
        ["description", "end_date", "notes", "category_slug", "day_of_month"],
    )
    def test_clearable_fields_accept_null(self, field):
        data = RecurringTransactionUpdateInput(**{field: None})

        assert field in data.changes()

    @pytest.mark.parametrize(
        "field",
        ["title", "amount", "frequency", "status", "affect_available_balance"],
    )
    def test_required_fields_reject_null(self, field):
        with pytest.raises(ValidationError, match="cannot be cleared"):
            RecurringTransactionUpdateInput(**{field: None})

    @pytest.mark.parametrize(
        ("payload", "schedule", "anchors"),
        [
            ({"frequency": TransactionFrequency.WEEKLY}, True, False),
            ({"interval": 2}, True, False),
            ({"day_of_month": 15}, True, True),
            ({"week_of_month": 2}, False, True),
            ({"month_of_year": 6}, False, True),
            ({"amount": Decimal("-1")}, False, False),
        ],
    )
    def test_schedule_and_anchor_detection(self, payload, schedule, anchors):
        data = RecurringTransactionUpdateInput(**payload)

        assert data.touches_schedule() is schedule
        assert data.touches_anchors() is anchors

    def test_merged_anchors_keep_untouched_values(self):
        current = ScheduleAnchors(day_of_month=1, month_of_year=3)
        data = RecurringTransactionUpdateInput(day_of_month=None, week_of_month=-1)

        merged = data.merged_anchors(current)

        assert merged == ScheduleAnchors(month_of_year=3, week_of_month=-1)
