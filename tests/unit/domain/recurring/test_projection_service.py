"""Unit tests for ProjectionService."""

from decimal import Decimal
from uuid import uuid4

from recurra.domain.recurring.services import (
    ProjectionAdjustment,
    ProjectionService,
    ProjectionState,
)
from recurra.domain.recurring.value_objects import ProjectionDelta

ACCOUNT_A = uuid4()
ACCOUNT_B = uuid4()


def _state(amount: str, account=ACCOUNT_A, affects: bool = True) -> ProjectionState:
    return ProjectionState(
        bank_account_id=account,
        amount=Decimal(amount),
        affects_balance=affects,
    )


class TestContribution:
    def test_outflow_contributes_magnitude_to_outflows(self):
        assert _state("-1500").contribution == ProjectionDelta(
            outflows=Decimal("1500"),
        )

    def test_inflow_contributes_to_inflows(self):
        assert _state("300").contribution == ProjectionDelta(inflows=Decimal("300"))

    def test_zero_and_non_affecting_contribute_nothing(self):
        assert _state("0").contribution.is_zero()
        assert _state("-99", affects=False).contribution.is_zero()


class TestCreationAndRemoval:
    def test_creation_adds_contribution(self):
        assert ProjectionService.for_creation(_state("-1500")) == [
            ProjectionAdjustment(ACCOUNT_A, ProjectionDelta(outflows=Decimal("1500"))),
        ]

    def test_removal_reverses_contribution(self):
        assert ProjectionService.for_removal(_state("250.50")) == [
            ProjectionAdjustment(
                ACCOUNT_A,
                ProjectionDelta(inflows=Decimal("-250.50")),
            ),
        ]

    def test_zero_amount_produces_no_adjustment(self):
        assert ProjectionService.for_creation(_state("0")) == []
        assert ProjectionService.for_removal(_state("0")) == []

    def test_creation_then_removal_nets_to_zero(self):
        state = _state("-42.17")
        total = ProjectionDelta()
        for adjustment in [
            *ProjectionService.for_creation(state),
            *ProjectionService.for_removal(state),
        ]:
            total = total + adjustment.delta

        assert total.is_zero()


class TestReconcile:
    """Sign transitions and account moves."""

    def test_outflow_to_larger_outflow(self):
        (adjustment,) = ProjectionService.reconcile(_state("-1500"), _state("-1800"))

        assert adjustment.delta == ProjectionDelta(outflows=Decimal("300"))

    def test_outflow_to_smaller_outflow_decrements(self):
        (adjustment,) = ProjectionService.reconcile(_state("-1800"), _state("-1500"))

        assert adjustment.delta == ProjectionDelta(outflows=Decimal("-300"))

    def test_inflow_to_inflow(self):
        (adjustment,) = ProjectionService.reconcile(_state("2000"), _state("2100"))

        assert adjustment.delta == ProjectionDelta(inflows=Decimal("100"))

    def test_outflow_to_inflow_leaves_no_residual(self):
        (adjustment,) = ProjectionService.reconcile(_state("-1200"), _state("300"))

        assert adjustment.bank_account_id == ACCOUNT_A
        assert adjustment.delta.outflows == Decimal("-1200")
        assert adjustment.delta.inflows == Decimal("300")

    def test_inflow_to_outflow(self):
        (adjustment,) = ProjectionService.reconcile(_state("500"), _state("-75"))

        assert adjustment.delta == ProjectionDelta(
            inflows=Decimal("-500"),
            outflows=Decimal("75"),
        )

    def test_unchanged_amount_needs_no_adjustment(self):
        assert ProjectionService.reconcile(_state("-10"), _state("-10")) == []

    def test_move_to_other_account_reverses_and_reapplies(self):
        adjustments = ProjectionService.reconcile(
            _state("-100", account=ACCOUNT_A),
            _state("-120", account=ACCOUNT_B),
        )

        assert adjustments == [
            ProjectionAdjustment(ACCOUNT_A, ProjectionDelta(outflows=Decimal("-100"))),
            ProjectionAdjustment(ACCOUNT_B, ProjectionDelta(outflows=Decimal("120"))),
        ]

    def test_turning_projection_off_withdraws_contribution(self):
        (adjustment,) = ProjectionService.reconcile(
            _state("-60"),
            _state("-60", affects=False),
        )

        assert adjustment.delta == ProjectionDelta(outflows=Decimal("-60"))

    def test_turning_projection_on_applies_new_amount(self):
        (adjustment,) = ProjectionService.reconcile(
            _state("-60", affects=False),
            _state("-80"),
        )

        assert adjustment.delta == ProjectionDelta(outflows=Decimal("80"))

    def test_amount_change_without_projection_is_ignored(self):
        assert (
            ProjectionService.reconcile(
                _state("-60", affects=False),
                _state("400", affects=False),
            )
            == []
        )
