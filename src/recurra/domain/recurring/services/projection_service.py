"""Reconciliation of bank account projection counters."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from recurra.domain.recurring.value_objects import ProjectionDelta


@dataclass(frozen=True)
class ProjectionAdjustment:
    """A counter adjustment to apply to one bank account."""

    bank_account_id: UUID
    delta: ProjectionDelta


@dataclass(frozen=True)
class ProjectionState:
    """Where a series' contribution lives and how large it is."""

    bank_account_id: UUID
    amount: Decimal
    affects_balance: bool

    @property
    def contribution(self) -> ProjectionDelta:
        if not self.affects_balance:
            return ProjectionDelta()
        return ProjectionDelta.contribution_of(self.amount)


class ProjectionService:
    """Compute the counter adjustments that keep projections exact.

    A balance-affecting series contributes its amount exactly once: the
    magnitude of a negative amount to ``scheduled_outflows`` or a positive
    amount to ``scheduled_inflows`` of its own bank account.
    """

    @staticmethod
    def for_creation(state: ProjectionState) -> list[ProjectionAdjustment]:
        return ProjectionService._non_zero(
            [ProjectionAdjustment(state.bank_account_id, state.contribution)],
        )

    @staticmethod
    def for_removal(state: ProjectionState) -> list[ProjectionAdjustment]:
        return ProjectionService._non_zero(
            [ProjectionAdjustment(state.bank_account_id, -state.contribution)],
        )

    @staticmethod
    def reconcile(
        before: ProjectionState,
        after: ProjectionState,
    ) -> list[ProjectionAdjustment]:
        """Adjustments that turn the ``before`` contribution into ``after``.

        On the same account this covers the sign transitions:
        - outflow -> outflow: outflows change by ``|new| - |old|``
        - inflow -> inflow: inflows change by ``new - old``
        - outflow -> inflow: outflows drop by ``|old|``, inflows rise by ``new``
        - inflow -> outflow: inflows drop by ``old``, outflows rise by ``|new|``

        When the series moved to another account the old contribution is
        reversed there and the new one applied on the new account.
        """
        if before.bank_account_id == after.bank_account_id:
            return ProjectionService._non_zero(
                [
                    ProjectionAdjustment(
                        after.bank_account_id,
                        after.contribution - before.contribution,
                    ),
                ],
            )

        return ProjectionService._non_zero(
            [
                ProjectionAdjustment(before.bank_account_id, -before.contribution),
                ProjectionAdjustment(after.bank_account_id, after.contribution),
            ],
        )

    @staticmethod
    def _non_zero(
        adjustments: list[ProjectionAdjustment],
    ) -> list[ProjectionAdjustment]:
        return [adj for adj in adjustments if not adj.delta.is_zero()]
