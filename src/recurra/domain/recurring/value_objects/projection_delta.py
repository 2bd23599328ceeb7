"""Signed change to a bank account's projection counters."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

ZERO = Decimal(0)


@dataclass(frozen=True)
class ProjectionDelta:
    """Signed adjustment of ``scheduled_inflows`` and ``scheduled_outflows``.

    Both counters hold magnitudes, so an outflow of -1500 contributes
    ``outflows=1500``.
    """

    inflows: Decimal = ZERO
    outflows: Decimal = ZERO

    @classmethod
    def contribution_of(cls, amount: Decimal) -> ProjectionDelta:
        """Contribution of a signed amount to the counters."""
        if amount < 0:
            return cls(outflows=abs(amount))
        if amount > 0:
            return cls(inflows=amount)
        return cls()

    def __sub__(self, other: ProjectionDelta) -> ProjectionDelta:
        return ProjectionDelta(
            inflows=self.inflows - other.inflows,
            outflows=self.outflows - other.outflows,
        )

    def __neg__(self) -> ProjectionDelta:
        return ProjectionDelta(inflows=-self.inflows, outflows=-self.outflows)

    def is_zero(self) -> bool:
        return self.inflows == ZERO and self.outflows == ZERO
