"""Per-tier resource limits."""

from __future__ import annotations

from enum import Enum
from typing import Union

from recurra.domain.shared.exceptions import BusinessRuleViolation, ErrorCode


class PlanTier(str, Enum):
    FREE = "free"
    PRO = "pro"
    BUSINESS = "business"


class LimitableResource(str, Enum):
    """Resources whose count is capped per plan tier."""

    RECURRING_TRANSACTIONS = "recurring_transactions"
    TAGS_PER_RECURRING_TRANSACTION = "tags_per_recurring_transaction"


class Unbounded(Enum):
    """Marker for a resource without a limit."""

    UNBOUNDED = "unbounded"

    def __repr__(self) -> str:
        return "UNBOUNDED"


UNBOUNDED = Unbounded.UNBOUNDED

Limit = Union[int, Unbounded]

TIER_LIMITS: dict[PlanTier, dict[LimitableResource, Limit]] = {
    PlanTier.FREE: {
        LimitableResource.RECURRING_TRANSACTIONS: 10,
        LimitableResource.TAGS_PER_RECURRING_TRANSACTION: 5,
    },
    PlanTier.PRO: {
        LimitableResource.RECURRING_TRANSACTIONS: 100,
        LimitableResource.TAGS_PER_RECURRING_TRANSACTION: 20,
    },
    PlanTier.BUSINESS: {
        LimitableResource.RECURRING_TRANSACTIONS: UNBOUNDED,
        LimitableResource.TAGS_PER_RECURRING_TRANSACTION: UNBOUNDED,
    },
}


class TierLimitExceededError(BusinessRuleViolation):
    """Raised when creating a resource would exceed the tier's limit."""

    def __init__(self, tier: PlanTier, resource: LimitableResource, limit: int) -> None:
        super().__init__(
            message=(
                f"The {tier.value} plan allows at most {limit} "
                f"{resource.value.replace('_', ' ')}"
            ),
            code=ErrorCode.TIER_LIMIT_EXCEEDED,
            details={"tier": tier.value, "resource": resource.value, "limit": limit},
        )


class TierLimits:
    """Limits of one plan tier."""

    def __init__(self, tier: PlanTier):
        self._tier = tier
        self._limits = TIER_LIMITS[tier]

    @classmethod
    def for_tier(cls, tier: PlanTier | str) -> TierLimits:
        return cls(PlanTier(tier))

    @property
    def tier(self) -> PlanTier:
        return self._tier

    def limit_for(self, resource: LimitableResource) -> Limit:
        return self._limits[resource]

    def is_unbounded(self, resource: LimitableResource) -> bool:
        return self._limits[resource] is UNBOUNDED

    def remaining(self, resource: LimitableResource, used: int) -> Limit:
        limit = self._limits[resource]
        if limit is UNBOUNDED:
            return UNBOUNDED
        return max(0, limit - used)

    def ensure_can_add(
        self,
        resource: LimitableResource,
        used: int,
        adding: int = 1,
    ) -> None:
        limit = self._limits[resource]
        if limit is UNBOUNDED:
            return
        if used + adding > limit:
            raise TierLimitExceededError(self._tier, resource, limit)
