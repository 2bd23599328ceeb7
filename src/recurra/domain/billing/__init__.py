"""Billing context: plan tiers and their resource limits."""

from recurra.domain.billing.tier_limits import (
    TIER_LIMITS,
    UNBOUNDED,
    LimitableResource,
    PlanTier,
    TierLimitExceededError,
    TierLimits,
    Unbounded,
)

__all__ = [
    "TIER_LIMITS",
    "UNBOUNDED",
    "LimitableResource",
    "PlanTier",
    "TierLimitExceededError",
    "TierLimits",
    "Unbounded",
]
