"""Shared domain components.

This module exports shared exceptions and utilities used across
domain boundaries.
"""

from recurra.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ForbiddenError,
    PersistenceError,
    ValidationError,
)
from recurra.domain.shared.time import today_utc, utc_now

__all__ = [
    # Error codes
    "ErrorCode",
    # Base exception
    "DomainException",
    # Exception categories
    "ValidationError",
    "BusinessRuleViolation",
    "ForbiddenError",
    "EntityNotFoundError",
    "ConflictError",
    "PersistenceError",
    # Utilities
    "today_utc",
    "utc_now",
]
