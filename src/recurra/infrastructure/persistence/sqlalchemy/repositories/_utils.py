"""Shared utilities for SQLAlchemy repositories."""

from uuid import UUID


def ensure_uuid(value: UUID | str | None) -> UUID | None:
    """Accept a UUID or its string form, as ids arrive both ways."""
    if value is None:
        return None
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        return UUID(value)
    msg = f"Expected UUID or str, got {type(value).__name__}"
    raise TypeError(msg)
