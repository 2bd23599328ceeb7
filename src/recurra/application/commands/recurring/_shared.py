"""Helpers shared by the recurring transaction commands."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from uuid import UUID

from recurra.domain.banking.repositories import BankAccountRepository
from recurra.domain.banking.value_objects import BankAccount
from recurra.domain.recurring.exceptions import BankAccountAccessDeniedError
from recurra.domain.recurring.services import ProjectionAdjustment

logger = logging.getLogger(__name__)


async def require_owned_account(
    bank_account_repository: BankAccountRepository,
    bank_account_id: UUID,
    role: str = "Bank",
) -> BankAccount:
    """Load a bank account of the current user or fail with Forbidden."""
    account = await bank_account_repository.find_by_id(bank_account_id)
    if account is None:
        logger.warning("Rejected access to %s account %s", role.lower(), bank_account_id)
        raise BankAccountAccessDeniedError(bank_account_id, role=role)
    return account


async def apply_projection_adjustments(
    bank_account_repository: BankAccountRepository,
    adjustments: Iterable[ProjectionAdjustment],
) -> None:
    for adjustment in adjustments:
        logger.debug(
            "Adjusting projections of %s by inflows=%s outflows=%s",
            adjustment.bank_account_id,
            adjustment.delta.inflows,
            adjustment.delta.outflows,
        )
        await bank_account_repository.adjust_projections(
            adjustment.bank_account_id,
            adjustment.delta,
        )
