"""Shared fixtures for command and query tests."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from recurra.domain.banking.value_objects import BankAccount
from recurra.domain.billing import PlanTier, TierLimits
from recurra.domain.recurring.aggregates import RecurringTransaction
from recurra.domain.recurring.value_objects import (
    ScheduleAnchors,
    TransactionFrequency,
)

TEST_USER_ID = UUID("12345678-1234-5678-1234-567812345678")


@dataclass(frozen=True)
class MockUserContext:
    """Mock UserContext for testing."""

    user_id: UUID
    email: str = "test@example.com"


class FakeUnitOfWork:
    """Records commits and rollbacks instead of talking to a database."""

    def __init__(self):
        self.commits = 0
        self.rollbacks = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if exc is None:
            self.commits += 1
        else:
            self.rollbacks += 1
        return False


@pytest.fixture
def user_context():
    return MockUserContext(user_id=TEST_USER_ID)


@pytest.fixture
def unit_of_work():
    return FakeUnitOfWork()


@pytest.fixture
def make_unit_of_work():
    return FakeUnitOfWork


@pytest.fixture
def tier_limits():
    return TierLimits.for_tier(PlanTier.FREE)


@pytest.fixture
def bank_account():
    return BankAccount(
        id=uuid4(),
        user_id=TEST_USER_ID,
        name="Checking",
        current_balance=Decimal("5000.00"),
    )


@pytest.fixture
def mock_bank_account_repo(bank_account):
    """Bank account repository that only knows ``bank_account``."""
    repo = AsyncMock()

    async def find_by_id(bank_account_id: UUID) -> Optional[BankAccount]:
        return bank_account if bank_account_id == bank_account.id else None

    repo.find_by_id = AsyncMock(side_effect=find_by_id)
    repo.adjust_projections = AsyncMock()
    return repo


@pytest.fixture
def mock_recurring_repo():
    repo = AsyncMock()
    repo.find_by_id = AsyncMock(return_value=None)
    repo.save = AsyncMock()
    repo.delete = AsyncMock(return_value=True)
    repo.count_with_filters = AsyncMock(return_value=0)
    repo.find_with_filters = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_transaction_repo():
    repo = AsyncMock()
    repo.find_since = AsyncMock(return_value=[])
    repo.link_to_recurring_transaction = AsyncMock(return_value=0)
    repo.unlink_recurring_transaction = AsyncMock(return_value=0)
    repo.find_by_recurring_transaction = AsyncMock(return_value=[])
    repo.count_by_recurring_transaction = AsyncMock(return_value=0)
    return repo


@pytest.fixture
def make_recurring(bank_account):
    """Build a persisted-looking monthly series on ``bank_account``."""

    def _make(
        amount: str = "-1500.00",
        affect_available_balance: bool = True,
        **overrides,
    ) -> RecurringTransaction:
        values = {
            "bank_account_id": bank_account.id,
            "title": "Rent",
            "amount": Decimal(amount),
            "frequency": TransactionFrequency.MONTHLY,
            "start_date": date(2024, 1, 1),
            "as_of": date(2024, 1, 1),
            "anchors": ScheduleAnchors(day_of_month=1),
            "affect_available_balance": affect_available_balance,
        }
        values.update(overrides)
        return RecurringTransaction(**values)

    return _make
