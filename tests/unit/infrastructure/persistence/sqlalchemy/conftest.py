"""
Pytest fixtures for SQLAlchemy persistence tests.

Each test gets a fresh in-memory SQLite database. StaticPool keeps the single
connection alive so every session sees the same database.
"""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from recurra.infrastructure.persistence.sqlalchemy.models import BankAccountModel
from recurra.infrastructure.persistence.sqlalchemy.models.base import Base
from recurra.infrastructure.persistence.sqlalchemy.repositories.factory import (
    SQLAlchemyRepositoryFactory,
)

# Fixed UUIDs for testing - ensures deterministic behavior
TEST_USER_ID = UUID("12345678-1234-5678-1234-567812345678")
TEST_USER_EMAIL = "test@example.com"

# Secondary test user for isolation tests
TEST_USER_ID_2 = UUID("00000000-0000-0000-0000-000000000001")
TEST_USER_EMAIL_2 = "test2@example.com"

CHECKING_ID = UUID("aaaaaaaa-0000-0000-0000-000000000001")
SAVINGS_ID = UUID("aaaaaaaa-0000-0000-0000-000000000002")
OTHER_USER_ACCOUNT_ID = UUID("bbbbbbbb-0000-0000-0000-000000000001")


@dataclass(frozen=True)
class SeededAccounts:
    checking: UUID = CHECKING_ID
    savings: UUID = SAVINGS_ID
    foreign: UUID = OTHER_USER_ACCOUNT_ID


@dataclass(frozen=True)
class MockUserContext:
    """Mock UserContext for testing."""

    user_id: UUID
    email: str = TEST_USER_EMAIL


@pytest.fixture
def accounts():
    """Ids of the seeded bank accounts."""
    return SeededAccounts()


@pytest.fixture
def user_context():
    return MockUserContext(user_id=TEST_USER_ID)


@pytest.fixture
def other_user_context():
    return MockUserContext(user_id=TEST_USER_ID_2, email=TEST_USER_EMAIL_2)


@pytest_asyncio.fixture
async def async_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_maker(async_engine):
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def async_session(session_maker):
    """
    Session on a database seeded with three bank accounts.

    Checking and Savings belong to the test user, the third account to the
    secondary user.
    """
    async with session_maker() as session:
        session.add_all(
            [
                BankAccountModel(
                    id=CHECKING_ID,
                    user_id=TEST_USER_ID,
                    name="Checking",
                    current_balance=Decimal("5000.00"),
                ),
                BankAccountModel(
                    id=SAVINGS_ID,
                    user_id=TEST_USER_ID,
                    name="Savings",
                    current_balance=Decimal("12000.00"),
                ),
                BankAccountModel(
                    id=OTHER_USER_ACCOUNT_ID,
                    user_id=TEST_USER_ID_2,
                    name="Someone else's checking",
                    currency="EUR",
                ),
            ],
        )
        await session.commit()

        yield session
        await session.rollback()


@pytest.fixture
def factory(async_session, user_context):
    return SQLAlchemyRepositoryFactory(async_session, user_context, plan_tier="free")


@pytest.fixture
def other_factory(async_session, other_user_context):
    return SQLAlchemyRepositoryFactory(
        async_session,
        other_user_context,
        plan_tier="free",
    )
