"""
Pytest fixtures for testing.

Provides:
- Async database session on in-memory SQLite
- Test client with auth helpers
- Factory fixtures for users, bets and transactions
- In-memory user directory for resolver unit tests
"""

from typing import Any, AsyncGenerator, Sequence
from types import SimpleNamespace
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from wagerdesk.main import app
from wagerdesk.core.auth.exceptions import StoreUnavailableError
from wagerdesk.core.auth.interfaces import UserDirectory
from wagerdesk.models.base import Base
from wagerdesk.models.bet import Bet, BetStatus
from wagerdesk.models.transaction import Transaction, TransactionType
from wagerdesk.models.user import User, UserRole
from wagerdesk.api.dependencies.database import get_db
from wagerdesk.services.auth import AuthService


# Test database URL (SQLite in-memory for speed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Database session, rolled back after each test."""
    session_factory = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture(scope="function")
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Test client with database session override."""

    async def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


# ============ Factory Fixtures ============


class UserFactory:
    """Factory for creating test users."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        email: str | None = None,
        name: str = "Test User",
        role: str = UserRole.USER.value,
        is_super_admin: bool = False,
        created_by: User | None = None,
        balance: float = 0.0,
        is_active: bool = True,
        deleted: bool = False,
    ) -> User:
        """Create a user in the database."""
        from datetime import datetime, timezone

        user = User(
            email=email or f"user-{uuid4().hex[:8]}@wagerdesk.io",
            name=name,
            role=role,
            is_super_admin=is_super_admin,
            created_by=created_by.id if created_by else None,
            balance=balance,
            is_active=is_active,
            deleted_at=datetime.now(timezone.utc) if deleted else None,
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def admin(self, **kwargs: Any) -> User:
        """Create an admin user."""
        kwargs.setdefault("email", f"admin-{uuid4().hex[:8]}@wagerdesk.io")
        return await self.create(role=UserRole.ADMIN.value, **kwargs)


class BetFactory:
    """Factory for creating test bets."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        user: User,
        stake: float = 10.0,
        odds: float = 2.5,
        status: str = BetStatus.PENDING.value,
        payout: float = 0.0,
        selection: str = "Home win",
    ) -> Bet:
        bet = Bet(
            user_id=user.id,
            stake=stake,
            odds=odds,
            status=status,
            payout=payout,
            selection=selection,
        )
        self.db.add(bet)
        await self.db.commit()
        await self.db.refresh(bet)
        return bet


class TransactionFactory:
    """Factory for creating test transactions (does not touch balances)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        user: User,
        type: str = TransactionType.DEPOSIT.value,
        amount: float = 100.0,
        description: str = "Cash deposit",
        processed_by: User | None = None,
    ) -> Transaction:
        transaction = Transaction(
            user_id=user.id,
            type=type,
            amount=amount,
            description=description,
            processed_by=processed_by.id if processed_by else None,
        )
        self.db.add(transaction)
        await self.db.commit()
        await self.db.refresh(transaction)
        return transaction


@pytest_asyncio.fixture
async def user_factory(db: AsyncSession) -> UserFactory:
    return UserFactory(db)


@pytest_asyncio.fixture
async def bet_factory(db: AsyncSession) -> BetFactory:
    return BetFactory(db)


@pytest_asyncio.fixture
async def transaction_factory(db: AsyncSession) -> TransactionFactory:
    return TransactionFactory(db)


@pytest_asyncio.fixture
async def super_admin(user_factory: UserFactory) -> User:
    return await user_factory.admin(email="root@wagerdesk.io", is_super_admin=True)


@pytest_asyncio.fixture
async def scoped_admin(user_factory: UserFactory) -> User:
    return await user_factory.admin(email="desk-a@wagerdesk.io")


@pytest_asyncio.fixture
async def other_admin(user_factory: UserFactory) -> User:
    return await user_factory.admin(email="desk-b@wagerdesk.io")


# ============ Auth Helpers ============


def get_auth_headers(user: User) -> dict[str, str]:
    """Bearer headers for any user."""
    token = AuthService().create_access_token(user.id)
    return {"Authorization": f"Bearer {token}"}


# ============ Resolver Helpers ============


class InMemoryUserDirectory(UserDirectory):
    """User directory over a list of {id, created_by} records."""

    def __init__(self, users: Sequence[dict] | None = None):
        self.users = [SimpleNamespace(**u) for u in (users or [])]
        self.calls: list[Any] = []

    async def find_users_created_by(self, requester_id: Any) -> Sequence[Any]:
        self.calls.append(requester_id)
        return [u for u in self.users if u.created_by == requester_id]


class FailingUserDirectory(UserDirectory):
    """User directory whose backing store is down."""

    async def find_users_created_by(self, requester_id: Any) -> Sequence[Any]:
        raise StoreUnavailableError()


def requester(**attrs: Any) -> SimpleNamespace:
    """Build a requester with defaults for unspecified attributes."""
    defaults = {
        "id": "u1",
        "role": "admin",
        "is_super_admin": False,
        "email": "x@y.com",
    }
    defaults.update(attrs)
    return SimpleNamespace(**defaults)


@pytest.fixture
def directory() -> InMemoryUserDirectory:
    return InMemoryUserDirectory(
        [
            {"id": "u2", "created_by": "u1"},
            {"id": "u3", "created_by": "other"},
        ]
    )


@pytest.fixture
def make_requester():
    return requester


@pytest.fixture
def failing_directory() -> FailingUserDirectory:
    return FailingUserDirectory()


@pytest.fixture
def auth_headers_for():
    return get_auth_headers


@pytest.fixture
def make_directory():
    return InMemoryUserDirectory
