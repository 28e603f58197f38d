"""
Pytest configuration and fixtures.
Provides an in-memory database, a test HTTP client and authenticated users.
"""

import os

# Set test environment before importing application modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

import backoffice.models  # noqa: F401  register models with Base
from backoffice.core.security import get_password_hash
from backoffice.db.base import Base
from backoffice.db.repositories.user_repository import UserRepository
from backoffice.db.session import get_db
from backoffice.deps.di_container import Container, set_container
from backoffice.main import app
from backoffice.models.user import UserRole
from backoffice.schemas.currency import CurrencyCreate
from backoffice.schemas.exchange_rate import ExchangeRateCreate
from backoffice.services.auth_service import AuthService
from backoffice.services.currency_service import CurrencyService
from backoffice.services.exchange_rate_service import ExchangeRateService
from backoffice.services.health_service import HealthService


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_engine():
    """
    Create a test database engine.
    Uses in-memory SQLite shared across sessions through StaticPool.
    """
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


@pytest.fixture(scope="function")
def test_session_maker(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture(scope="function")
async def test_db_session(test_session_maker):
    """Create a test database session for service-level tests."""
    async with test_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
async def test_client(test_session_maker):
    """
    Create a test HTTP client with the database dependency and the DI container
    pointed at the test database.
    """
    async def override_get_db():
        async with test_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    container = Container()
    container.health_service.override(
        HealthService(session_maker_factory=lambda: test_session_maker)
    )
    set_container(container)
    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
    set_container(None)


async def _create_user(session_maker, email: str, role: UserRole, password: str = "Password123!"):
    async with session_maker() as session:
        user = await UserRepository(session).create(
            first_name="Test",
            last_name=role.value.title(),
            email=email,
            hashed_password=get_password_hash(password),
            role=role,
        )
        await session.commit()
        return user


@pytest.fixture
async def admin_user(test_session_maker):
    return await _create_user(test_session_maker, "admin@example.com", UserRole.ADMIN)


@pytest.fixture
async def regular_user(test_session_maker):
    return await _create_user(test_session_maker, "user@example.com", UserRole.USER)


@pytest.fixture
def create_currency(test_db_session):
    """Factory registering a currency through the currency service."""
    async def _create(code: str, name: str = None, symbol: str = None, is_active: bool = True):
        return await CurrencyService(test_db_session).create_currency(
            CurrencyCreate(
                code=code,
                name=name or f"{code.upper()} currency",
                symbol=symbol or code.upper(),
                is_active=is_active,
            )
        )
    return _create


@pytest.fixture
def create_rate(test_db_session):
    """Factory storing an exchange rate through the exchange rate service."""
    async def _create(currency_id, rate_to_usd, is_active: bool = True):
        return await ExchangeRateService(test_db_session).create_exchange_rate(
            ExchangeRateCreate(currency_id=currency_id, rate_to_usd=rate_to_usd, is_active=is_active)
        )
    return _create


@pytest.fixture
def admin_headers(admin_user):
    token = AuthService(session=None).issue_token(admin_user)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(regular_user):
    token = AuthService(session=None).issue_token(regular_user)
    return {"Authorization": f"Bearer {token}"}
