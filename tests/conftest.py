"""
Test fixtures for the BankLite test suite.

This module provides shared fixtures used across all test files:

  - db_engine / db_session: Fresh in-memory SQLite database for each test
  - repository: AccountRepository bound to db_session
  - client: Async HTTP test client against the default app (mapper off)
  - mapped_client: Async HTTP test client against an app built with
    ERROR_MAPPER_ENABLED=True

Key design decisions:
  - In-memory SQLite (sqlite+aiosqlite://) is used for speed and isolation.
    Each test gets a completely fresh database.
  - We override FastAPI's get_db dependency to inject our test session
    factory, so the application code runs exactly as in production.
  - The transport is built with raise_app_exceptions=False. Unmapped
    errors (AccountNotFoundError with the mapper off) then reach the test
    as the 500 response a real client would get, instead of being
    re-raised into the test.
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from banklite.config import Settings
from banklite.database import Base, get_db
from banklite.main import app, create_app
from banklite.repositories.account_repository import AccountRepository


# In-memory SQLite for fast, isolated tests
TEST_DATABASE_URL = "sqlite+aiosqlite://"


def account_payload(name="John Doe", balance=1000.00, currency="USD") -> dict:
    """JSON body for POST/PUT /api/v1/accounts."""
    return {"accountHolderName": name, "balance": balance, "currency": currency}


@pytest_asyncio.fixture
async def db_engine():
    """Create a fresh async engine with all tables for each test."""
    engine = create_async_engine(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Provide an async session bound to the test engine."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session() as session:
        yield session


@pytest.fixture
def repository(db_session):
    return AccountRepository(db_session)


def _override_get_db(db_engine):
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return override_get_db


@pytest_asyncio.fixture
async def client(db_engine):
    """
    Async HTTP test client with the test database injected.

    Uses the module-level app, so the error mapper is in its default
    (disabled) state.
    """
    app.dependency_overrides[get_db] = _override_get_db(db_engine)

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def mapped_client(db_engine):
    """Async HTTP test client for an app with the error mapper enabled."""
    mapped_app = create_app(Settings(ERROR_MAPPER_ENABLED=True))
    mapped_app.dependency_overrides[get_db] = _override_get_db(db_engine)

    async with AsyncClient(
        transport=ASGITransport(app=mapped_app, raise_app_exceptions=False),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def created_account(client) -> dict:
    """A single account created through the API; returns the response body."""
    response = await client.post("/api/v1/accounts", json=account_payload())
    assert response.status_code == 201, f"Create failed: {response.text}"
    return response.json()
