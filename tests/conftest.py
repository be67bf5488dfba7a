"""
Test fixtures for the Cash Flow API test suite.

  - db_engine / db_session: Fresh in-memory SQLite database for each test
  - client: Async HTTP test client (unauthenticated)
  - authenticated_client: Test client with a pre-registered user and JWT
  - second_user_headers: Authorization headers for a second user
  - make_transaction: Factory for plain in-memory transaction records,
    used by the pure aggregator/builder/renderer tests

In-memory SQLite (sqlite+aiosqlite://) keeps every test isolated: each
test gets a completely fresh database. FastAPI's get_db dependency is
overridden to inject the test session, so application code runs exactly
as it does in production.
"""

import os

# Settings are validated at import time; give the suite a signing key
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")

from datetime import date  # noqa: E402
from decimal import Decimal  # noqa: E402
from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker  # noqa: E402

from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402


TEST_DATABASE_URL = "sqlite+aiosqlite://"


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


@pytest_asyncio.fixture
async def client(db_engine):
    """
    Async HTTP test client with the test database injected.

    This overrides the get_db dependency so all requests hit the
    in-memory test database instead of the real one.
    """
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

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def authenticated_client(client):
    """
    Test client with a pre-registered user and JWT token.

    Signs up a test user via the real signup endpoint, then sets the
    Authorization header on the client for all subsequent requests.
    """
    response = await client.post(
        "/auth/signup",
        json={
            "email": "testuser@example.com",
            "password": "SecurePass123!",
            "name": "Test User",
        },
    )
    assert response.status_code == 201, f"Signup failed: {response.text}"
    token = response.json()["token"]
    client.headers["Authorization"] = f"Bearer {token}"
    return client


@pytest_asyncio.fixture
async def second_user_headers(client):
    """
    Authorization headers for a second user.

    Pass these per request alongside authenticated_client to verify that
    one user cannot see or touch another user's data.
    """
    response = await client.post(
        "/auth/signup",
        json={
            "email": "seconduser@example.com",
            "password": "SecurePass456!",
            "name": "Second User",
        },
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def make_transaction():
    """
    Factory for transaction-like records that never touch the database.

    Usage:
        make_transaction("income", 1000, "2024-01-15", category="Salary")
    """
    def _make(
        txn_type="expense",
        amount="0",
        txn_date="2024-01-01",
        category="Other",
        description="",
    ):
        if isinstance(txn_date, str):
            try:
                txn_date = date.fromisoformat(txn_date)
            except ValueError:
                pass  # keep malformed dates as-is for the degradation tests
        if isinstance(amount, (int, str)) and str(amount).replace(".", "", 1).isdigit():
            amount = Decimal(str(amount))
        return SimpleNamespace(
            type=txn_type,
            amount=amount,
            date=txn_date,
            category=category,
            description=description,
        )

    return _make
