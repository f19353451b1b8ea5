"""
Shared test fixtures for the HRIS test suite.

Every test gets a fresh in-memory SQLite database (aiosqlite + StaticPool)
wired into the app through the ``get_db`` dependency override.
"""

import os
import sys
from datetime import date
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CORS_ORIGINS"] = '["*"]'
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-the-hris-suite"

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from hris.api.v1.deps import get_db
from hris.core.security import create_access_token
from hris.db.base import Base
from hris.db.session import enable_sqlite_foreign_keys
from hris.main import app
from hris.models.user import Role
from hris.services import provisioning


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh database per test; tables created up front and dropped after."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(test_engine.sync_engine)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    yield factory

    app.dependency_overrides.pop(get_db, None)
    await test_engine.dispose()


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ── Users ───────────────────────────────────────────────────────────
async def make_user(
    db: AsyncSession,
    email: str,
    *,
    name: str = "Test User",
    role: Role = Role.EMPLOYEE,
    password: str = "password123",
    date_of_joining: date | None = None,
) -> tuple[int, dict[str, str]]:
    """Provision a user and return ``(user_id, auth headers)``."""
    profile = await provisioning.sign_up(
        db,
        email=email,
        password=password,
        name=name,
        position="Staff",
        date_of_joining=date_of_joining,
        role=role,
    )
    token = create_access_token(profile.id)
    return profile.id, {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def admin(db_session: AsyncSession) -> tuple[int, dict[str, str]]:
    return await make_user(db_session, "admin@example.com", name="Alice Admin", role=Role.ADMIN)


@pytest.fixture
async def employee(db_session: AsyncSession) -> tuple[int, dict[str, str]]:
    return await make_user(db_session, "emma@example.com", name="Emma Employee")


@pytest.fixture
async def other_employee(db_session: AsyncSession) -> tuple[int, dict[str, str]]:
    return await make_user(db_session, "oscar@example.com", name="Oscar Other")
