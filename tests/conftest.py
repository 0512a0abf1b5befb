"""
Shared test fixtures for the Field Attendance API test suite.

Every test gets a fresh in-memory aiosqlite database with the seeded
credential pairs, wired into the app through ``get_db``.
"""

import os
import sys
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
os.environ["AUTH_MODE"] = "registry"
os.environ["SECRET_KEY"] = "test-secret-key-for-the-suite"

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.v1.deps import ActionContext, get_db
from app.core.config import settings
from app.core.security import pwd_context
from app.core.tokens import seed_users
from app.db.base import Base
from app.main import app

# Cheap hashes keep per-test seeding fast
pwd_context.update(bcrypt__default_rounds=4)


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh database per test, with tables created and users seeded."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        await seed_users(session)

    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    yield factory
    app.dependency_overrides.pop(get_db, None)
    await engine.dispose()


@pytest.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def ctx(db_session: AsyncSession) -> ActionContext:
    return ActionContext(db_session)


# ── Helpers ─────────────────────────────────────────────────────────
EXEC_URL = f"{settings.API_V1_PREFIX}/exec"


async def post_action(client: AsyncClient, action: str, **body):
    resp = await client.post(EXEC_URL, params={"action": action}, json=body)
    assert resp.status_code == 200
    return resp.json()


async def get_action(client: AsyncClient, action: str, **params):
    resp = await client.get(EXEC_URL, params={"action": action, **params})
    assert resp.status_code == 200
    return resp.json()


@pytest.fixture
async def token(async_client: AsyncClient) -> str:
    """A token issued to the seeded admin account."""
    data = await post_action(
        async_client,
        "login",
        username=settings.ADMIN_USERNAME,
        password=settings.ADMIN_PASSWORD,
    )
    assert data["success"] is True
    return data["token"]
