"""Service test fixtures - async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test session factory
    - db_manager patched so readiness probes see the test engine
    - Users seeded directly; requests authenticate with X-User-Id / X-User-Role

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so every session
      in a test sees the same database
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from taskboard.core.domain_types import Principal, UserRole
from taskboard.db.base import Base
from taskboard.infrastructure.database import get_db, DatabaseSessionManager
from taskboard.models.user import User
import taskboard.infrastructure.database as db_module
import taskboard.models  # noqa: F401
from taskboard.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


async def _make_user(db, username: str, role: str = "member") -> User:
    user = User(
        username=username, email=f"{username}@acme.io",
        full_name=username.title(), role=role,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest.fixture
async def alice(test_db):
    return await _make_user(test_db, "alice")


@pytest.fixture
async def bob(test_db):
    return await _make_user(test_db, "bob")


@pytest.fixture
async def carol(test_db):
    return await _make_user(test_db, "carol")


@pytest.fixture
async def admin_user(test_db):
    return await _make_user(test_db, "root", role="admin")


@pytest.fixture
def principal_for():
    """Build the Principal a seeded user would authenticate as."""
    def _principal(user: User) -> Principal:
        return Principal(id=user.id, role=UserRole(user.role))
    return _principal


@pytest.fixture
def auth_headers():
    """Build gateway identity headers for a seeded user."""
    def _headers(user: User) -> dict:
        return {"X-User-Id": str(user.id), "X-User-Role": user.role}
    return _headers
