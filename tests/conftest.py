"""Shared pytest fixtures for all test suites."""

from collections.abc import AsyncGenerator
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from backend.app.db.context import UserSession
from backend.app.db.inmemory import InMemoryEntityService
from backend.app.db.models import Base
from backend.app.models.entity import Entity, EntityStatus

TENANT_A = "tenant-a"
TENANT_B = "tenant-b"
USER_A = "user-a"
USER_B = "user-b"


@pytest.fixture
def session_a() -> UserSession:
    """Authenticated session for tenant A."""
    return UserSession(user_id=USER_A, tenant_id=TENANT_A)


@pytest.fixture
def sample_entity() -> Entity:
    """Entity owned by tenant A."""
    now = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)
    return Entity(
        id="ent-1",
        tenant_id=TENANT_A,
        name="Acme Holdings",
        legal_form="SARL",
        status=EntityStatus.ACTIVE,
        activity_code="6420Z",
        created_at=now,
        updated_at=now,
        updated_by=USER_A,
    )


@pytest.fixture
def inmemory_service() -> InMemoryEntityService:
    """Fresh in-memory entity service."""
    return InMemoryEntityService()


@pytest_asyncio.fixture
async def sqlite_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create in-memory SQLite async engine with the schema applied."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(sqlite_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create async session bound to the SQLite test engine."""
    async with AsyncSession(sqlite_engine, expire_on_commit=False) as session:
        yield session
