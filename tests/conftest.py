"""Root test fixtures shared across all test types.

Database fixtures run against an in-memory SQLite database built from the
model metadata, so no external services are needed.
"""

import os

# Set env before any app imports: testing disables rate limiting
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
TEST_SESSION_SECRET = "test-session-secret-key-0123456789abcdef"
os.environ.setdefault("SESSION_SECRET_KEY", TEST_SESSION_SECRET)
os.environ.setdefault("SESSION_COOKIE_SECURE", "false")
os.environ.setdefault("DEFAULT_EMAIL_LANGUAGE", "es")
# Cheap Argon2 parameters keep the suite fast
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")
os.environ.setdefault("ARGON2_PARALLELISM", "1")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator

import pytest
from fakeredis import aioredis as fakeredis_aio
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from src.teamkick import models  # noqa: F401 - registers tables on the metadata
from src.teamkick.core import redis as redis_core
from src.teamkick.core.config import get_settings
from src.teamkick.core.db import make_session_factory
from src.teamkick.core.sessions import SessionStore
from tests.helpers import RecordingEmailSender

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


# --- Redis Test Fixtures (shared) ---


@pytest.fixture
async def fake_redis() -> AsyncGenerator[Redis]:
    """In-memory Redis that behaves like a real server."""
    client = fakeredis_aio.FakeRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
async def mock_redis(fake_redis: Redis, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[Redis]:
    """Patches get_redis() to return the fakeredis client."""
    redis_core.reset_redis_state()

    async def _get_fake_redis() -> Redis:
        return fake_redis

    monkeypatch.setattr("src.teamkick.core.redis.get_redis", _get_fake_redis)
    monkeypatch.setattr("src.teamkick.core.sessions.get_redis", _get_fake_redis)
    yield fake_redis
    redis_core.reset_redis_state()


@pytest.fixture
async def mock_redis_unavailable(monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[None]:
    """Patches get_redis() to return None (simulates Redis unavailable)."""
    redis_core.reset_redis_state()

    async def _get_none() -> None:
        return None

    monkeypatch.setattr("src.teamkick.core.redis.get_redis", _get_none)
    monkeypatch.setattr("src.teamkick.core.sessions.get_redis", _get_none)
    yield
    redis_core.reset_redis_state()


@pytest.fixture
def session_store(fake_redis: Redis) -> SessionStore:
    return SessionStore(fake_redis, ttl_seconds=3600, secret_key=TEST_SESSION_SECRET)


# --- Email ---


@pytest.fixture
def outbox() -> RecordingEmailSender:
    """Email sender that records messages instead of calling Resend."""
    return RecordingEmailSender()


# --- Database Fixtures ---


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database per test.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return make_session_factory(engine)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session with the same options the application uses.

    Tests that insert fixtures directly must commit them themselves.
    """
    async with session_factory() as session:
        yield session
