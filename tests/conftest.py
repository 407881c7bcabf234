"""Shared test fixtures: testcontainers for PostgreSQL and Redis.

Integration tests use real PostgreSQL and Redis containers managed by
testcontainers-python. Containers are session-scoped (started once per
test run). Each test function gets a session factory whose writes are
rolled back at teardown, and a flushed Redis client.

Requires Docker to be available. Tests needing containers should be
marked with ``@pytest.mark.integration``.
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterator, Iterator

import pytest
import redis.asyncio as aioredis
import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from testcontainers.postgres import PostgresContainer
from testcontainers.redis import RedisContainer

from chathub.chat_runtime.db.tables import Base
from chathub.chat_runtime.settings import _get_settings_cached


def _set_env(key: str, value: str) -> None:
    """Set an env var and invalidate the settings cache."""
    os.environ[key] = value
    _get_settings_cached.cache_clear()


# ---------------------------------------------------------------------------
# Session-scoped: containers (started once, shared across all tests)
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def pg_container() -> Iterator[PostgresContainer]:
    """Start a PostgreSQL 17 container for the test session."""
    with PostgresContainer(
        image="postgres:17",
        username="test",
        password="test",
        dbname="chathub_test",
        driver="psycopg",
    ) as pg:
        yield pg


@pytest.fixture(scope="session")
def redis_container() -> Iterator[RedisContainer]:
    """Start a Redis 7 container for the test session."""
    with RedisContainer(image="redis:7") as r:
        yield r


# ---------------------------------------------------------------------------
# Session-scoped: connection settings and schema
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def pg_url(pg_container: PostgresContainer) -> str:
    """PostgreSQL URL (psycopg3 dialect) with the schema created."""
    url = pg_container.get_connection_url()
    _set_env("CHATHUB_DATABASE_URL", url)

    engine = sa.create_engine(url)
    Base.metadata.create_all(engine)
    engine.dispose()

    return url


@pytest.fixture(scope="session")
def redis_target(redis_container: RedisContainer) -> tuple[str, int]:
    """``(host, port)`` of the Redis container."""
    host = redis_container.get_container_host_ip()
    port = int(redis_container.get_exposed_port(6379))
    _set_env("CHATHUB_REDIS_HOST", host)
    _set_env("CHATHUB_REDIS_PORT", str(port))
    return host, port


# ---------------------------------------------------------------------------
# Session-scoped: async engine (shared across all tests)
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def async_engine(pg_url: str) -> Iterator[AsyncEngine]:
    """Session-scoped async engine.

    ``NullPool`` so no connection outlives the event loop of the test that
    opened it.
    """
    engine = create_async_engine(pg_url, poolclass=NullPool)
    yield engine
    engine.sync_engine.dispose()


# ---------------------------------------------------------------------------
# Function-scoped: session factory with rollback for test isolation
# ---------------------------------------------------------------------------


@pytest.fixture
async def db_session_factory(async_engine: AsyncEngine) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Session factory bound to one connection; everything rolled back after the test.

    Uses ``join_transaction_mode="create_savepoint"`` so that ``commit()``
    inside repositories only commits a savepoint, while the outer transaction
    is rolled back at teardown -- giving each test a clean database state.
    """
    async with async_engine.connect() as conn:
        await conn.begin()
        yield async_sessionmaker(bind=conn, expire_on_commit=False, join_transaction_mode="create_savepoint")
        await conn.rollback()


# ---------------------------------------------------------------------------
# Function-scoped: Redis client with flush
# ---------------------------------------------------------------------------


@pytest.fixture
async def redis_client(redis_target: tuple[str, int]) -> AsyncIterator[aioredis.Redis]:
    """Async Redis client on db 0; database flushed after each test."""
    host, port = redis_target
    client = aioredis.Redis(host=host, port=port, db=0)
    yield client
    await client.flushdb()
    await client.aclose()
