"""Async SQLAlchemy engine and session factory for the message store.

Uses psycopg3 (``postgresql+psycopg://``).  One engine per process, created in
the app lifespan and shared by all repositories.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from chathub.chat_runtime.db.tables import Base


def create_engine(database_url: str, **kwargs: object) -> AsyncEngine:
    """Create an async engine for the message store.

    History loads are short read-mostly bursts from many connection handlers,
    so the pool keeps a modest baseline with generous overflow:

    - **pool_size=10** / **max_overflow=20**
    - **pool_pre_ping=True**: survive PG restarts and idle disconnects.
    - **pool_recycle=1800**: recycle before typical LB idle cut-offs.

    All defaults can be overridden via *kwargs*.
    """
    defaults = {
        "echo": False,
        "pool_size": 10,
        "max_overflow": 20,
        "pool_pre_ping": True,
        "pool_recycle": 1800,
    }
    defaults.update(kwargs)  # type: ignore[arg-type]
    return create_async_engine(database_url, **defaults)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory with ``expire_on_commit=False`` (no implicit IO after commit)."""
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_schema(engine: AsyncEngine) -> None:
    """Drop all tables.  Destroys data."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
