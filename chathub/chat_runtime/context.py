"""Process-wide runtime context.

Holds the connections opened at startup and the components built on them.
Created once by the app lifespan (or a realtime worker), passed explicitly to
whatever needs it, and closed at shutdown.  Nothing here is a module global.

Fields are ``None`` when the backing service is not configured
(``CHATHUB_DATABASE_URL`` unset, no banned words, ...).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from chathub.chat_runtime.db.engine import create_engine, create_session_factory
from chathub.chat_runtime.managers.chat_data import ChatDataStore
from chathub.chat_runtime.managers.history import MessageLoader
from chathub.chat_runtime.managers.presence import RealtimePresence
from chathub.chat_runtime.managers.responses import MessageResponseMapper
from chathub.chat_runtime.managers.sessions import SessionStore
from chathub.chat_runtime.moderation import BannedWordChecker
from chathub.chat_runtime.repositories.sql import SqlFileRepository, SqlMessageRepository, SqlUserRepository
from chathub.chat_runtime.store.memory import MemoryStateStore
from chathub.chat_runtime.store.redis import RedisStateStore, create_redis_client

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from chathub.chat_runtime.settings import ChatSettings
    from chathub.chat_runtime.store.base import StateStore


@dataclass
class ChatRuntime:
    """Shared handles for one service process."""

    # -- Remote state ----------------------------------------------------------
    session_state: StateStore
    chat_state: StateStore
    sessions: SessionStore
    chat_data: ChatDataStore
    presence: RealtimePresence

    # -- Durable history (requires database) -----------------------------------
    db_engine: AsyncEngine | None = None
    message_loader: MessageLoader | None = None
    response_mapper: MessageResponseMapper | None = None

    # -- Moderation ------------------------------------------------------------
    banned_words: BannedWordChecker | None = None

    async def aclose(self) -> None:
        """Release Redis pools and dispose the DB engine."""
        for store in (self.session_state, self.chat_state):
            if isinstance(store, RedisStateStore):
                await store.aclose()
        logger.info("State stores: closed")

        if self.db_engine is not None:
            await self.db_engine.dispose()
            logger.info("PostgreSQL: disposed")


def _create_state_stores(settings: ChatSettings) -> tuple[StateStore, StateStore]:
    """Return ``(session_state, chat_state)`` for the configured backend."""
    if settings.state_backend == "memory":
        logger.warning("Using in-memory state store -- state is NOT shared across instances")
        store = MemoryStateStore()
        return store, store

    session_client = create_redis_client(
        settings.redis_host,
        settings.redis_port,
        password=settings.session_redis_password(),
        database=settings.redis_database,
        socket_timeout=settings.redis_socket_timeout,
        connect_timeout=settings.redis_connect_timeout,
    )
    chat_host, chat_port, chat_password = settings.chat_redis_target()
    chat_client = create_redis_client(
        chat_host,
        chat_port,
        password=chat_password,
        database=settings.chat_redis_database,
        cluster_nodes=settings.chat_redis_cluster_nodes,
        socket_timeout=settings.redis_socket_timeout,
        connect_timeout=settings.redis_connect_timeout,
    )
    if settings.chat_redis_cluster_nodes:
        mode = "cluster"
    else:
        mode = f"{chat_host}:{chat_port}/{settings.chat_redis_database}"
    logger.info(
        "Redis: sessions={}:{}/{}, chat data={}",
        settings.redis_host,
        settings.redis_port,
        settings.redis_database,
        mode,
    )
    return RedisStateStore(session_client), RedisStateStore(chat_client)


def build_runtime(settings: ChatSettings) -> ChatRuntime:
    """Open connections and wire all components from *settings*."""
    session_state, chat_state = _create_state_stores(settings)
    chat_data = ChatDataStore(chat_state)
    runtime = ChatRuntime(
        session_state=session_state,
        chat_state=chat_state,
        sessions=SessionStore(session_state, settings.session_ttl, key_prefix=settings.session_key_prefix),
        chat_data=chat_data,
        presence=RealtimePresence(chat_data),
    )

    if settings.database_url:
        engine = create_engine(settings.database_url)
        session_factory = create_session_factory(engine)
        files = SqlFileRepository(session_factory)
        mapper = MessageResponseMapper(files)
        runtime.db_engine = engine
        runtime.response_mapper = mapper
        runtime.message_loader = MessageLoader(
            SqlMessageRepository(session_factory),
            SqlUserRepository(session_factory),
            files,
            mapper,
            batch_size=settings.history_batch_size,
        )
        logger.info("PostgreSQL: connected (history batch size={})", settings.history_batch_size)
    else:
        logger.warning("CHATHUB_DATABASE_URL not set -- message history disabled")

    if settings.banned_words:
        runtime.banned_words = BannedWordChecker(settings.banned_words)
        logger.info("Moderation: {} banned words loaded", len(settings.banned_words))
    else:
        logger.warning("CHATHUB_BANNED_WORDS not set -- message moderation disabled")

    return runtime
