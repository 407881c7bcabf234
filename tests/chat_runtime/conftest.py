"""Shared fixtures for chat-runtime tests.

Unit tests run against ``MemoryStateStore`` with a controllable clock and
in-memory repository doubles that record every call, so batching can be
asserted by call count.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from chathub.chat_runtime.app import app
from chathub.chat_runtime.managers.chat_data import ChatDataStore
from chathub.chat_runtime.managers.responses import MessageResponseMapper
from chathub.chat_runtime.managers.sessions import SessionStore
from chathub.chat_runtime.store.memory import MemoryStateStore
from tests.chat_runtime.factories import (
    FakeClock,
    InMemoryFileRepository,
    InMemoryMessageRepository,
    InMemoryUserRepository,
    make_file,
    make_user,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def state_store(clock: FakeClock) -> MemoryStateStore:
    return MemoryStateStore(clock=clock)


@pytest.fixture
def session_store(state_store: MemoryStateStore) -> SessionStore:
    return SessionStore(state_store, timedelta(minutes=30))


@pytest.fixture
def chat_data(state_store: MemoryStateStore) -> ChatDataStore:
    return ChatDataStore(state_store)


@pytest.fixture
def message_repo() -> InMemoryMessageRepository:
    return InMemoryMessageRepository()


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository(users={uid: make_user(uid) for uid in ("alice", "bob")})


@pytest.fixture
def file_repo() -> InMemoryFileRepository:
    return InMemoryFileRepository(files={"f1": make_file("f1")})


@pytest.fixture
def mapper(file_repo: InMemoryFileRepository) -> MessageResponseMapper:
    return MessageResponseMapper(file_repo)


@pytest.fixture
async def client(chat_data: ChatDataStore) -> AsyncIterator[AsyncClient]:
    """Async HTTP client wired to the app with an in-memory chat data store.

    The app lifespan does NOT run under ``ASGITransport``, so state fields
    are pre-set here.
    """
    app.state.runtime = None
    app.state.chat_data = chat_data

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.state.chat_data = None
