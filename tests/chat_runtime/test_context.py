"""Tests for runtime wiring (build_runtime / ChatRuntime).

Client construction is lazy in redis-py and SQLAlchemy, so building a runtime
against unreachable hosts opens no connection.
"""

from __future__ import annotations

from datetime import timedelta

import pytest
from redis.asyncio.cluster import RedisCluster

from chathub.chat_runtime.context import build_runtime
from chathub.chat_runtime.managers.history import MessageLoader
from chathub.chat_runtime.moderation import BannedWordChecker
from chathub.chat_runtime.settings import ChatSettings
from chathub.chat_runtime.store.memory import MemoryStateStore
from chathub.chat_runtime.store.redis import RedisStateStore


def _settings(**overrides: object) -> ChatSettings:
    values: dict[str, object] = {"database_url": None, "banned_words": [], "state_backend": "memory"}
    values.update(overrides)
    return ChatSettings(_env_file=None, **values)


async def test_memory_backend_shares_one_store() -> None:
    runtime = build_runtime(_settings())
    try:
        assert isinstance(runtime.session_state, MemoryStateStore)
        assert runtime.session_state is runtime.chat_state
        assert runtime.message_loader is None
        assert runtime.response_mapper is None
        assert runtime.db_engine is None
        assert runtime.banned_words is None
    finally:
        await runtime.aclose()


async def test_components_share_the_store() -> None:
    runtime = build_runtime(_settings(session_ttl=timedelta(minutes=5)))
    try:
        await runtime.presence.join_room("alice", "room-1")
        assert await runtime.chat_data.get("chathub:userroom:alice", str) == "room-1"
        assert await runtime.sessions.find_by_user_id("alice") is None
    finally:
        await runtime.aclose()


async def test_redis_backend_uses_two_databases() -> None:
    runtime = build_runtime(
        _settings(state_backend="redis", redis_host="redis.invalid", redis_port=6390, chat_redis_database=3)
    )
    try:
        assert isinstance(runtime.session_state, RedisStateStore)
        assert isinstance(runtime.chat_state, RedisStateStore)
        assert runtime.session_state is not runtime.chat_state

        session_kwargs = runtime.session_state._client.connection_pool.connection_kwargs
        chat_kwargs = runtime.chat_state._client.connection_pool.connection_kwargs
        assert (session_kwargs["host"], session_kwargs["port"], session_kwargs["db"]) == ("redis.invalid", 6390, 0)
        assert (chat_kwargs["host"], chat_kwargs["port"], chat_kwargs["db"]) == ("redis.invalid", 6390, 3)
    finally:
        await runtime.aclose()


async def test_chat_redis_override() -> None:
    runtime = build_runtime(
        _settings(state_backend="redis", chat_redis_host="chat.invalid", chat_redis_port=6391, chat_redis_password="pw")
    )
    try:
        chat_kwargs = runtime.chat_state._client.connection_pool.connection_kwargs
        assert chat_kwargs["host"] == "chat.invalid"
        assert chat_kwargs["port"] == 6391
        assert chat_kwargs["password"] == "pw"
    finally:
        await runtime.aclose()


async def test_chat_redis_cluster_mode() -> None:
    runtime = build_runtime(_settings(state_backend="redis", chat_redis_cluster_nodes="10.0.0.1:7000,10.0.0.2:7001"))
    try:
        assert isinstance(runtime.chat_state._client, RedisCluster)
    finally:
        await runtime.aclose()


async def test_database_url_enables_history() -> None:
    runtime = build_runtime(_settings(database_url="postgresql+psycopg://u:p@db.invalid:5432/chathub"))
    try:
        assert isinstance(runtime.message_loader, MessageLoader)
        assert runtime.response_mapper is not None
        assert runtime.db_engine is not None
    finally:
        await runtime.aclose()


async def test_banned_words_enable_moderation() -> None:
    runtime = build_runtime(_settings(banned_words=["spam"]))
    try:
        assert isinstance(runtime.banned_words, BannedWordChecker)
        assert runtime.banned_words.contains_banned_word("SPAM here")
    finally:
        await runtime.aclose()


def test_chat_redis_target_falls_back_to_session_redis() -> None:
    settings = _settings(redis_host="sessions.invalid", redis_port=6400, redis_password="secret")
    assert settings.chat_redis_target() == ("sessions.invalid", 6400, "secret")
    assert settings.session_redis_password() == "secret"


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHATHUB_SESSION_TTL", "PT10M")
    monkeypatch.setenv("CHATHUB_BANNED_WORDS", '["spam", "scam"]')
    monkeypatch.setenv("CHATHUB_STATE_BACKEND", "memory")
    monkeypatch.setenv("CHATHUB_LOG_JSON", "true")

    settings = ChatSettings(_env_file=None)

    assert settings.session_ttl == timedelta(minutes=10)
    assert settings.banned_words == ["spam", "scam"]
    assert settings.state_backend == "memory"
    assert settings.log_json is True
