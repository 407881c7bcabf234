"""Service configuration loaded from CHATHUB_* environment variables."""

from __future__ import annotations

from datetime import timedelta
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChatSettings(BaseSettings):
    """Chathub runtime settings.

    All fields are read from environment variables with the ``CHATHUB_`` prefix.
    For example, ``CHATHUB_LOG_LEVEL=DEBUG`` maps to ``log_level``.

    Two Redis targets are configured: the session store (``redis_*``) and the
    shared chat data store (``chat_redis_*``).  Unset chat values fall back to
    the session ones, so a single Redis works out of the box -- the two stores
    are kept apart by logical database index.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHATHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"
    log_json: bool = False
    """Emit JSON records (loguru ``serialize``) instead of coloured text lines."""

    # -- Infrastructure --------------------------------------------------------
    database_url: str | None = None
    """PostgreSQL connection string (psycopg).  Required for message history."""

    state_backend: Literal["redis", "memory"] = "redis"
    """``memory`` keeps state in-process; only valid for a single instance."""

    # Session Redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: SecretStr | None = None
    redis_database: int = 0

    # Chat data Redis
    chat_redis_host: str | None = None
    chat_redis_port: int | None = None
    chat_redis_password: SecretStr | None = None
    chat_redis_database: int = 1
    chat_redis_cluster_nodes: str | None = None
    """Comma-separated ``host:port`` list.  When set, the chat data store uses cluster mode."""

    redis_socket_timeout: float = 5.0
    redis_connect_timeout: float = 5.0

    # -- Sessions --------------------------------------------------------------
    session_ttl: timedelta = timedelta(minutes=30)
    """Lifetime of a session bucket; every save resets it."""

    session_key_prefix: str = "chathub:session:user:"

    # -- History ---------------------------------------------------------------
    history_batch_size: int = 30

    # -- Moderation ------------------------------------------------------------
    banned_words: list[str] = []
    """JSON list, e.g. ``CHATHUB_BANNED_WORDS='["spam", "scam"]'``."""

    # -- Server ----------------------------------------------------------------
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000

    # -- Helpers ---------------------------------------------------------------

    def chat_redis_target(self) -> tuple[str, int, str | None]:
        """Return ``(host, port, password)`` for the chat data Redis."""
        password = self.chat_redis_password or self.redis_password
        return (
            self.chat_redis_host or self.redis_host,
            self.chat_redis_port or self.redis_port,
            password.get_secret_value() if password else None,
        )

    def session_redis_password(self) -> str | None:
        return self.redis_password.get_secret_value() if self.redis_password else None


def get_settings() -> ChatSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to force a
    re-read after overriding env vars.
    """
    return _get_settings_cached()


def _get_settings_cached() -> ChatSettings:
    """Inner function wrapped by lru_cache (allows type-safe cache_clear)."""
    return ChatSettings()


# Apply lru_cache at runtime so the function is only called once.
from functools import lru_cache  # noqa: E402

_get_settings_cached = lru_cache(maxsize=1)(_get_settings_cached)
