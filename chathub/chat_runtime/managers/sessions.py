"""Session store -- one active session bucket per user in the remote store.

Each user's session lives under ``{key_prefix}{user_id}`` with a TTL equal to
the configured session lifetime.  Every ``save`` rewrites the whole payload and
resets the TTL, so an idle session simply expires.

Writes are last-writer-wins.  A guarded ``delete`` (with a session id) reads
the current bucket before removing it; the two steps are not atomic, so a
concurrent login between them can still be removed.  Callers that need a
stronger guarantee must add their own optimistic check.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from loguru import logger
from pydantic import ValidationError

from chathub.chat_runtime.models.session import ChatSession

if TYPE_CHECKING:
    from chathub.chat_runtime.store.base import StateStore

DEFAULT_KEY_PREFIX = "chathub:session:user:"


class SessionValidationError(ValueError):
    """Raised when a session cannot be saved (e.g. missing user id)."""


class SessionStore:
    """Single-session-per-user store with expiry.

    Stateless beyond its reference to the shared state store; safe to share
    across concurrent handlers.
    """

    def __init__(
        self,
        store: StateStore,
        ttl: timedelta,
        *,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> None:
        self._store = store
        self._ttl = ttl
        self._key_prefix = key_prefix

    def _key(self, user_id: str) -> str:
        return f"{self._key_prefix}{user_id}"

    # -- Read ------------------------------------------------------------------

    async def find_by_user_id(self, user_id: str | None) -> ChatSession | None:
        """Return the user's session, or ``None`` if never created or expired."""
        if not user_id:
            return None
        raw = await self._store.get(self._key(user_id))
        if raw is None:
            return None
        try:
            return ChatSession.model_validate_json(raw)
        except ValidationError:
            logger.warning("Session bucket for user {} is not a valid session payload; ignoring", user_id)
            return None

    # -- Write -----------------------------------------------------------------

    async def save(self, session: ChatSession) -> ChatSession:
        """Store *session* as the user's only session, resetting its TTL.

        Raises ``SessionValidationError`` if ``user_id`` is empty.
        """
        if session is None or not session.user_id:
            msg = "Session and its user_id must not be empty"
            raise SessionValidationError(msg)
        await self._store.set(self._key(session.user_id), session.model_dump_json().encode(), ttl=self._ttl)
        logger.debug("Session saved: user={} session={}", session.user_id, session.session_id)
        return session

    async def touch(self, user_id: str) -> ChatSession | None:
        """Bump ``last_activity`` and extend the TTL.  ``None`` if no session."""
        session = await self.find_by_user_id(user_id)
        if session is None:
            return None
        refreshed = session.model_copy(update={"last_activity": datetime.now(UTC)})
        return await self.save(refreshed)

    # -- Delete ----------------------------------------------------------------

    async def delete_all(self, user_id: str | None) -> None:
        """Remove the user's session bucket, whatever session it holds."""
        if not user_id:
            return
        await self._store.delete(self._key(user_id))
        logger.debug("Session bucket removed: user={}", user_id)

    async def delete(self, user_id: str | None, session_id: str | None = None) -> None:
        """Remove the user's session only if *session_id* is omitted or matches.

        A stale client holding a superseded session id must not log out the
        newer session.
        """
        if not user_id:
            return
        if session_id is None:
            await self.delete_all(user_id)
            return
        existing = await self.find_by_user_id(user_id)
        if existing is None:
            return
        if session_id != existing.session_id:
            logger.debug(
                "Session delete skipped: user={} requested={} current={}",
                user_id,
                session_id,
                existing.session_id,
            )
            return
        await self._store.delete(self._key(user_id))
        logger.debug("Session deleted: user={} session={}", user_id, existing.session_id)
