"""In-process state store.

Keeps entries in a dict with monotonic-clock expiry.  Only suitable for a
single service instance (local development, tests): nothing is shared across
processes.  Expired entries are purged lazily on read and on ``size()``.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import timedelta

from chathub.chat_runtime.store.base import ttl_millis


class MemoryStateStore:
    """In-memory implementation of the StateStore protocol.

    *clock* returns seconds; tests inject a fake to advance time without
    sleeping.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[bytes, float | None]] = {}

    def _expired(self, expires_at: float | None) -> bool:
        return expires_at is not None and self._clock() >= expires_at

    async def get(self, key: str) -> bytes | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._expired(expires_at):
            del self._entries[key]
            return None
        return value

    async def set(self, key: str, value: bytes, ttl: timedelta | None = None) -> None:
        expires_at = None
        if ttl is not None:
            expires_at = self._clock() + ttl_millis(ttl) / 1000
        self._entries[key] = (bytes(value), expires_at)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def size(self) -> int:
        for key in [k for k, (_, exp) in self._entries.items() if self._expired(exp)]:
            del self._entries[key]
        return len(self._entries)
