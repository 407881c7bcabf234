"""Shared chat data store for realtime connection handlers.

Handlers on any instance read and write the same keys, so a client that
reconnects to a different instance keeps its room and presence state.

Values are JSON-encoded with pydantic on write and validated against the
caller's requested type on read.  The store is not strongly typed -- several
handlers may use a key with different expectations -- so a value that does not
validate as the requested type is reported as absent rather than raised.
Backend failures are not swallowed: they propagate as ``StateStoreError``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_json

if TYPE_CHECKING:
    from chathub.chat_runtime.store.base import StateStore

T = TypeVar("T")


@lru_cache(maxsize=256)
def _adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


class ChatDataStore:
    """Typed get/set/delete facade over the remote state store (no TTL)."""

    def __init__(self, store: StateStore) -> None:
        self._store = store

    async def get(self, key: str, type_: type[T]) -> T | None:
        """Return the value at *key* as *type_*, or ``None`` if absent or of another shape."""
        raw = await self._store.get(key)
        if raw is None:
            return None
        try:
            return _adapter(type_).validate_json(raw, strict=True)
        except ValidationError:
            return None

    async def set(self, key: str, value: Any) -> None:
        await self._store.set(key, to_json(value))

    async def delete(self, key: str) -> None:
        await self._store.delete(key)

    async def size(self) -> int:
        """Approximate key count of the *whole* shared namespace.

        Includes keys that are not chat data (sessions, other tenants of the
        same database).  For coarse diagnostics only.
        """
        return await self._store.size()
