"""Remote state store interface.

The remote state store is a flat key/value namespace shared by every service
instance.  Values cross the boundary as raw bytes: the typed layers built on
top (sessions, chat data) own serialization, so a payload of the wrong shape
surfaces as a decode failure in the caller rather than as a bad cast here.

Keys may carry a TTL.  An expired key is indistinguishable from an absent one.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Protocol, runtime_checkable


class StateStoreError(RuntimeError):
    """Backend or connectivity failure.  Never means "key absent"."""


@runtime_checkable
class StateStore(Protocol):
    """Async protocol for point operations against the shared store."""

    async def get(self, key: str) -> bytes | None:
        """Return the stored value, or ``None`` if absent or expired."""
        ...

    async def set(self, key: str, value: bytes, ttl: timedelta | None = None) -> None:
        """Store *value*.  With *ttl* the key expires that long after this call."""
        ...

    async def delete(self, key: str) -> None:
        """Remove *key*.  No-op if absent."""
        ...

    async def size(self) -> int:
        """Approximate number of keys in the whole namespace."""
        ...


def ttl_millis(ttl: timedelta) -> int:
    """Convert a TTL to whole milliseconds.  Raises ``ValueError`` if not positive."""
    millis = int(ttl.total_seconds() * 1000)
    if millis <= 0:
        msg = f"TTL must be positive, got {ttl!r}"
        raise ValueError(msg)
    return millis
