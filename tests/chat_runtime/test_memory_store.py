"""Unit tests for MemoryStateStore.

No Redis or Docker required -- expiry is driven by a fake clock.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from chathub.chat_runtime.store.base import StateStore
from chathub.chat_runtime.store.memory import MemoryStateStore


def test_satisfies_protocol(state_store: MemoryStateStore) -> None:
    assert isinstance(state_store, StateStore)


async def test_set_and_get(state_store: MemoryStateStore) -> None:
    await state_store.set("k", b"value")
    assert await state_store.get("k") == b"value"


async def test_get_missing(state_store: MemoryStateStore) -> None:
    assert await state_store.get("nope") is None


async def test_set_overwrites(state_store: MemoryStateStore) -> None:
    await state_store.set("k", b"one")
    await state_store.set("k", b"two")
    assert await state_store.get("k") == b"two"


async def test_delete(state_store: MemoryStateStore) -> None:
    await state_store.set("k", b"v")
    await state_store.delete("k")
    assert await state_store.get("k") is None

    # Delete non-existent is a no-op.
    await state_store.delete("k")


async def test_ttl_expiry(state_store: MemoryStateStore, clock) -> None:
    await state_store.set("k", b"v", ttl=timedelta(seconds=10))

    clock.advance(timedelta(seconds=9))
    assert await state_store.get("k") == b"v"

    clock.advance(timedelta(seconds=1))
    assert await state_store.get("k") is None


async def test_no_ttl_never_expires(state_store: MemoryStateStore, clock) -> None:
    await state_store.set("k", b"v")
    clock.advance(timedelta(days=365))
    assert await state_store.get("k") == b"v"


async def test_set_without_ttl_clears_previous_ttl(state_store: MemoryStateStore, clock) -> None:
    await state_store.set("k", b"v", ttl=timedelta(seconds=5))
    await state_store.set("k", b"v")
    clock.advance(timedelta(seconds=10))
    assert await state_store.get("k") == b"v"


@pytest.mark.parametrize("ttl", [timedelta(0), timedelta(seconds=-1)])
async def test_non_positive_ttl_rejected(state_store: MemoryStateStore, ttl: timedelta) -> None:
    with pytest.raises(ValueError, match="positive"):
        await state_store.set("k", b"v", ttl=ttl)


async def test_size_counts_live_keys_only(state_store: MemoryStateStore, clock) -> None:
    await state_store.set("a", b"1")
    await state_store.set("b", b"2", ttl=timedelta(seconds=1))
    assert await state_store.size() == 2

    clock.advance(timedelta(seconds=2))
    assert await state_store.size() == 1
