"""Remote state store implementations."""

from chathub.chat_runtime.store.base import StateStore, StateStoreError
from chathub.chat_runtime.store.memory import MemoryStateStore
from chathub.chat_runtime.store.redis import RedisStateStore, create_redis_client

__all__ = ["MemoryStateStore", "RedisStateStore", "StateStore", "StateStoreError", "create_redis_client"]
