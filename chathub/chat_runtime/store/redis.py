"""Redis state store.

Every operation is a single round-trip (``GET`` / ``SET PX`` / ``DEL`` /
``DBSIZE``) against a shared ``redis.asyncio`` client.  The client is created
once per process by :func:`create_redis_client` and injected here; connection
pooling is handled internally by redis-py.

Socket and connect timeouts are set on the client, so a hung backend surfaces
as ``redis.exceptions.TimeoutError`` which is re-raised as
:class:`StateStoreError` like every other backend failure.
"""

from __future__ import annotations

from datetime import timedelta

import redis.asyncio as aioredis
from redis.asyncio.cluster import ClusterNode, RedisCluster
from redis.exceptions import RedisError

from chathub.chat_runtime.store.base import StateStoreError, ttl_millis

RedisClient = aioredis.Redis | RedisCluster

_DEFAULT_PORT = 6379


def create_redis_client(
    host: str,
    port: int,
    *,
    password: str | None = None,
    database: int = 0,
    cluster_nodes: str | None = None,
    socket_timeout: float = 5.0,
    connect_timeout: float = 5.0,
) -> RedisClient:
    """Create a Redis client for a single node or a cluster.

    Args:
        host: Single-node host (ignored in cluster mode).
        port: Single-node port (ignored in cluster mode).
        password: Optional AUTH password.
        database: Logical database index.  Cluster mode only supports db 0,
            so the value is ignored there.
        cluster_nodes: Comma-separated seed addresses (``host:port``,
            optionally ``redis://`` / ``rediss://`` prefixed).  When given,
            a ``RedisCluster`` client is returned.
        socket_timeout: Per-command timeout in seconds.
        connect_timeout: Connection establishment timeout in seconds.
    """
    common = {
        "password": password or None,
        "decode_responses": False,
        "socket_timeout": socket_timeout,
        "socket_connect_timeout": connect_timeout,
    }

    if cluster_nodes:
        nodes, use_ssl = _parse_cluster_nodes(cluster_nodes)
        if not nodes:
            msg = "chat_redis_cluster_nodes must contain at least one address"
            raise ValueError(msg)
        return RedisCluster(startup_nodes=nodes, ssl=use_ssl, **common)

    return aioredis.Redis(host=host, port=port, db=database, retry_on_timeout=True, **common)


def _parse_cluster_nodes(raw: str) -> tuple[list[ClusterNode], bool]:
    nodes: list[ClusterNode] = []
    use_ssl = False
    for entry in raw.split(","):
        address = entry.strip()
        if not address:
            continue
        if address.startswith("rediss://"):
            use_ssl = True
            address = address.removeprefix("rediss://")
        else:
            address = address.removeprefix("redis://")
        host, _, port = address.rpartition(":")
        if not host:
            host, port = port, ""
        nodes.append(ClusterNode(host, int(port) if port else _DEFAULT_PORT))
    return nodes, use_ssl


class RedisStateStore:
    """Redis implementation of the StateStore protocol."""

    def __init__(self, client: RedisClient) -> None:
        self._client = client

    async def get(self, key: str) -> bytes | None:
        try:
            return await self._client.get(key)
        except RedisError as exc:
            msg = f"Redis GET failed for key '{key}': {exc}"
            raise StateStoreError(msg) from exc

    async def set(self, key: str, value: bytes, ttl: timedelta | None = None) -> None:
        px = ttl_millis(ttl) if ttl is not None else None
        try:
            await self._client.set(key, value, px=px)
        except RedisError as exc:
            msg = f"Redis SET failed for key '{key}': {exc}"
            raise StateStoreError(msg) from exc

    async def delete(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except RedisError as exc:
            msg = f"Redis DEL failed for key '{key}': {exc}"
            raise StateStoreError(msg) from exc

    async def size(self) -> int:
        # Counts every key in the logical database, not just ours.
        try:
            return int(await self._client.dbsize())
        except RedisError as exc:
            msg = f"Redis DBSIZE failed: {exc}"
            raise StateStoreError(msg) from exc

    async def aclose(self) -> None:
        """Release pooled connections."""
        await self._client.aclose()
