"""Tests for the diagnostics endpoints."""

from __future__ import annotations

from unittest.mock import AsyncMock

from httpx import AsyncClient

from chathub.chat_runtime.app import app
from chathub.chat_runtime.managers.chat_data import ChatDataStore
from chathub.chat_runtime.store.base import StateStoreError


async def test_state_reports_key_count(client: AsyncClient, chat_data: ChatDataStore) -> None:
    await chat_data.set("a", 1)
    await chat_data.set("b", 2)

    resp = await client.get("/api/diagnostics/state")

    assert resp.status_code == 200
    assert resp.json() == {"keys": 2, "approximate": True}


async def test_state_unconfigured(client: AsyncClient) -> None:
    app.state.chat_data = None

    resp = await client.get("/api/diagnostics/state")

    assert resp.status_code == 503
    assert resp.json()["detail"] == "Chat data store not configured."


async def test_state_backend_failure(client: AsyncClient) -> None:
    store = AsyncMock()
    store.size.side_effect = StateStoreError("Redis DBSIZE failed: refused")
    app.state.chat_data = ChatDataStore(store)

    resp = await client.get("/api/diagnostics/state")

    assert resp.status_code == 503
    assert "DBSIZE" in resp.json()["detail"]


async def test_health(client: AsyncClient) -> None:
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
