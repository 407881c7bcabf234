"""Realtime presence records shared through the chat data store."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class ConnectionInfo(BaseModel):
    """The realtime connection currently owned by a user."""

    socket_id: str
    connected_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
