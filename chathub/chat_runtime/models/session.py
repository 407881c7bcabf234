"""User session model.

A user has at most one active session.  The whole model is serialized as JSON
into the user's session bucket in the remote state store.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(UTC)


class ChatSession(BaseModel):
    """Single active login session of a user."""

    user_id: str
    session_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = Field(default_factory=_now)
    last_activity: datetime = Field(default_factory=_now)
    attributes: dict[str, Any] = Field(
        default_factory=dict, description="Arbitrary session attributes (user agent, ip, device, ...)"
    )
