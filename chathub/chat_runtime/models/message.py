"""Message history domain and wire models.

Domain models (``Message``, ``User``, ``File``) are read-only views built from
durable storage rows via ``from_attributes``.  Wire models
(``MessageResponse``, ``FetchMessagesResponse``) are the client-facing shape:
camelCase keys, epoch-millisecond timestamps, optional sub-objects omitted
when absent.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from chathub.chat_runtime.models.enums import MessageType

# ---------------------------------------------------------------------------
# Domain
# ---------------------------------------------------------------------------


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    name: str
    email: str
    profile_image: str | None = None


class File(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    file_id: str
    filename: str
    originalname: str
    mimetype: str
    size: int


class Message(BaseModel):
    """Chat message as stored durably.

    The ORM attribute is ``metadata_`` (``metadata`` is reserved by
    SQLAlchemy's declarative base), hence the ``validation_alias``.
    """

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    message_id: str
    room_id: str
    sender_id: str | None = None
    file_id: str | None = None
    content: str | None = None
    # Types written by other services (e.g. "image") are kept as plain strings.
    type: MessageType | str = Field(default=MessageType.TEXT, union_mode="left_to_right")
    timestamp: datetime
    reactions: dict[str, list[str]] | None = None
    readers: list[str] | None = None
    metadata: dict[str, Any] | None = Field(default=None, validation_alias="metadata_")
    is_deleted: bool = False

    def timestamp_millis(self) -> int:
        """Epoch milliseconds; naive timestamps are taken as UTC."""
        ts = self.timestamp
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=UTC)
        return int(ts.timestamp() * 1000)


# ---------------------------------------------------------------------------
# Wire
# ---------------------------------------------------------------------------


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys and ``None`` fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SenderResponse(_WireModel):
    id: str
    name: str
    email: str
    profile_image: str | None = None


class FileResponse(_WireModel):
    id: str
    filename: str
    originalname: str
    mimetype: str
    size: int


class MessageResponse(_WireModel):
    id: str
    content: str | None = None
    type: MessageType | str = Field(union_mode="left_to_right")
    timestamp: int
    room_id: str
    reactions: dict[str, list[str]] = Field(default_factory=dict)
    readers: list[str] = Field(default_factory=list)
    sender: SenderResponse | None = None
    file: FileResponse | None = None
    metadata: dict[str, Any] | None = None


class FetchMessagesResponse(_WireModel):
    messages: list[MessageResponse] = Field(default_factory=list)
    has_more: bool = False
