"""Data models for the chat runtime."""

from chathub.chat_runtime.models.enums import MessageType
from chathub.chat_runtime.models.message import (
    FetchMessagesResponse,
    File,
    FileResponse,
    Message,
    MessageResponse,
    SenderResponse,
    User,
)
from chathub.chat_runtime.models.presence import ConnectionInfo
from chathub.chat_runtime.models.session import ChatSession

__all__ = [
    # Session
    "ChatSession",
    # Presence
    "ConnectionInfo",
    # Wire
    "FetchMessagesResponse",
    # Domain
    "File",
    "FileResponse",
    "Message",
    "MessageResponse",
    # Enums
    "MessageType",
    "SenderResponse",
    "User",
]
