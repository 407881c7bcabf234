"""Shared enumerations used across the chat runtime."""

from __future__ import annotations

from enum import StrEnum


class MessageType(StrEnum):
    TEXT = "text"
    FILE = "file"
    SYSTEM = "system"
    AI = "ai"
