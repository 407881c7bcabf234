"""Durable storage ports and their SQL implementations."""

from chathub.chat_runtime.repositories.base import FileRepository, MessageRepository, UserRepository
from chathub.chat_runtime.repositories.sql import SqlFileRepository, SqlMessageRepository, SqlUserRepository

__all__ = [
    "FileRepository",
    "MessageRepository",
    "SqlFileRepository",
    "SqlMessageRepository",
    "SqlUserRepository",
    "UserRepository",
]
