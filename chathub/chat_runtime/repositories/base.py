"""Durable storage ports used by the message history loader.

Messages, users and files live in durable storage owned elsewhere; the chat
runtime only reads them and requests read-status updates.  Every lookup that
can be batched has a ``find_by_ids`` form so callers never issue one query per
message.  Single lookups return ``None`` when nothing is found.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from datetime import datetime
from typing import Protocol, runtime_checkable

from chathub.chat_runtime.models.message import File, Message, User


@runtime_checkable
class MessageRepository(Protocol):
    async def find_by_room_before(
        self,
        room_id: str,
        before: datetime,
        limit: int,
    ) -> tuple[list[Message], bool]:
        """Newest-first page of non-deleted messages strictly older than *before*.

        Returns ``(page, has_next)`` where ``has_next`` tells whether older
        non-deleted messages remain beyond the page.
        """
        ...

    async def mark_read(self, message_ids: Sequence[str], user_id: str) -> int:
        """Add *user_id* to the readers of each message (once).  Returns rows changed."""
        ...

    async def find_by_ids(self, message_ids: Collection[str]) -> list[Message]: ...


@runtime_checkable
class UserRepository(Protocol):
    async def find_by_ids(self, user_ids: Collection[str]) -> list[User]: ...

    async def find_by_id(self, user_id: str) -> User | None: ...


@runtime_checkable
class FileRepository(Protocol):
    async def find_by_ids(self, file_ids: Collection[str]) -> list[File]: ...

    async def find_by_id(self, file_id: str) -> File | None: ...
