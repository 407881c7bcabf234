"""Message history loader -- cursor-paginated room history with batched enrichment.

A page is loaded newest-first (the index-friendly order) and reversed to
oldest-first for display.  Around that, every collection lookup is batched:

1. one read-status update for all message ids on the page,
2. at most one user lookup for the distinct sender ids,
3. at most one file lookup for the distinct attachment ids.

History is best-effort for the UI: any failure yields an empty page with
``has_more=False`` instead of breaking the connection handler.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from loguru import logger

from chathub.chat_runtime.models.message import FetchMessagesResponse

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chathub.chat_runtime.managers.responses import MessageResponseMapper
    from chathub.chat_runtime.models.message import File, Message, User
    from chathub.chat_runtime.repositories.base import FileRepository, MessageRepository, UserRepository

DEFAULT_BATCH_SIZE = 30


class MessageLoader:
    """Loads one history page per call.  Holds no cursor state."""

    def __init__(
        self,
        messages: MessageRepository,
        users: UserRepository,
        files: FileRepository,
        mapper: MessageResponseMapper,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        self._messages = messages
        self._users = users
        self._files = files
        self._mapper = mapper
        self._batch_size = batch_size

    async def load_messages(
        self,
        room_id: str,
        user_id: str,
        *,
        limit: int | None = None,
        before: datetime | None = None,
    ) -> FetchMessagesResponse:
        """Load messages older than *before* (default: now), oldest first.

        *limit* defaults to the configured batch size and is trusted as given;
        bounding it is the caller's job.
        """
        limit = limit if limit is not None else self._batch_size
        before = before if before is not None else datetime.now(UTC)
        try:
            return await self._load(room_id, user_id, limit, before)
        except Exception:
            logger.exception("Error loading messages for room {}", room_id)
            return FetchMessagesResponse(messages=[], has_more=False)

    async def _load(self, room_id: str, user_id: str, limit: int, before: datetime) -> FetchMessagesResponse:
        page, has_more = await self._messages.find_by_room_before(room_id, before, limit)
        ordered = list(reversed(page))

        if ordered:
            await self._messages.mark_read([m.message_id for m in ordered], user_id)

        users_by_id = await self._users_by_id(ordered)
        files_by_id = await self._files_by_id(ordered)

        responses = [self._mapper.map_with_lookups(m, users_by_id, files_by_id) for m in ordered]

        logger.debug(
            "Messages loaded - room: {}, limit: {}, count: {}, has_more: {}",
            room_id,
            limit,
            len(responses),
            has_more,
        )
        return FetchMessagesResponse(messages=responses, has_more=has_more)

    async def _users_by_id(self, messages: Sequence[Message]) -> dict[str, User]:
        sender_ids = {m.sender_id for m in messages if m.sender_id}
        if not sender_ids:
            return {}
        return {user.user_id: user for user in await self._users.find_by_ids(sender_ids)}

    async def _files_by_id(self, messages: Sequence[Message]) -> dict[str, File]:
        file_ids = {m.file_id for m in messages if m.file_id}
        if not file_ids:
            return {}
        return {file.file_id: file for file in await self._files.find_by_ids(file_ids)}
