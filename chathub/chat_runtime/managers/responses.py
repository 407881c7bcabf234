"""Message response assembly.

Turns a durable ``Message`` into the client-facing ``MessageResponse``.  Two
entry points share one builder:

- ``map_message``: single message with an optional, already-known sender;
  the attachment is resolved by a direct file lookup.
- ``map_with_lookups``: sender and attachment come from maps pre-fetched in
  bulk by the caller.  Pure in-memory join, no store access.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from chathub.chat_runtime.models.message import FileResponse, MessageResponse, SenderResponse

if TYPE_CHECKING:
    from chathub.chat_runtime.models.message import File, Message, User
    from chathub.chat_runtime.repositories.base import FileRepository


class MessageResponseMapper:
    def __init__(self, files: FileRepository) -> None:
        self._files = files

    async def map_message(self, message: Message, sender: User | None = None) -> MessageResponse:
        file = await self._files.find_by_id(message.file_id) if message.file_id else None
        return build_response(message, sender, file)

    def map_with_lookups(
        self,
        message: Message,
        users_by_id: Mapping[str, User] | None,
        files_by_id: Mapping[str, File] | None,
    ) -> MessageResponse:
        sender = users_by_id.get(message.sender_id) if users_by_id and message.sender_id else None
        file = files_by_id.get(message.file_id) if files_by_id and message.file_id else None
        return build_response(message, sender, file)


def build_response(message: Message, sender: User | None, file: File | None) -> MessageResponse:
    """Assemble the wire model.  ``file`` is ignored when the message has no ``file_id``."""
    response = MessageResponse(
        id=message.message_id,
        content=message.content,
        type=message.type,
        timestamp=message.timestamp_millis(),
        room_id=message.room_id,
        reactions=message.reactions if message.reactions is not None else {},
        readers=message.readers if message.readers is not None else [],
        metadata=message.metadata,
    )

    if sender is not None:
        response.sender = SenderResponse(
            id=sender.user_id,
            name=sender.name,
            email=sender.email,
            profile_image=sender.profile_image,
        )

    if message.file_id and file is not None:
        response.file = FileResponse(
            id=file.file_id,
            filename=file.filename,
            originalname=file.originalname,
            mimetype=file.mimetype,
            size=file.size,
        )

    return response
