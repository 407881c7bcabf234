"""Realtime presence bookkeeping on top of the shared chat data store.

Tracks, per user, the realtime connection they currently own and the room
they are in.  Any instance may update these entries; the last writer wins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from chathub.chat_runtime.models.presence import ConnectionInfo

if TYPE_CHECKING:
    from chathub.chat_runtime.managers.chat_data import ChatDataStore

CONNECTION_KEY = "chathub:conn:{user_id}"
USER_ROOM_KEY = "chathub:userroom:{user_id}"


class RealtimePresence:
    def __init__(self, chat_data: ChatDataStore) -> None:
        self._data = chat_data

    # -- Connections -----------------------------------------------------------

    async def connect(self, user_id: str, socket_id: str) -> ConnectionInfo:
        """Record *socket_id* as the user's connection, replacing any previous one."""
        info = ConnectionInfo(socket_id=socket_id)
        await self._data.set(CONNECTION_KEY.format(user_id=user_id), info)
        logger.debug("Presence: user {} connected via {}", user_id, socket_id)
        return info

    async def get_connection(self, user_id: str) -> ConnectionInfo | None:
        return await self._data.get(CONNECTION_KEY.format(user_id=user_id), ConnectionInfo)

    async def disconnect(self, user_id: str, socket_id: str) -> bool:
        """Forget the user's connection if it is still *socket_id*.

        A late disconnect from an old socket must not evict a newer one.
        Returns whether the entry was removed.
        """
        current = await self.get_connection(user_id)
        if current is None or current.socket_id != socket_id:
            return False
        await self._data.delete(CONNECTION_KEY.format(user_id=user_id))
        logger.debug("Presence: user {} disconnected ({})", user_id, socket_id)
        return True

    # -- Rooms -----------------------------------------------------------------

    async def join_room(self, user_id: str, room_id: str) -> None:
        await self._data.set(USER_ROOM_KEY.format(user_id=user_id), room_id)

    async def current_room(self, user_id: str) -> str | None:
        return await self._data.get(USER_ROOM_KEY.format(user_id=user_id), str)

    async def leave_room(self, user_id: str) -> None:
        await self._data.delete(USER_ROOM_KEY.format(user_id=user_id))
