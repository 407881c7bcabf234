"""SQLAlchemy implementations of the durable storage ports.

Each repository holds the process-wide ``async_sessionmaker`` and opens a
short-lived session per call, so repositories can be shared by concurrent
connection handlers.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from datetime import datetime

from sqlalchemy import Text, cast, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chathub.chat_runtime.db.tables import File as FileRow
from chathub.chat_runtime.db.tables import Message as MessageRow
from chathub.chat_runtime.db.tables import User as UserRow
from chathub.chat_runtime.models.message import File, Message, User


class SqlMessageRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_by_room_before(
        self,
        room_id: str,
        before: datetime,
        limit: int,
    ) -> tuple[list[Message], bool]:
        # One extra row tells us whether an older page exists.
        stmt = (
            select(MessageRow)
            .where(
                MessageRow.room_id == room_id,
                MessageRow.is_deleted.is_(False),
                MessageRow.timestamp < before,
            )
            .order_by(MessageRow.timestamp.desc(), MessageRow.message_id.desc())
            .limit(limit + 1)
        )
        async with self._session_factory() as db:
            result = await db.execute(stmt)
            rows = list(result.scalars().all())

        has_next = len(rows) > limit
        return [Message.model_validate(row) for row in rows[:limit]], has_next

    async def mark_read(self, message_ids: Sequence[str], user_id: str) -> int:
        if not message_ids:
            return 0
        stmt = (
            update(MessageRow)
            .where(
                MessageRow.message_id.in_(list(message_ids)),
                ~MessageRow.readers.contains([user_id]),
            )
            .values(readers=MessageRow.readers.op("||")(func.jsonb_build_array(cast(user_id, Text))))
            .execution_options(synchronize_session=False)
        )
        async with self._session_factory() as db:
            result = await db.execute(stmt)
            await db.commit()
        return result.rowcount  # type: ignore[return-value]

    async def find_by_ids(self, message_ids: Collection[str]) -> list[Message]:
        if not message_ids:
            return []
        stmt = select(MessageRow).where(MessageRow.message_id.in_(list(message_ids)))
        async with self._session_factory() as db:
            result = await db.execute(stmt)
            return [Message.model_validate(row) for row in result.scalars().all()]


class SqlUserRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_by_ids(self, user_ids: Collection[str]) -> list[User]:
        if not user_ids:
            return []
        stmt = select(UserRow).where(UserRow.user_id.in_(list(user_ids)))
        async with self._session_factory() as db:
            result = await db.execute(stmt)
            return [User.model_validate(row) for row in result.scalars().all()]

    async def find_by_id(self, user_id: str) -> User | None:
        async with self._session_factory() as db:
            row = await db.get(UserRow, user_id)
            return User.model_validate(row) if row is not None else None


class SqlFileRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_by_ids(self, file_ids: Collection[str]) -> list[File]:
        if not file_ids:
            return []
        stmt = select(FileRow).where(FileRow.file_id.in_(list(file_ids)))
        async with self._session_factory() as db:
            result = await db.execute(stmt)
            return [File.model_validate(row) for row in result.scalars().all()]

    async def find_by_id(self, file_id: str) -> File | None:
        async with self._session_factory() as db:
            row = await db.get(FileRow, file_id)
            return File.model_validate(row) if row is not None else None
