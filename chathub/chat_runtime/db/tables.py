"""SQLAlchemy ORM models for PostgreSQL.

Durable records behind the message history loader: users, uploaded files and
chat messages.  Uses SQLAlchemy 2.0 declarative style with ``Mapped`` type
annotations.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Index, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Timezone-aware timestamp type for all datetime columns.
TimestampTZ = DateTime(timezone=True)


class Base(DeclarativeBase):
    """Declarative base with naming convention for constraints."""

    pass


Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class User(Base):
    __tablename__ = "users"

    user_id: Mapped[str] = mapped_column(primary_key=True)
    name: Mapped[str]
    email: Mapped[str] = mapped_column(unique=True)
    profile_image: Mapped[str | None]
    created_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now())


class File(Base):
    __tablename__ = "files"

    file_id: Mapped[str] = mapped_column(primary_key=True)
    filename: Mapped[str]
    originalname: Mapped[str]
    mimetype: Mapped[str]
    size: Mapped[int] = mapped_column(BigInteger)
    url: Mapped[str | None] = mapped_column(Text)
    uploaded_by: Mapped[str | None] = mapped_column(ForeignKey("users.user_id", name="fk_files_uploaded_by"))
    created_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now())


class Message(Base):
    __tablename__ = "messages"
    __table_args__ = (Index("ix_messages_room_id_timestamp", "room_id", "timestamp"),)

    message_id: Mapped[str] = mapped_column(primary_key=True)
    room_id: Mapped[str]
    sender_id: Mapped[str | None] = mapped_column(ForeignKey("users.user_id", name="fk_messages_sender_id"))
    file_id: Mapped[str | None] = mapped_column(ForeignKey("files.file_id", name="fk_messages_file_id"))
    content: Mapped[str | None] = mapped_column(Text)
    type: Mapped[str] = mapped_column(server_default="text")
    timestamp: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now())
    reactions: Mapped[dict] = mapped_column(JSONB, nullable=False, server_default="{}")
    readers: Mapped[list] = mapped_column(JSONB, nullable=False, server_default="[]")
    metadata_: Mapped[dict | None] = mapped_column("metadata", JSONB)
    is_deleted: Mapped[bool] = mapped_column(default=False, server_default="false")
