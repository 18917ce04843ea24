"""Discussion ORM models: threads, messages, discussion_participants.

Profiles are joined through view-only relationships keyed on the user id;
auth.users itself is not mapped.  Cascading deletes from threads to messages
and participants are enforced by the database (ON DELETE CASCADE), not by the
ORM.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from discussion.infrastructure.database import Base

from .users import UserProfile


class Thread(Base):
    """A discussion container scoped to one external event.

    status is one of 'active' | 'closed' | 'archived' (CHECK constraint).
    event_id is unique: at most one thread per event.
    """

    __tablename__ = "threads"
    __table_args__ = (
        CheckConstraint(
            "status IN ('active', 'closed', 'archived')", name="ck_threads_status"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    event_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, unique=True)
    creator_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False, server_default="active")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    participants: Mapped[list["Participant"]] = relationship(
        back_populates="thread",
        order_by="Participant.joined_at",
        passive_deletes=True,
    )
    creator: Mapped[Optional[UserProfile]] = relationship(
        UserProfile,
        primaryjoin="foreign(Thread.creator_id) == UserProfile.user_id",
        viewonly=True,
        uselist=False,
    )


class Message(Base):
    """A single authored post within a thread.

    type is 'discussion' | 'ai' (CHECK constraint); content is at most 1000 chars.
    """

    __tablename__ = "messages"
    __table_args__ = (
        CheckConstraint("type IN ('discussion', 'ai')", name="ck_messages_type"),
        CheckConstraint("length(content) <= 1000", name="ck_messages_content_length"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    thread_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("threads.id", ondelete="CASCADE"), nullable=False
    )
    sender_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(Text, nullable=False, server_default="discussion")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    sender: Mapped[Optional[UserProfile]] = relationship(
        UserProfile,
        primaryjoin="foreign(Message.sender_id) == UserProfile.user_id",
        viewonly=True,
        uselist=False,
    )


class Participant(Base):
    """Membership of a user in a thread.

    Composite PK: (thread_id, user_id).  The key doubles as the uniqueness
    constraint that makes concurrent joins safe.
    """

    __tablename__ = "discussion_participants"

    thread_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("threads.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    joined_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=True
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=True
    )

    thread: Mapped["Thread"] = relationship(back_populates="participants")
    user: Mapped[Optional[UserProfile]] = relationship(
        UserProfile,
        primaryjoin="foreign(Participant.user_id) == UserProfile.user_id",
        viewonly=True,
        uselist=False,
    )
