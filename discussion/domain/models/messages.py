"""Message domain models.

content is trimmed on construction and must be 1..1000 characters.
thread_id and sender_id are immutable after creation.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import MessageType
from .users import UserProfile

CONTENT_MAX_LENGTH = 1000


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID | None = None
    thread_id: UUID
    sender_id: UUID
    content: str = Field(min_length=1, max_length=CONTENT_MAX_LENGTH)
    type: MessageType = MessageType.DISCUSSION
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("content", mode="before")
    @classmethod
    def _strip_content(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class MessageView(BaseModel):
    """Read model: message plus the sender's profile."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    thread_id: UUID
    sender_id: UUID
    content: str
    type: MessageType
    created_at: datetime | None = None
    updated_at: datetime | None = None
    sender: UserProfile | None = None


def message_view(message: Message, sender: UserProfile | None = None) -> MessageView:
    if message.id is None:
        raise ValueError("Cannot project a message without an id")
    return MessageView(
        id=message.id,
        thread_id=message.thread_id,
        sender_id=message.sender_id,
        content=message.content,
        type=message.type,
        created_at=message.created_at,
        updated_at=message.updated_at,
        sender=sender,
    )
