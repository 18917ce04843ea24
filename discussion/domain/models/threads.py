"""Thread domain models.

Thread is the write model used for create / update.  ThreadView is the read
model returned by every fetch: it adds the creator's profile and the
participant list.  thread_view() is the only way to build one from the other.

id and creator_id are immutable once set (enforced by ThreadService.update_thread).
Status transitions are unconstrained.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import ThreadStatus
from .participants import ParticipantView
from .users import UserProfile

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 2000


class Thread(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID | None = None
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    event_id: UUID
    creator_id: UUID
    status: ThreadStatus = ThreadStatus.ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class ThreadView(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    title: str
    description: str | None = None
    event_id: UUID
    creator_id: UUID
    status: ThreadStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None
    creator: UserProfile | None = None
    participants: list[ParticipantView] = Field(default_factory=list)
    participant_count: int = 0


def thread_view(
    thread: Thread,
    creator: UserProfile | None = None,
    participants: list[ParticipantView] | None = None,
) -> ThreadView:
    if thread.id is None:
        raise ValueError("Cannot project a thread without an id")
    participants = participants or []
    return ThreadView(
        id=thread.id,
        title=thread.title,
        description=thread.description,
        event_id=thread.event_id,
        creator_id=thread.creator_id,
        status=thread.status,
        created_at=thread.created_at,
        updated_at=thread.updated_at,
        creator=creator,
        participants=participants,
        participant_count=len(participants),
    )
