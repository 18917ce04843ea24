"""Participant domain models.

A Participant links a user to a thread.  It has no identifier of its own;
(thread_id, user_id) is the key and is unique at the storage layer.
"""

from __future__ import annotations

from datetime import datetime
from typing import NamedTuple
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from .users import UserProfile


class ParticipantKey(NamedTuple):
    thread_id: UUID
    user_id: UUID


class Participant(BaseModel):
    """Write model.  joined_at / updated_at are set by the service on join and update."""

    model_config = ConfigDict(frozen=True)

    thread_id: UUID
    user_id: UUID
    joined_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def key(self) -> ParticipantKey:
        return ParticipantKey(self.thread_id, self.user_id)


class ParticipantView(BaseModel):
    """Read model: participant plus the user's profile."""

    model_config = ConfigDict(frozen=True)

    thread_id: UUID
    user_id: UUID
    joined_at: datetime | None = None
    updated_at: datetime | None = None
    user: UserProfile | None = None


def participant_view(participant: Participant, user: UserProfile | None = None) -> ParticipantView:
    return ParticipantView(
        thread_id=participant.thread_id,
        user_id=participant.user_id,
        joined_at=participant.joined_at,
        updated_at=participant.updated_at,
        user=user,
    )
