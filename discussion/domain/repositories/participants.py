"""Participant repository interface."""

from __future__ import annotations

from abc import abstractmethod
from uuid import UUID

from discussion.domain.models.participants import (
    Participant,
    ParticipantKey,
    ParticipantView,
)

from .base import Repository


class ParticipantRepository(Repository[Participant, ParticipantView, ParticipantKey]):
    """Read/write interface for thread membership.

    Identified by ParticipantKey(thread_id, user_id); there is no surrogate id.
    """

    @abstractmethod
    async def find_by_thread(self, thread_id: UUID) -> list[ParticipantView]:
        """All participants of a thread, in join order."""

    async def find_thread_participants(self, thread_id: UUID) -> list[ParticipantView]:
        return await self.find_by_thread(thread_id)

    @abstractmethod
    async def find_one(self, thread_id: UUID, user_id: UUID) -> ParticipantView | None:
        """The membership record for (thread_id, user_id), or None."""

    async def remove(self, thread_id: UUID, user_id: UUID) -> None:
        await self.delete(ParticipantKey(thread_id, user_id))
