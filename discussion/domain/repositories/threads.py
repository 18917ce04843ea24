"""Thread repository interface."""

from __future__ import annotations

from abc import abstractmethod
from uuid import UUID

from discussion.domain.models.participants import Participant
from discussion.domain.models.threads import Thread, ThreadView

from .base import Repository


class ThreadRepository(Repository[Thread, ThreadView, UUID]):
    """Read/write interface for discussion threads.

    There is at most one thread per event (unique at the storage layer).
    """

    @abstractmethod
    async def find_by_event(self, event_id: UUID) -> ThreadView:
        """Return the thread attached to an event; NotFoundError if none."""

    @abstractmethod
    async def find_active(self, limit: int = 10) -> list[ThreadView]:
        """Return up to limit active threads, newest first."""

    @abstractmethod
    async def join(self, thread_id: UUID, user_id: UUID) -> Participant:
        """Insert a participant row linking user_id to thread_id."""
