"""Message repository interface."""

from __future__ import annotations

from abc import abstractmethod
from uuid import UUID

from discussion.domain.models.messages import Message, MessageView

from .base import Repository


class MessageRepository(Repository[Message, MessageView, UUID]):
    @abstractmethod
    async def find_by_thread(self, thread_id: UUID) -> list[MessageView]:
        """All messages in a thread, oldest first."""

    @abstractmethod
    async def find_by_user(self, user_id: UUID) -> list[MessageView]:
        """All messages sent by a user, newest first."""

    @abstractmethod
    async def find_recent(self, limit: int = 10) -> list[MessageView]:
        """The limit most recent messages across all threads."""

    @abstractmethod
    async def count_by_thread(self, thread_id: UUID) -> int:
        """Number of messages in a thread."""

    @abstractmethod
    async def create_if_participant(self, entity: Message) -> Message | None:
        """Insert the message only if its sender participates in its thread.

        Membership check and insert are one atomic statement.  Returns None
        (nothing written) when the sender is not a participant.
        """
