"""Message service.

Only participants of a thread may post in it; the check and the insert are a
single statement (MessageRepository.create_if_participant).  A message can be
edited only by its sender and deleted by its sender or the thread creator.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from uuid import UUID, uuid4

from discussion.domain.errors import AuthorizationError, ValidationError
from discussion.domain.models.messages import Message, MessageView
from discussion.domain.models.pagination import Pagination, assemble
from discussion.domain.models.query import Filter, QueryOptions
from discussion.domain.repositories.messages import MessageRepository
from discussion.domain.repositories.threads import ThreadRepository

from .base import parse_uuid, storage_errors, utcnow

logger = logging.getLogger(__name__)


class MessageService:
    def __init__(self, messages: MessageRepository, threads: ThreadRepository) -> None:
        self._messages = messages
        self._threads = threads

    async def create_message(self, message: Message) -> Message:
        now = utcnow()
        new_message = message.model_copy(
            update={"id": message.id or uuid4(), "created_at": now, "updated_at": now}
        )
        with storage_errors("Failed to create message"):
            created = await self._messages.create_if_participant(new_message)
        if created is None:
            logger.warning(
                "Rejected message from %s: not a participant of thread %s",
                message.sender_id,
                message.thread_id,
            )
            raise AuthorizationError(
                "Sender is not a participant of this thread",
                detail={"thread_id": str(message.thread_id)},
            )
        return created

    async def get_message(self, message_id: str | UUID) -> MessageView:
        message_uuid = parse_uuid(message_id, "message_id")
        with storage_errors("Failed to retrieve message"):
            return await self._messages.find_by_id(message_uuid)

    async def get_messages_by_thread(self, thread_id: str | UUID) -> list[MessageView]:
        thread_uuid = parse_uuid(thread_id, "thread_id")
        with storage_errors("Failed to retrieve thread messages"):
            return await self._messages.find_by_thread(thread_uuid)

    async def get_messages_by_user(self, user_id: str | UUID) -> list[MessageView]:
        user_uuid = parse_uuid(user_id, "user_id")
        with storage_errors("Failed to retrieve user messages"):
            return await self._messages.find_by_user(user_uuid)

    async def get_recent_messages(self, limit: int = 10) -> list[MessageView]:
        with storage_errors("Failed to retrieve recent messages"):
            return await self._messages.find_recent(limit)

    async def list_messages(self, options: QueryOptions) -> list[MessageView]:
        with storage_errors("Failed to list messages"):
            return await self._messages.list(options)

    async def search_messages(
        self, query: str | None, options: QueryOptions
    ) -> tuple[list[MessageView], Pagination]:
        if query is not None:
            options = options.with_search(query)
        with storage_errors("Failed to search messages"):
            rows, total = await self._messages.search(options)
        return assemble(rows, total, options.page, options.per_page)

    async def count_messages(self, filters: Sequence[Filter] = ()) -> int:
        with storage_errors("Failed to count messages"):
            return await self._messages.count(filters)

    async def update_message(self, message: Message, actor_id: UUID) -> Message:
        if message.id is None:
            raise ValidationError("Message ID is required for update")
        current = await self.get_message(message.id)
        if message.thread_id != current.thread_id or message.sender_id != current.sender_id:
            raise ValidationError("Message thread and sender cannot be changed")
        if actor_id != current.sender_id:
            raise AuthorizationError("Only the sender can edit this message")

        updated = message.model_copy(
            update={"created_at": current.created_at, "updated_at": utcnow()}
        )
        with storage_errors("Failed to update message"):
            return await self._messages.update(updated)

    async def delete_message(self, message_id: str | UUID, actor_id: UUID | None = None) -> None:
        """Delete a message.

        actor_id, when given, must be the sender or the thread creator; None
        means the caller has already authorized the deletion.
        """
        message_uuid = parse_uuid(message_id, "message_id")
        if actor_id is not None:
            current = await self.get_message(message_uuid)
            if actor_id != current.sender_id:
                with storage_errors("Failed to retrieve thread"):
                    thread = await self._threads.find_by_id(current.thread_id)
                if actor_id != thread.creator_id:
                    raise AuthorizationError(
                        "Only the sender or the thread creator can delete this message"
                    )
        with storage_errors("Failed to delete message"):
            await self._messages.delete(message_uuid)
