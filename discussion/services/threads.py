"""Thread service.

Validates input, applies defaults and attaches an ErrorKind to storage
failures before they leave the discussion layer.  At most one thread exists
per event; joining requires an active thread.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from uuid import UUID, uuid4

from discussion.domain.errors import (
    AuthorizationError,
    ConflictError,
    ValidationError,
)
from discussion.domain.models.enums import ThreadStatus
from discussion.domain.models.pagination import Pagination, assemble
from discussion.domain.models.participants import Participant
from discussion.domain.models.query import Filter, QueryOptions
from discussion.domain.models.threads import Thread, ThreadView
from discussion.domain.repositories.participants import ParticipantRepository
from discussion.domain.repositories.threads import ThreadRepository

from .base import parse_uuid, storage_errors, utcnow

logger = logging.getLogger(__name__)


class ThreadService:
    def __init__(self, threads: ThreadRepository, participants: ParticipantRepository) -> None:
        self._threads = threads
        self._participants = participants

    async def create_thread(self, thread: Thread) -> Thread:
        with storage_errors("Failed to check existing thread"):
            existing = await self._threads.find_by_field("event_id", thread.event_id)
        if existing:
            logger.warning("Thread already exists for event %s", thread.event_id)
            raise ConflictError(
                f"A discussion thread already exists for event {thread.event_id}",
                detail={"thread_id": str(existing[0].id)},
            )

        now = utcnow()
        new_thread = thread.model_copy(
            update={"id": thread.id or uuid4(), "created_at": now, "updated_at": now}
        )
        with storage_errors("Failed to create thread"):
            return await self._threads.create(new_thread)

    async def get_thread(self, thread_id: str | UUID) -> ThreadView:
        thread_uuid = parse_uuid(thread_id, "thread_id")
        with storage_errors("Failed to retrieve thread"):
            return await self._threads.find_by_id(thread_uuid)

    async def get_thread_by_event(self, event_id: str | UUID) -> ThreadView:
        event_uuid = parse_uuid(event_id, "event_id")
        with storage_errors("Failed to retrieve thread by event"):
            return await self._threads.find_by_event(event_uuid)

    async def get_active_threads(self, limit: int = 10) -> list[ThreadView]:
        with storage_errors("Failed to retrieve active threads"):
            return await self._threads.find_active(limit)

    async def list_threads(self, options: QueryOptions) -> list[ThreadView]:
        with storage_errors("Failed to list threads"):
            return await self._threads.list(options)

    async def search_threads(
        self, query: str | None, options: QueryOptions
    ) -> tuple[list[ThreadView], Pagination]:
        if query is not None:
            options = options.with_search(query)
        with storage_errors("Failed to search threads"):
            rows, total = await self._threads.search(options)
        return assemble(rows, total, options.page, options.per_page)

    async def count_threads(self, filters: Sequence[Filter] = ()) -> int:
        with storage_errors("Failed to count threads"):
            return await self._threads.count(filters)

    async def update_thread(self, thread: Thread, actor_id: UUID | None = None) -> Thread:
        """Replace a thread's document.

        actor_id, when given, must be the creator; None means the caller has
        already authorized the change (e.g. an admin).
        """
        if thread.id is None:
            raise ValidationError("Thread ID is required for update")
        current = await self.get_thread(thread.id)
        if thread.creator_id != current.creator_id:
            raise ValidationError("Thread creator cannot be changed")
        if actor_id is not None and actor_id != current.creator_id:
            raise AuthorizationError("Only the thread creator can update this thread")

        updated = thread.model_copy(
            update={"created_at": current.created_at, "updated_at": utcnow()}
        )
        with storage_errors("Failed to update thread"):
            return await self._threads.update(updated)

    async def delete_thread(self, thread_id: str | UUID) -> None:
        thread_uuid = parse_uuid(thread_id, "thread_id")
        with storage_errors("Failed to delete thread"):
            await self._threads.delete(thread_uuid)

    async def join_thread(self, thread_id: str | UUID, user_id: str | UUID) -> Participant:
        """Add user_id as a participant of an active thread.

        The existence check gives a clear error for the common case; the
        (thread_id, user_id) primary key rejects concurrent duplicates, which
        surface as ConflictError as well.
        """
        thread_uuid = parse_uuid(thread_id, "thread_id")
        user_uuid = parse_uuid(user_id, "user_id")

        thread = await self.get_thread(thread_uuid)
        if thread.status is not ThreadStatus.ACTIVE:
            raise ValidationError(
                "Cannot join an inactive thread", detail={"status": thread.status.value}
            )

        with storage_errors("Failed to check existing participant"):
            existing = await self._participants.find_one(thread_uuid, user_uuid)
        if existing is not None:
            logger.warning("User %s already participates in thread %s", user_uuid, thread_uuid)
            raise ConflictError("User is already a participant in this thread")

        with storage_errors("Failed to join thread"):
            participant = await self._threads.join(thread_uuid, user_uuid)
        logger.info("User %s joined thread %s", user_uuid, thread_uuid)
        return participant
