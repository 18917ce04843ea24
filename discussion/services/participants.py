"""Participant service: membership records of users in threads."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from uuid import UUID

from discussion.domain.errors import ConflictError
from discussion.domain.models.pagination import Pagination, assemble
from discussion.domain.models.participants import (
    Participant,
    ParticipantKey,
    ParticipantView,
)
from discussion.domain.models.query import Filter, QueryOptions
from discussion.domain.repositories.participants import ParticipantRepository

from .base import parse_uuid, storage_errors, utcnow

logger = logging.getLogger(__name__)


class ParticipantService:
    def __init__(self, participants: ParticipantRepository) -> None:
        self._participants = participants

    async def add_participant(self, participant: Participant) -> Participant:
        """Insert a membership; an existing (thread, user) pair is a ConflictError."""
        with storage_errors("Failed to check existing participant"):
            existing = await self._participants.find_one(participant.thread_id, participant.user_id)
        if existing is not None:
            logger.warning(
                "User %s already participates in thread %s",
                participant.user_id,
                participant.thread_id,
            )
            raise ConflictError("User is already a participant in this thread")

        now = utcnow()
        participant = participant.model_copy(update={"joined_at": now, "updated_at": now})
        with storage_errors("Failed to add participant"):
            return await self._participants.create(participant)

    async def get_participant(self, thread_id: str | UUID, user_id: str | UUID) -> ParticipantView:
        key = ParticipantKey(parse_uuid(thread_id, "thread_id"), parse_uuid(user_id, "user_id"))
        with storage_errors("Failed to retrieve participant"):
            return await self._participants.find_by_id(key)

    async def get_participants_by_thread(self, thread_id: str | UUID) -> list[ParticipantView]:
        thread_uuid = parse_uuid(thread_id, "thread_id")
        with storage_errors("Failed to retrieve thread participants"):
            return await self._participants.find_by_thread(thread_uuid)

    async def list_participants(self, options: QueryOptions) -> list[ParticipantView]:
        with storage_errors("Failed to list participants"):
            return await self._participants.list(options)

    async def search_participants(
        self, query: str | None, options: QueryOptions
    ) -> tuple[list[ParticipantView], Pagination]:
        if query is not None:
            options = options.with_search(query)
        with storage_errors("Failed to search participants"):
            rows, total = await self._participants.search(options)
        return assemble(rows, total, options.page, options.per_page)

    async def count_participants(self, filters: Sequence[Filter] = ()) -> int:
        with storage_errors("Failed to count participants"):
            return await self._participants.count(filters)

    async def update_participant(self, participant: Participant) -> Participant:
        """Refresh the membership's join metadata."""
        participant = participant.model_copy(update={"updated_at": utcnow()})
        with storage_errors("Failed to update participant"):
            return await self._participants.update(participant)

    async def remove_participant(self, thread_id: str | UUID, user_id: str | UUID) -> None:
        thread_uuid = parse_uuid(thread_id, "thread_id")
        user_uuid = parse_uuid(user_id, "user_id")
        with storage_errors("Failed to remove participant"):
            await self._participants.remove(thread_uuid, user_uuid)
        logger.info("User %s left thread %s", user_uuid, thread_uuid)
