"""SQLAlchemy implementation of ThreadRepository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy.orm import selectinload
from sqlalchemy.sql import ColumnElement

from discussion.domain.errors import NotFoundError
from discussion.domain.models.enums import ThreadStatus
from discussion.domain.models.participants import Participant as DomainParticipant
from discussion.domain.models.query import QueryOptions
from discussion.domain.models.threads import Thread as DomainThread
from discussion.domain.models.threads import ThreadView, thread_view
from discussion.domain.repositories.threads import ThreadRepository
from discussion.infrastructure.persistence.models.discussion import (
    Participant as OrmParticipant,
)
from discussion.infrastructure.persistence.models.discussion import Thread as OrmThread

from .base import SqlRepository
from .participants import participant_to_view, profile_to_domain


def _thread_to_domain(row: OrmThread) -> DomainThread:
    return DomainThread(
        id=row.id,
        title=row.title,
        description=row.description,
        event_id=row.event_id,
        creator_id=row.creator_id,
        status=ThreadStatus(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _thread_to_view(row: OrmThread) -> ThreadView:
    return thread_view(
        _thread_to_domain(row),
        creator=profile_to_domain(row.creator),
        participants=[participant_to_view(p) for p in row.participants],
    )


class SqlThreadRepository(
    SqlRepository[OrmThread, DomainThread, ThreadView, UUID],
    ThreadRepository,
):
    model = OrmThread
    entity_name = "Thread"

    def _identity_clause(self, id: UUID) -> ColumnElement[bool]:
        return OrmThread.id == id

    def _identity_of(self, entity: DomainThread) -> UUID | None:
        return entity.id

    def _prepare_new(self, entity: DomainThread) -> DomainThread:
        return entity.model_copy(
            update={
                "id": entity.id or uuid4(),
                "created_at": entity.created_at or datetime.now(timezone.utc),
            }
        )

    def _to_row(self, entity: DomainThread) -> OrmThread:
        return OrmThread(
            id=entity.id,
            title=entity.title,
            description=entity.description,
            event_id=entity.event_id,
            creator_id=entity.creator_id,
            status=entity.status.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def _replace_values(self, entity: DomainThread) -> dict[str, Any]:
        values: dict[str, Any] = {
            "title": entity.title,
            "description": entity.description,
            "event_id": entity.event_id,
            "creator_id": entity.creator_id,
            "status": entity.status.value,
            "updated_at": entity.updated_at,
        }
        if entity.created_at is not None:
            values["created_at"] = entity.created_at
        return values

    def _to_read(self, row: OrmThread) -> ThreadView:
        return _thread_to_view(row)

    def _load_options(self) -> list[Any]:
        return [
            selectinload(OrmThread.creator),
            selectinload(OrmThread.participants).selectinload(OrmParticipant.user),
        ]

    def _search_columns(self) -> list[Any]:
        return [OrmThread.title, OrmThread.description]

    async def find_by_event(self, event_id: UUID) -> ThreadView:
        found = await self._fetch_one(self._base_select().where(OrmThread.event_id == event_id))
        if found is None:
            raise NotFoundError(
                f"No thread for event {event_id}", detail={"event_id": str(event_id)}
            )
        return found

    async def find_active(self, limit: int = 10) -> list[ThreadView]:
        limit = QueryOptions.build(per_page=limit).per_page
        stmt = (
            self._base_select()
            .where(OrmThread.status == ThreadStatus.ACTIVE.value)
            .order_by(OrmThread.created_at.desc(), OrmThread.id)
            .limit(limit)
        )
        return await self._fetch_all(stmt)

    async def join(self, thread_id: UUID, user_id: UUID) -> DomainParticipant:
        now = datetime.now(timezone.utc)
        participant = DomainParticipant(
            thread_id=thread_id, user_id=user_id, joined_at=now, updated_at=now
        )
        self._session.add(
            OrmParticipant(
                thread_id=participant.thread_id,
                user_id=participant.user_id,
                joined_at=participant.joined_at,
                updated_at=participant.updated_at,
            )
        )
        await self._session.flush()
        return participant
