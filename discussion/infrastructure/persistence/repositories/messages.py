"""SQLAlchemy implementation of MessageRepository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Text, Uuid, insert, literal, select
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import ColumnElement

from discussion.domain.models.enums import MessageType
from discussion.domain.models.messages import Message as DomainMessage
from discussion.domain.models.messages import MessageView, message_view
from discussion.domain.models.query import QueryOptions
from discussion.domain.repositories.messages import MessageRepository
from discussion.infrastructure.persistence.models.discussion import Message as OrmMessage
from discussion.infrastructure.persistence.models.discussion import (
    Participant as OrmParticipant,
)

from .base import SqlRepository
from .participants import profile_to_domain


def _message_to_domain(row: OrmMessage) -> DomainMessage:
    return DomainMessage(
        id=row.id,
        thread_id=row.thread_id,
        sender_id=row.sender_id,
        content=row.content,
        type=MessageType(row.type),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _message_to_view(row: OrmMessage) -> MessageView:
    return message_view(_message_to_domain(row), sender=profile_to_domain(row.sender))


class SqlMessageRepository(
    SqlRepository[OrmMessage, DomainMessage, MessageView, UUID],
    MessageRepository,
):
    model = OrmMessage
    entity_name = "Message"

    def _identity_clause(self, id: UUID) -> ColumnElement[bool]:
        return OrmMessage.id == id

    def _identity_of(self, entity: DomainMessage) -> UUID | None:
        return entity.id

    def _prepare_new(self, entity: DomainMessage) -> DomainMessage:
        return entity.model_copy(
            update={
                "id": entity.id or uuid4(),
                "created_at": entity.created_at or datetime.now(timezone.utc),
            }
        )

    def _to_row(self, entity: DomainMessage) -> OrmMessage:
        return OrmMessage(
            id=entity.id,
            thread_id=entity.thread_id,
            sender_id=entity.sender_id,
            content=entity.content,
            type=entity.type.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def _replace_values(self, entity: DomainMessage) -> dict[str, Any]:
        values: dict[str, Any] = {
            "thread_id": entity.thread_id,
            "sender_id": entity.sender_id,
            "content": entity.content,
            "type": entity.type.value,
            "updated_at": entity.updated_at,
        }
        if entity.created_at is not None:
            values["created_at"] = entity.created_at
        return values

    def _to_read(self, row: OrmMessage) -> MessageView:
        return _message_to_view(row)

    def _load_options(self) -> list[Any]:
        return [selectinload(OrmMessage.sender)]

    def _search_columns(self) -> list[Any]:
        return [OrmMessage.content, OrmMessage.thread_id]

    async def find_by_thread(self, thread_id: UUID) -> list[MessageView]:
        stmt = (
            self._base_select()
            .where(OrmMessage.thread_id == thread_id)
            .order_by(OrmMessage.created_at.asc(), OrmMessage.id)
        )
        return await self._fetch_all(stmt)

    async def find_by_user(self, user_id: UUID) -> list[MessageView]:
        stmt = (
            self._base_select()
            .where(OrmMessage.sender_id == user_id)
            .order_by(OrmMessage.created_at.desc(), OrmMessage.id)
        )
        return await self._fetch_all(stmt)

    async def find_recent(self, limit: int = 10) -> list[MessageView]:
        limit = QueryOptions.build(per_page=limit).per_page
        stmt = (
            self._base_select()
            .order_by(OrmMessage.created_at.desc(), OrmMessage.id)
            .limit(limit)
        )
        return await self._fetch_all(stmt)

    async def count_by_thread(self, thread_id: UUID) -> int:
        return await self._scalar_count(
            self._base_select().where(OrmMessage.thread_id == thread_id)
        )

    async def create_if_participant(self, entity: DomainMessage) -> DomainMessage | None:
        stored = self._prepare_new(entity)
        is_participant = (
            select(OrmParticipant.user_id)
            .where(
                OrmParticipant.thread_id == stored.thread_id,
                OrmParticipant.user_id == stored.sender_id,
            )
            .exists()
        )
        source = select(
            literal(stored.id, Uuid),
            literal(stored.thread_id, Uuid),
            literal(stored.sender_id, Uuid),
            literal(stored.content, Text),
            literal(stored.type.value, Text),
            literal(stored.created_at, DateTime(timezone=True)),
            literal(stored.updated_at, DateTime(timezone=True)),
        ).where(is_participant)
        stmt = insert(OrmMessage.__table__).from_select(
            ["id", "thread_id", "sender_id", "content", "type", "created_at", "updated_at"],
            source,
        )
        result = await self._session.execute(stmt)
        return stored if result.rowcount else None
