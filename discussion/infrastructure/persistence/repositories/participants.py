"""SQLAlchemy implementation of ParticipantRepository."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import and_, or_
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import ColumnElement, Select

from discussion.domain.models.participants import Participant as DomainParticipant
from discussion.domain.models.participants import ParticipantKey, ParticipantView
from discussion.domain.models.participants import participant_view
from discussion.domain.models.users import UserProfile as DomainProfile
from discussion.domain.repositories.participants import ParticipantRepository
from discussion.infrastructure.persistence.models.discussion import (
    Participant as OrmParticipant,
)
from discussion.infrastructure.persistence.models.users import UserProfile as OrmProfile

from .base import SqlRepository


def profile_to_domain(row: OrmProfile | None) -> DomainProfile | None:
    if row is None:
        return None
    return DomainProfile(user_id=row.user_id, fullname=row.fullname, avatar_url=row.avatar_url)


def participant_to_domain(row: OrmParticipant) -> DomainParticipant:
    return DomainParticipant(
        thread_id=row.thread_id,
        user_id=row.user_id,
        joined_at=row.joined_at,
        updated_at=row.updated_at,
    )


def participant_to_view(row: OrmParticipant) -> ParticipantView:
    return participant_view(participant_to_domain(row), user=profile_to_domain(row.user))


class SqlParticipantRepository(
    SqlRepository[OrmParticipant, DomainParticipant, ParticipantView, ParticipantKey],
    ParticipantRepository,
):
    model = OrmParticipant
    entity_name = "Participant"
    # Participants carry joined_at instead of created_at; keep the default sort working.
    column_aliases = {"created_at": "joined_at"}

    def _identity_clause(self, id: ParticipantKey) -> ColumnElement[bool]:
        thread_id, user_id = id
        return and_(OrmParticipant.thread_id == thread_id, OrmParticipant.user_id == user_id)

    def _identity_of(self, entity: DomainParticipant) -> ParticipantKey:
        return entity.key

    def _prepare_new(self, entity: DomainParticipant) -> DomainParticipant:
        now = datetime.now(timezone.utc)
        return entity.model_copy(
            update={
                "joined_at": entity.joined_at or now,
                "updated_at": entity.updated_at or now,
            }
        )

    def _to_row(self, entity: DomainParticipant) -> OrmParticipant:
        return OrmParticipant(
            thread_id=entity.thread_id,
            user_id=entity.user_id,
            joined_at=entity.joined_at,
            updated_at=entity.updated_at,
        )

    def _replace_values(self, entity: DomainParticipant) -> dict[str, Any]:
        values: dict[str, Any] = {"updated_at": entity.updated_at}
        if entity.joined_at is not None:
            values["joined_at"] = entity.joined_at
        return values

    def _to_read(self, row: OrmParticipant) -> ParticipantView:
        return participant_to_view(row)

    def _load_options(self) -> list[Any]:
        return [selectinload(OrmParticipant.user)]

    def _search_columns(self) -> list[Any]:
        return [OrmProfile.fullname, OrmParticipant.thread_id]

    def _identity_in(self, ids: Sequence[ParticipantKey]) -> ColumnElement[bool]:
        return or_(*(self._identity_clause(key) for key in ids))

    def _base_select(self) -> Select:
        return (
            super()
            ._base_select()
            .outerjoin(OrmProfile, OrmProfile.user_id == OrmParticipant.user_id)
        )

    async def find_by_thread(self, thread_id: UUID) -> list[ParticipantView]:
        stmt = (
            self._base_select()
            .where(OrmParticipant.thread_id == thread_id)
            .order_by(OrmParticipant.joined_at.asc(), OrmParticipant.user_id)
        )
        return await self._fetch_all(stmt)

    async def find_one(self, thread_id: UUID, user_id: UUID) -> ParticipantView | None:
        stmt = self._base_select().where(
            self._identity_clause(ParticipantKey(thread_id, user_id))
        )
        return await self._fetch_one(stmt)
