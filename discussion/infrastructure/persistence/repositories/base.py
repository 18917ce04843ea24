"""Generic SQLAlchemy implementation of the Repository contract.

SqlRepository holds every operation of domain.repositories.base.Repository
once; entity repositories only declare their table, searchable columns,
eager-load options and mapping functions.

Reads always run with populate_existing so rows created or updated earlier
in the same session come back with freshly loaded relations.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql import ColumnElement, Select

from discussion.domain.errors import NotFoundError, ValidationError
from discussion.domain.models.query import Filter, QueryOptions, filters_from_mapping
from discussion.infrastructure.database import Base

from .query import (
    apply_filters,
    apply_search,
    apply_sort,
    apply_window,
    column_map,
    count_statement,
)

RowT = TypeVar("RowT", bound=Base)
T = TypeVar("T")
R = TypeVar("R")
K = TypeVar("K")


class SqlRepository(Generic[RowT, T, R, K]):
    """Mixin implementing CRUD, bulk writes, list, search, count, exists and find_by_field.
    Subclasses set ``model`` and ``entity_name`` and implement the hooks below.
    """

    model: ClassVar[type[Base]]
    entity_name: ClassVar[str] = "Record"
    column_aliases: ClassVar[dict[str, str]] = {}

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._columns = column_map(self.model, self.column_aliases)

    # ------------------------------------------------------------------ #
    # Hooks                                                                #
    # ------------------------------------------------------------------ #

    def _identity_clause(self, id: K) -> ColumnElement[bool]:
        raise NotImplementedError

    def _identity_of(self, entity: T) -> K | None:
        raise NotImplementedError

    def _identity_in(self, ids: Sequence[K]) -> ColumnElement[bool]:
        (pk,) = self._tie_breakers()
        return pk.in_(ids)

    def _prepare_new(self, entity: T) -> T:
        """Fill in storage-assigned fields (id, timestamps) before insert."""
        return entity

    def _to_row(self, entity: T) -> RowT:
        raise NotImplementedError

    def _replace_values(self, entity: T) -> dict[str, Any]:
        """Column values written by a full-document update."""
        raise NotImplementedError

    def _to_read(self, row: RowT) -> R:
        raise NotImplementedError

    def _load_options(self) -> Sequence[Any]:
        return ()

    def _search_columns(self) -> Sequence[Any]:
        return ()

    def _tie_breakers(self) -> Sequence[InstrumentedAttribute]:
        return [getattr(self.model, col.key) for col in self.model.__mapper__.primary_key]

    def _base_select(self) -> Select:
        return select(self.model)

    # ------------------------------------------------------------------ #
    # Statement helpers                                                    #
    # ------------------------------------------------------------------ #

    def _filtered(self, filters: Sequence[Filter], search: str | None = None) -> Select:
        stmt = apply_filters(self._base_select(), self._columns, filters)
        return apply_search(stmt, self._search_columns(), search)

    def _ordered(self, stmt: Select, options: QueryOptions) -> Select:
        return apply_sort(
            stmt,
            self._columns,
            options.sort_by,
            options.sort_order,
            tie_breakers=self._tie_breakers(),
        )

    async def _fetch_all(self, stmt: Select) -> list[R]:
        stmt = stmt.options(*self._load_options()).execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return [self._to_read(row) for row in result.scalars()]

    async def _fetch_one(self, stmt: Select) -> R | None:
        stmt = stmt.options(*self._load_options()).execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        row = result.scalars().first()
        return self._to_read(row) if row is not None else None

    async def _scalar_count(self, stmt: Select) -> int:
        result = await self._session.execute(count_statement(stmt))
        return int(result.scalar_one())

    # ------------------------------------------------------------------ #
    # Repository contract                                                  #
    # ------------------------------------------------------------------ #

    async def create(self, entity: T) -> T:
        stored = self._prepare_new(entity)
        self._session.add(self._to_row(stored))
        await self._session.flush()
        return stored

    async def find_by_id(self, id: K) -> R:
        found = await self._fetch_one(self._base_select().where(self._identity_clause(id)))
        if found is None:
            raise NotFoundError(f"{self.entity_name} {id} not found", detail={"id": str(id)})
        return found

    async def update(self, entity: T) -> T:
        id = self._identity_of(entity)
        if id is None:
            raise ValidationError(f"{self.entity_name} id is required for update")
        stmt = (
            update(self.model)
            .where(self._identity_clause(id))
            .values(**self._replace_values(entity))
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError(f"{self.entity_name} {id} not found", detail={"id": str(id)})
        return entity

    async def delete(self, id: K) -> None:
        # Deleting a missing id is a no-op.
        await self._session.execute(delete(self.model).where(self._identity_clause(id)))

    async def list(self, options: QueryOptions) -> list[R]:
        stmt = self._ordered(self._filtered(options.filters, options.search), options)
        return await self._fetch_all(apply_window(stmt, options.page, options.per_page))

    async def search(self, options: QueryOptions) -> tuple[list[R], int]:
        filtered = self._filtered(options.filters, options.search)
        total = await self._scalar_count(filtered)
        stmt = apply_window(self._ordered(filtered, options), options.page, options.per_page)
        return await self._fetch_all(stmt), total

    async def count(self, filters: Sequence[Filter] = ()) -> int:
        return await self._scalar_count(self._filtered(filters))

    async def exists(self, id: K) -> bool:
        stmt = self._base_select().where(self._identity_clause(id))
        return await self._scalar_count(stmt) > 0

    async def find_by_field(self, field: str, value: Any) -> list[R]:
        stmt = apply_filters(self._base_select(), self._columns, filters_from_mapping({field: value}))
        return await self._fetch_all(self._ordered(stmt, QueryOptions()))

    async def bulk_create(self, entities: Sequence[T]) -> list[T]:
        stored = [self._prepare_new(entity) for entity in entities]
        if not stored:
            return []
        self._session.add_all([self._to_row(entity) for entity in stored])
        await self._session.flush()
        return stored

    async def bulk_update(self, entities: Sequence[T]) -> list[T]:
        return [await self.update(entity) for entity in entities]

    async def bulk_delete(self, ids: Sequence[K]) -> None:
        if not ids:
            return
        await self._session.execute(delete(self.model).where(self._identity_in(ids)))
