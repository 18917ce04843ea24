"""Generic repository base interface.

Repository[T, R, K] is the root abstraction for every data-access interface in
this domain layer.  Concrete implementations live in
discussion/infrastructure/persistence/ and are wired at the application
boundary via dependency injection.

Design notes:
  - All methods are async; every call is a round-trip to the database and
    callers must treat it as blocking and potentially slow.  No retries.
  - T is the write model (create / update), R the read model returned by every
    fetch (may carry joined relations), K the identifier type.
  - find_by_id() and update() raise NotFoundError when no row matches;
    exists() never does.
  - Storage failures propagate raw; services attach an ErrorKind.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from discussion.domain.models.query import Filter, QueryOptions

T = TypeVar("T")
R = TypeVar("R")
K = TypeVar("K")


class Repository(ABC, Generic[T, R, K]):
    """Abstract CRUD + query interface shared by every discussion entity."""

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Persist a new entity (assigning an id if absent) and return it as stored."""

    @abstractmethod
    async def find_by_id(self, id: K) -> R:
        """Return the entity with its joined relations; NotFoundError on zero rows."""

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Full-document replace keyed by identifier; NotFoundError if no row matches."""

    @abstractmethod
    async def delete(self, id: K) -> None:
        """Remove the entity with the given identifier."""

    @abstractmethod
    async def list(self, options: QueryOptions) -> list[R]:
        """Return one page of rows matching filters and search, in sort order."""

    @abstractmethod
    async def search(self, options: QueryOptions) -> tuple[list[R], int]:
        """Like list(), plus the pre-pagination count of matching rows."""

    @abstractmethod
    async def count(self, filters: Sequence[Filter] = ()) -> int:
        """Number of rows matching all filters, ignoring pagination."""

    @abstractmethod
    async def exists(self, id: K) -> bool:
        """True iff find_by_id(id) would succeed."""

    @abstractmethod
    async def find_by_field(self, field: str, value: Any) -> list[R]:
        """All rows where field equals value."""

    @abstractmethod
    async def bulk_create(self, entities: Sequence[T]) -> list[T]:
        """Persist several new entities in one flush; all or nothing."""

    @abstractmethod
    async def bulk_update(self, entities: Sequence[T]) -> list[T]:
        """update() each entity in order; NotFoundError on the first miss."""

    @abstractmethod
    async def bulk_delete(self, ids: Sequence[K]) -> None:
        """Remove every listed identifier in one statement; missing ids are ignored."""
