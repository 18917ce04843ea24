"""Query options: storage-independent filter / sort / pagination / search intent.

QueryOptions is the single place where malformed pagination input is
defaulted.  Every entity-specific caller builds its options through this
model, so a non-positive page or page size can never reach translation:

    page      <= 0 or missing  -> 1
    per_page  <= 0 or missing  -> 10
    per_page  >  100           -> 100
    sort_by   empty or missing -> "created_at"
    sort_order empty/missing   -> desc

Filters are AND-ed in list order; a search term is OR-ed across the entity's
searchable fields by the repository.  Anything else that is malformed (empty
filter field, unknown sort direction, unknown operator) is rejected, never
silently dropped.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from discussion.domain.errors import ValidationError

from .enums import FilterOperator, SortOrder

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100
DEFAULT_SORT_FIELD = "created_at"


def _coerce_positive(value: Any, default: int) -> Any:
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return value  # let pydantic report the type error
    return number if number >= 1 else default


class Filter(BaseModel):
    """A single (field, operator, value) predicate."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(min_length=1)
    operator: FilterOperator = FilterOperator.EQUAL
    value: Any

    @field_validator("field", mode="before")
    @classmethod
    def _strip_field(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @classmethod
    def equal(cls, field: str, value: Any) -> Filter:
        return cls(field=field, operator=FilterOperator.EQUAL, value=value)

    @classmethod
    def contains(cls, field: str, value: Any) -> Filter:
        return cls(field=field, operator=FilterOperator.CONTAINS, value=value)


class QueryOptions(BaseModel):
    """Caller-supplied filter / sort / pagination / search specification."""

    model_config = ConfigDict(frozen=True)

    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE
    sort_by: str = DEFAULT_SORT_FIELD
    sort_order: SortOrder = SortOrder.DESC
    filters: tuple[Filter, ...] = ()
    search: str | None = None

    @field_validator("page", mode="before")
    @classmethod
    def _default_page(cls, value: Any) -> Any:
        return _coerce_positive(value, DEFAULT_PAGE)

    @field_validator("per_page", mode="before")
    @classmethod
    def _default_per_page(cls, value: Any) -> Any:
        value = _coerce_positive(value, DEFAULT_PER_PAGE)
        if isinstance(value, int) and value > MAX_PER_PAGE:
            return MAX_PER_PAGE
        return value

    @field_validator("sort_by", mode="before")
    @classmethod
    def _default_sort_by(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_SORT_FIELD
        return value.strip() if isinstance(value, str) else value

    @field_validator("sort_order", mode="before")
    @classmethod
    def _default_sort_order(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return SortOrder.DESC
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("search", mode="before")
    @classmethod
    def _blank_search_is_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @classmethod
    def build(
        cls,
        page: int | None = None,
        per_page: int | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder | str | None = None,
        filters: Iterable[Filter] = (),
        search: str | None = None,
    ) -> QueryOptions:
        """Shared constructor for every caller; raises the domain ValidationError."""
        try:
            return cls(
                page=page,
                per_page=per_page,
                sort_by=sort_by,
                sort_order=sort_order,
                filters=tuple(filters),
                search=search,
            )
        except PydanticValidationError as exc:
            raise ValidationError(
                "Invalid query options", detail={"validation_errors": str(exc)}
            ) from exc

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    def limit_offset(self) -> tuple[int, int]:
        return self.per_page, self.offset

    def window(self) -> tuple[int, int]:
        """Half-open row range [start, end) for the current page."""
        return self.offset, self.page * self.per_page

    def with_filter(
        self, field: str, value: Any, operator: FilterOperator = FilterOperator.EQUAL
    ) -> QueryOptions:
        """Return a copy with one more AND-ed filter appended."""
        try:
            extra = Filter(field=field, operator=operator, value=value)
        except PydanticValidationError as exc:
            raise ValidationError(
                "Invalid filter", detail={"validation_errors": str(exc)}
            ) from exc
        return self.model_copy(update={"filters": (*self.filters, extra)})

    def with_search(self, term: str | None) -> QueryOptions:
        return QueryOptions.build(
            page=self.page,
            per_page=self.per_page,
            sort_by=self.sort_by,
            sort_order=self.sort_order,
            filters=self.filters,
            search=term,
        )


def filters_from_mapping(mapping: Mapping[str, Any]) -> list[Filter]:
    """Build equality filters from a plain field -> value mapping."""
    try:
        return [Filter.equal(field, value) for field, value in mapping.items()]
    except PydanticValidationError as exc:
        raise ValidationError(
            "Invalid filter", detail={"validation_errors": str(exc)}
        ) from exc
