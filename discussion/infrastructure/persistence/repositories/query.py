"""Translation of QueryOptions into SQLAlchemy statements.

Each step is a pure function Select -> Select, applied in this order by
SqlRepository:

    apply_filters  -> one predicate per Filter, AND-ed in list order
    apply_search   -> OR of case-insensitive substring matches across the
                      entity's searchable columns
    apply_sort     -> requested column and direction, default created_at desc,
                      primary key as tie-breaker
    apply_window   -> OFFSET (page - 1) * per_page LIMIT per_page

count_statement() wraps the filtered statement (before sort and window) in a
SELECT count(*) so totals are independent of the pagination window.

Field names are resolved against the mapped columns of the entity; an unknown
field raises ValidationError instead of being dropped.
Search terms and contains values are matched literally: LIKE wildcards in
user input are escaped.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy import String, Uuid, cast, func, or_, select
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql import ColumnElement, Select

from discussion.domain.errors import ValidationError
from discussion.domain.models.enums import FilterOperator, SortOrder
from discussion.domain.models.query import DEFAULT_SORT_FIELD, Filter, QueryOptions

Columns = Mapping[str, InstrumentedAttribute]
LIKE_ESCAPE = "/"


def column_map(model: type, aliases: Mapping[str, str] | None = None) -> dict[str, InstrumentedAttribute]:
    """Map every column attribute name (plus aliases) of a mapped class to its attribute."""
    columns = {attr.key: getattr(model, attr.key) for attr in sa_inspect(model).column_attrs}
    for alias, target in (aliases or {}).items():
        columns[alias] = columns[target]
    return columns


def resolve_column(columns: Columns, field: str) -> InstrumentedAttribute:
    try:
        return columns[field]
    except KeyError:
        raise ValidationError(
            f"Unknown field '{field}'", detail={"allowed_fields": sorted(columns)}
        ) from None


def escape_like(value: str) -> str:
    """Make %, _ and the escape character match themselves in a LIKE pattern."""
    for char in (LIKE_ESCAPE, "%", "_"):
        value = value.replace(char, LIKE_ESCAPE + char)
    return value


def contains_pattern(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    return f"%{escape_like(str(value))}%"


def contains_clause(column: Any, value: Any) -> ColumnElement[bool]:
    return _as_text(column).ilike(contains_pattern(value), escape=LIKE_ESCAPE)


def _as_text(column: Any) -> Any:
    return column if isinstance(column.type, String) else cast(column, String)


def _coerce_value(column: InstrumentedAttribute, value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(column.type, Uuid) and isinstance(value, str):
        try:
            return UUID(value)
        except ValueError:
            raise ValidationError(
                f"Invalid UUID for field '{column.key}'", detail={"value": value}
            ) from None
    return value


def filter_clause(columns: Columns, flt: Filter) -> ColumnElement[bool]:
    column = resolve_column(columns, flt.field)
    if flt.operator is FilterOperator.CONTAINS:
        return contains_clause(column, flt.value)
    return column == _coerce_value(column, flt.value)


def apply_filters(stmt: Select, columns: Columns, filters: Sequence[Filter]) -> Select:
    for flt in filters:
        stmt = stmt.where(filter_clause(columns, flt))
    return stmt


def search_clause(search_columns: Sequence[Any], term: str) -> ColumnElement[bool]:
    return or_(*(contains_clause(column, term) for column in search_columns))


def apply_search(stmt: Select, search_columns: Sequence[Any], term: str | None) -> Select:
    if not term or not search_columns:
        return stmt
    return stmt.where(search_clause(search_columns, term))


def apply_sort(
    stmt: Select,
    columns: Columns,
    sort_by: str | None,
    sort_order: SortOrder = SortOrder.DESC,
    tie_breakers: Sequence[Any] = (),
) -> Select:
    column = resolve_column(columns, sort_by or DEFAULT_SORT_FIELD)
    ordered = column.asc() if sort_order.ascending else column.desc()
    return stmt.order_by(ordered, *tie_breakers)


def apply_window(stmt: Select, page: int | None, per_page: int | None) -> Select:
    """Apply the page window; non-positive inputs are defaulted first."""
    limit, offset = QueryOptions.build(page=page, per_page=per_page).limit_offset()
    return stmt.limit(limit).offset(offset)


def count_statement(stmt: Select) -> Select:
    """SELECT count(*) over the filtered statement, ignoring order and window."""
    inner = stmt.order_by(None).limit(None).offset(None).subquery()
    return select(func.count()).select_from(inner)
