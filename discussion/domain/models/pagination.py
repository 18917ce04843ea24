"""Pagination result assembly.

Pure computation; no I/O.  Derived from the pre-pagination total and the
page / page-size actually used for the query:

    total_pages   = ceil(total / per_page)        (0 when per_page == 0)
    has_next_page = (page - 1) * per_page + per_page < total
"""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, ConfigDict

R = TypeVar("R")


class Pagination(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int
    page: int
    per_page: int
    total_pages: int
    has_next_page: bool


def total_pages(total: int, per_page: int) -> int:
    if per_page <= 0:
        return 0
    return (total + per_page - 1) // per_page


def has_next_page(total: int, page: int, per_page: int) -> bool:
    if per_page <= 0:
        return False
    return (page - 1) * per_page + per_page < total


def assemble(rows: list[R], total: int, page: int, per_page: int) -> tuple[list[R], Pagination]:
    """Wrap a page of rows with its pagination metadata."""
    return rows, Pagination(
        total=total,
        page=page,
        per_page=per_page,
        total_pages=total_pages(total, per_page),
        has_next_page=has_next_page(total, page, per_page),
    )
