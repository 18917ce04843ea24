"""Domain enumerations for the discussion feature.

All string-valued enums use str mixin so they serialize cleanly to JSON
and remain comparable to plain strings (Pydantic default behaviour).
"""

from enum import Enum


class ThreadStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"
    ARCHIVED = "archived"


class MessageType(str, Enum):
    DISCUSSION = "discussion"
    AI = "ai"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @property
    def ascending(self) -> bool:
        return self is SortOrder.ASC


class FilterOperator(str, Enum):
    """Supported filter predicates.

    EQUAL is an exact match; CONTAINS is a case-insensitive substring match.
    """

    EQUAL = "equal"
    CONTAINS = "contains"
