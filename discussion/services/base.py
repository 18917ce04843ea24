"""Helpers shared by the discussion services.

storage_errors() is the single point where raw storage failures receive an
ErrorKind.  Integrity violations become ConflictError; any other
SQLAlchemyError, and any network failure from the driver, becomes
DatabaseError.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from discussion.domain.errors import ConflictError, DatabaseError, ValidationError


@contextmanager
def storage_errors(message: str) -> Iterator[None]:
    try:
        yield
    except IntegrityError as exc:
        raise ConflictError.wrap(exc, message) from exc
    except (SQLAlchemyError, OSError, TimeoutError) as exc:
        # asyncpg raises connect failures outside the DBAPI hierarchy.
        raise DatabaseError.wrap(exc, message) from exc


def parse_uuid(value: str | UUID | None, field: str) -> UUID:
    """Parse an identifier; a missing or malformed value is a ValidationError."""
    if isinstance(value, UUID):
        return value
    if not value:
        raise ValidationError(f"{field} cannot be empty")
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {field} format", detail={field: value}) from None


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
