"""Error taxonomy for the discussion domain.

Every failure that reaches a caller is a DiscussionError carrying exactly one
ErrorKind, a human-readable message and an optional detail payload.

Repositories raise NotFoundError / ValidationError for identifier-scoped misses
and malformed input, and let raw storage exceptions (SQLAlchemyError)
propagate.  Services attach a kind to those raw failures with
DiscussionError.wrap() before they cross the service boundary.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    DATABASE = "DATABASE_ERROR"
    CONFLICT = "CONFLICT_ERROR"
    AUTHENTICATION = "AUTH_ERROR"
    AUTHORIZATION = "AUTHORIZATION_ERROR"


class DiscussionError(Exception):
    """Base class for all structured discussion errors."""

    kind: ErrorKind = ErrorKind.DATABASE

    def __init__(self, message: str, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail or {}

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Single structured outcome: kind + message + optional detail."""
        payload: dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        if self.detail:
            payload["detail"] = self.detail
        return payload

    @classmethod
    def wrap(cls, exc: BaseException, message: str) -> DiscussionError:
        """Attach this class's kind to a raw exception.

        An exception that is already a DiscussionError keeps its own kind;
        the caller re-raises it unchanged.  Use as ``raise X.wrap(e, msg) from e``.
        """
        if isinstance(exc, DiscussionError):
            return exc
        return cls(f"{message}: {exc}", detail={"original_error": str(exc)})


class ValidationError(DiscussionError):
    kind = ErrorKind.VALIDATION


class NotFoundError(DiscussionError):
    kind = ErrorKind.NOT_FOUND


class DatabaseError(DiscussionError):
    kind = ErrorKind.DATABASE


class ConflictError(DiscussionError):
    kind = ErrorKind.CONFLICT


class AuthenticationError(DiscussionError):
    kind = ErrorKind.AUTHENTICATION


class AuthorizationError(DiscussionError):
    kind = ErrorKind.AUTHORIZATION
