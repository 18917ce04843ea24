"""Concrete SQLAlchemy repository implementations.

Exports all SqlRepository classes and the get_repositories() factory function
for wiring at the application boundary (dependency injection).
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .base import SqlRepository
from .messages import SqlMessageRepository
from .participants import SqlParticipantRepository
from .threads import SqlThreadRepository


@dataclass
class Repositories:
    """All repository instances bound to a single AsyncSession."""

    threads: SqlThreadRepository
    messages: SqlMessageRepository
    participants: SqlParticipantRepository


def get_repositories(session: AsyncSession) -> Repositories:
    """Construct all repositories bound to the given session.

    Intended for use as a request-scoped dependency:

        async def handler(session: AsyncSession = Depends(get_session)) -> ...:
            repos = get_repositories(session)
            thread = await repos.threads.find_by_id(thread_id)
    """
    return Repositories(
        threads=SqlThreadRepository(session),
        messages=SqlMessageRepository(session),
        participants=SqlParticipantRepository(session),
    )


__all__ = [
    "SqlRepository",
    "SqlThreadRepository",
    "SqlMessageRepository",
    "SqlParticipantRepository",
    "Repositories",
    "get_repositories",
]
