"""Persistence package.

Importing this package registers every ORM mapper with Base.metadata
(required for Alembic autogenerate and SQLAlchemy mapper configuration)
and exports all repository implementations and the DI factory.
"""

from discussion.infrastructure.persistence.models import *  # noqa: F401, F403
from discussion.infrastructure.persistence.models import __all__ as _orm_all
from discussion.infrastructure.persistence.repositories import (
    Repositories,
    SqlMessageRepository,
    SqlParticipantRepository,
    SqlThreadRepository,
    get_repositories,
)

__all__ = _orm_all + [
    "Repositories",
    "SqlThreadRepository",
    "SqlMessageRepository",
    "SqlParticipantRepository",
    "get_repositories",
]
