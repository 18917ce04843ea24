"""ORM model registry: imports every mapped module so each class is
registered with Base.metadata before Alembic or SQLAlchemy runs.

Import order follows the dependency graph (referenced tables first).
"""

from discussion.infrastructure.persistence.models.users import UserProfile
from discussion.infrastructure.persistence.models.discussion import (
    Message,
    Participant,
    Thread,
)

__all__ = [
    "UserProfile",
    "Thread",
    "Message",
    "Participant",
]
