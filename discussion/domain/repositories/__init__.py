"""Domain repository interfaces.

All abstractions are defined here with abc.ABC and @abstractmethod.
Concrete implementations live in discussion/infrastructure/persistence/ and
are wired at the application boundary via dependency injection.

Import from this package rather than individual modules to avoid coupling
services to specific repository module paths.
"""

from .base import Repository
from .messages import MessageRepository
from .participants import ParticipantRepository
from .threads import ThreadRepository

__all__ = [
    "Repository",
    "ThreadRepository",
    "MessageRepository",
    "ParticipantRepository",
]
