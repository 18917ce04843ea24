"""Discussion services: validation, defaulting and error-kind attachment
on top of the repositories.
"""

from .base import parse_uuid, storage_errors
from .messages import MessageService
from .participants import ParticipantService
from .threads import ThreadService

__all__ = [
    "ThreadService",
    "MessageService",
    "ParticipantService",
    "parse_uuid",
    "storage_errors",
]
