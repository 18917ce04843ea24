"""Domain model package.

All domain objects are pure Python / Pydantic models with no ORM or
infrastructure dependencies.  Import from this package to avoid coupling
application code to individual module paths.
"""

from .enums import FilterOperator, MessageType, SortOrder, ThreadStatus
from .messages import Message, MessageView, message_view
from .pagination import Pagination, assemble
from .participants import Participant, ParticipantKey, ParticipantView, participant_view
from .query import Filter, QueryOptions, filters_from_mapping
from .threads import Thread, ThreadView, thread_view
from .users import UserProfile

__all__ = [
    # enums
    "FilterOperator",
    "MessageType",
    "SortOrder",
    "ThreadStatus",
    # query
    "Filter",
    "QueryOptions",
    "filters_from_mapping",
    "Pagination",
    "assemble",
    # entities
    "Thread",
    "ThreadView",
    "thread_view",
    "Message",
    "MessageView",
    "message_view",
    "Participant",
    "ParticipantKey",
    "ParticipantView",
    "participant_view",
    "UserProfile",
]
