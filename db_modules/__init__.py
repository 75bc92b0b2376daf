"""Database domain mixins package."""

from .db_users import UserDbMixin
from .db_events import EventDbMixin
from .db_participants import ParticipantDbMixin
from .db_execution import ExecutionDbMixin
from .db_reset_tokens import ResetTokenDbMixin

__all__ = [
    "UserDbMixin",
    "EventDbMixin",
    "ParticipantDbMixin",
    "ExecutionDbMixin",
    "ResetTokenDbMixin",
]
