"""Self-validating value objects composing an activity log."""

from .activity_type import ALLOWED_ACTIVITY_TYPES, ActivityKind, ActivityType
from .event_id import EventId, generate_event_id
from .ip_address import IpAddress
from .log_timestamp import LogTimestamp
from .metadata import Metadata
from .session_id import SessionId
from .user_agent import UserAgent
from .user_id import UserId

__all__ = [
    "ALLOWED_ACTIVITY_TYPES",
    "ActivityKind",
    "ActivityType",
    "EventId",
    "IpAddress",
    "LogTimestamp",
    "Metadata",
    "SessionId",
    "UserAgent",
    "UserId",
    "generate_event_id",
]
