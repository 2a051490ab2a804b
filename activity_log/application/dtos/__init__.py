"""Boundary schemas and transfer objects."""

from .activity_log_message import ActivityLogMessage
from .activity_log_query import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT, ActivityLogQuery
from .create_user_activity_log import CreateUserActivityLogRequest
from .user_activity_log_dto import ActivityLogPage, PaginationMeta, UserActivityLogDTO
from .validation import validate_payload

__all__ = [
    "ActivityLogMessage",
    "ActivityLogPage",
    "ActivityLogQuery",
    "CreateUserActivityLogRequest",
    "DEFAULT_LIMIT",
    "DEFAULT_PAGE",
    "MAX_LIMIT",
    "PaginationMeta",
    "UserActivityLogDTO",
    "validate_payload",
]
