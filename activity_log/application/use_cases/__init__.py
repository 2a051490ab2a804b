"""Use cases implementing the publish, consume and query pipelines."""

from .list_activity_logs import (
    build_filter,
    get_activity_log,
    list_activity_logs,
    list_user_activity_logs,
)
from .process_activity_log import (
    activity_log_from_message,
    parse_activity_log_message,
    process_activity_log,
)
from .publish_activity_log import build_activity_log, publish_activity_log

__all__ = [
    "activity_log_from_message",
    "build_activity_log",
    "build_filter",
    "get_activity_log",
    "list_activity_logs",
    "list_user_activity_logs",
    "parse_activity_log_message",
    "process_activity_log",
    "publish_activity_log",
]
