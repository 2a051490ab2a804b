"""Pydantic schemas for the HTTP interface."""

from .activity_log import (
    ActivityLogListRead,
    ActivityLogPublished,
    ActivityLogRead,
    HealthRead,
    UserActivityLogsRead,
)

__all__ = [
    "ActivityLogListRead",
    "ActivityLogPublished",
    "ActivityLogRead",
    "HealthRead",
    "UserActivityLogsRead",
]
