"""Domain entities exposed by the application."""

from .user_activity_log import UserActivityLog

__all__ = ["UserActivityLog"]
