"""ORM models used by the application infrastructure."""

from .user_activity_log import UserActivityLogModel

__all__ = ["UserActivityLogModel"]
