"""Repository implementations for infrastructure layer."""

from .user_activity_log_repository import (
    SqlAlchemyUserActivityLogRepository,
    repository_scope,
)

__all__ = ["SqlAlchemyUserActivityLogRepository", "repository_scope"]
