"""Transfer shapes returned across the read boundary."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from activity_log.domain.entities import UserActivityLog


class UserActivityLogDTO(BaseModel):
    """Flattened, primitive-only view of an activity log."""

    model_config = ConfigDict(populate_by_name=True)

    event_id: str = Field(..., alias="eventId")
    user_id: str = Field(..., alias="userId")
    activity_type: str = Field(..., alias="activityType")
    timestamp: str = Field(..., description="ISO-8601 UTC instant")
    metadata: dict[str, Any] = Field(default_factory=dict)
    session_id: str | None = Field(default=None, alias="sessionId")
    ip_address: str | None = Field(default=None, alias="ipAddress")
    user_agent: str | None = Field(default=None, alias="userAgent")

    @classmethod
    def from_entity(cls, log: UserActivityLog) -> "UserActivityLogDTO":
        return cls(
            event_id=str(log.event_id),
            user_id=str(log.user_id),
            activity_type=str(log.activity_type),
            timestamp=log.timestamp.isoformat(),
            metadata=log.metadata.to_dict(),
            session_id=str(log.session_id) if log.session_id else None,
            ip_address=str(log.ip_address) if log.ip_address else None,
            user_agent=str(log.user_agent) if log.user_agent else None,
        )


class PaginationMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    page: int
    limit: int
    total_pages: int = Field(..., alias="totalPages")

    @classmethod
    def build(cls, *, total: int, page: int, limit: int) -> "PaginationMeta":
        return cls(total=total, page=page, limit=limit, total_pages=math.ceil(total / limit))


class ActivityLogPage(BaseModel):
    """One page of activity logs with its pagination metadata."""

    data: list[UserActivityLogDTO]
    meta: PaginationMeta


__all__ = ["ActivityLogPage", "PaginationMeta", "UserActivityLogDTO"]
