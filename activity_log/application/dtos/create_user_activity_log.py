"""Schema validating activity log creation requests at the producer edge."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from activity_log.domain.value_objects import ActivityKind

from .validation import coerce_iso_instant, normalize_activity_type


class CreateUserActivityLogRequest(BaseModel):
    """Untrusted creation request. Unknown keys, ``eventId`` included, are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: str = Field(..., alias="userId", min_length=1, description="User ID is required")
    activity_type: ActivityKind = Field(..., alias="activityType")
    metadata: dict[str, Any] | None = Field(default=None)
    timestamp: datetime | None = Field(
        default=None, description="ISO-8601 instant, defaults to now"
    )
    session_id: str | None = Field(default=None, alias="sessionId", min_length=1)
    ip_address: str | None = Field(default=None, alias="ipAddress", min_length=1)
    user_agent: str | None = Field(default=None, alias="userAgent", min_length=1)

    @field_validator("activity_type", mode="before")
    @classmethod
    def uppercase_activity_type(cls, value: Any) -> Any:
        return normalize_activity_type(value)

    @field_validator("timestamp", mode="before")
    @classmethod
    def parse_timestamp(cls, value: Any) -> datetime | None:
        return coerce_iso_instant(value)


__all__ = ["CreateUserActivityLogRequest"]
