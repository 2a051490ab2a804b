"""Wire format of activity log messages exchanged over the channel."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from activity_log.domain.entities import UserActivityLog
from activity_log.domain.value_objects import ActivityKind
from activity_log.utils import format_iso_instant

from .validation import coerce_iso_instant, normalize_activity_type

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"


class ActivityLogMessage(BaseModel):
    """JSON object published once per user action, keyed by ``userId``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    event_id: str | None = Field(default=None, alias="eventId", pattern=UUID_PATTERN)
    user_id: str = Field(..., alias="userId", min_length=1)
    activity_type: ActivityKind = Field(..., alias="activityType")
    timestamp: datetime
    metadata: dict[str, Any] = Field(default_factory=dict)
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
        if value is None:
            raise ValueError("timestamp is required")
        return coerce_iso_instant(value)

    @field_validator("metadata", mode="before")
    @classmethod
    def default_metadata(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: datetime) -> str:
        return format_iso_instant(value)

    @classmethod
    def from_entity(cls, log: UserActivityLog) -> "ActivityLogMessage":
        return cls(
            event_id=str(log.event_id),
            user_id=str(log.user_id),
            activity_type=log.activity_type.kind,
            timestamp=log.timestamp.to_datetime(),
            metadata=log.metadata.to_dict(),
            session_id=str(log.session_id) if log.session_id else None,
            ip_address=str(log.ip_address) if log.ip_address else None,
            user_agent=str(log.user_agent) if log.user_agent else None,
        )

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready message, omitting absent optional fields."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = ["ActivityLogMessage", "UUID_PATTERN"]
