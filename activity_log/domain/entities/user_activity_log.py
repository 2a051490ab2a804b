"""Domain entity representing a single user action."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from activity_log.domain.value_objects import (
    ActivityType,
    EventId,
    IpAddress,
    LogTimestamp,
    Metadata,
    SessionId,
    UserAgent,
    UserId,
)


@dataclass(frozen=True, eq=False)
class UserActivityLog:
    """Immutable record of one activity performed by a user.

    ``timestamp``, ``metadata`` and ``event_id`` are defaulted when omitted.
    Two logs are the same entity when they share an event identifier.
    """

    user_id: UserId
    activity_type: ActivityType
    timestamp: LogTimestamp = field(default_factory=LogTimestamp)
    metadata: Metadata = field(default_factory=Metadata)
    event_id: EventId = field(default_factory=EventId)
    session_id: SessionId | None = None
    ip_address: IpAddress | None = None
    user_agent: UserAgent | None = None

    @classmethod
    def create(
        cls,
        *,
        user_id: str,
        activity_type: str,
        timestamp: datetime | str | None = None,
        metadata: Mapping[str, Any] | None = None,
        event_id: str | None = None,
        session_id: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> "UserActivityLog":
        """Build a log from primitive values, validating each of them."""

        return cls(
            user_id=UserId(user_id),
            activity_type=ActivityType(activity_type),
            timestamp=LogTimestamp(timestamp),
            metadata=Metadata(metadata),
            event_id=EventId(event_id),
            session_id=SessionId(session_id) if session_id is not None else None,
            ip_address=IpAddress(ip_address) if ip_address is not None else None,
            user_agent=UserAgent(user_agent) if user_agent is not None else None,
        )

    def same_values(self, other: "UserActivityLog") -> bool:
        """Return ``True`` when every field of ``other`` matches this log."""

        return (
            self.event_id == other.event_id
            and self.user_id == other.user_id
            and self.activity_type == other.activity_type
            and self.timestamp == other.timestamp
            and self.metadata == other.metadata
            and self.session_id == other.session_id
            and self.ip_address == other.ip_address
            and self.user_agent == other.user_agent
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UserActivityLog):
            return NotImplemented
        return self.event_id == other.event_id

    def __hash__(self) -> int:
        return hash(self.event_id)


__all__ = ["UserActivityLog"]
