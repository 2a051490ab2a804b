"""Value object for the globally unique identifier of an activity event."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from typing import Final

from activity_log.domain.errors import ValidationError

_UUID_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


def generate_event_id() -> str:
    """Return a new random (version 4) UUID string."""

    return str(uuid.uuid4())


@dataclass(frozen=True)
class EventId:
    """UUID shaped event identifier.

    A fresh version 4 UUID is generated when no value is given. Supplied
    values are kept exactly as given.
    """

    value: str | None = field(default=None)

    def __post_init__(self) -> None:
        raw = self.value
        if raw is None or raw == "":
            object.__setattr__(self, "value", generate_event_id())
            return
        if isinstance(raw, uuid.UUID):
            raw = str(raw)
        if not isinstance(raw, str) or not _UUID_PATTERN.match(raw):
            raise ValidationError(
                f"Invalid event ID: {raw!r}", field="eventId", value=raw
            )
        object.__setattr__(self, "value", raw)

    def __str__(self) -> str:
        return str(self.value)


__all__ = ["EventId", "generate_event_id"]
