"""Value object for the moment an activity happened."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from activity_log.domain.errors import ValidationError
from activity_log.utils import (
    ensure_utc,
    format_iso_instant,
    now_utc,
    parse_iso_instant,
    truncate_to_milliseconds,
)


@dataclass(frozen=True)
class LogTimestamp:
    """UTC instant with millisecond precision.

    Accepts a ``datetime`` (naive values are read as UTC) or an ISO-8601
    string; defaults to the current time.
    """

    value: datetime | None = field(default=None)

    def __post_init__(self) -> None:
        raw = self.value
        if raw is None:
            object.__setattr__(self, "value", now_utc())
            return
        if isinstance(raw, str):
            try:
                parsed = parse_iso_instant(raw)
            except ValueError as exc:
                raise ValidationError(
                    f"Invalid timestamp: {raw!r}", field="timestamp", value=raw
                ) from exc
        elif isinstance(raw, datetime):
            parsed = ensure_utc(raw)
        else:
            raise ValidationError(
                f"Invalid timestamp: {raw!r}", field="timestamp", value=raw
            )
        object.__setattr__(self, "value", truncate_to_milliseconds(parsed))

    def to_datetime(self) -> datetime:
        return self.value  # type: ignore[return-value]

    def isoformat(self) -> str:
        return format_iso_instant(self.to_datetime())

    def __str__(self) -> str:
        return self.isoformat()


__all__ = ["LogTimestamp"]
