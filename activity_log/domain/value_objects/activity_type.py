"""Value object for the kind of activity a user performed."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from activity_log.domain.errors import ValidationError


class ActivityKind(str, Enum):
    """Activity types accepted by the pipeline."""

    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    VIEW_PAGE = "VIEW_PAGE"
    PURCHASE = "PURCHASE"


ALLOWED_ACTIVITY_TYPES: tuple[str, ...] = tuple(kind.value for kind in ActivityKind)


@dataclass(frozen=True)
class ActivityType:
    """Activity type normalised to its upper case form.

    ``ActivityType("purchase") == ActivityType("PURCHASE")``.
    """

    value: str

    def __post_init__(self) -> None:
        raw = self.value
        if not isinstance(raw, str):
            raise ValidationError(
                f"Invalid activity type: {raw!r}", field="activityType", value=raw
            )
        normalized = raw.strip().upper()
        if normalized not in ALLOWED_ACTIVITY_TYPES:
            raise ValidationError(
                f"Invalid activity type: {raw}", field="activityType", value=raw
            )
        object.__setattr__(self, "value", normalized)

    @property
    def kind(self) -> ActivityKind:
        return ActivityKind(self.value)

    def __str__(self) -> str:
        return self.value


__all__ = ["ALLOWED_ACTIVITY_TYPES", "ActivityKind", "ActivityType"]
