"""Value object for the client user agent string."""

from __future__ import annotations

from dataclasses import dataclass

from activity_log.domain.errors import ValidationError


@dataclass(frozen=True)
class UserAgent:
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or len(self.value) == 0:
            raise ValidationError(
                "User agent must be a non-empty string", field="userAgent", value=self.value
            )

    def __str__(self) -> str:
        return self.value


__all__ = ["UserAgent"]
