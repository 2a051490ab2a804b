"""Value object for the session an activity belongs to."""

from __future__ import annotations

from dataclasses import dataclass

from activity_log.domain.errors import ValidationError


@dataclass(frozen=True)
class SessionId:
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError(
                f"Invalid session ID: {self.value!r}", field="sessionId", value=self.value
            )

    def __str__(self) -> str:
        return self.value


__all__ = ["SessionId"]
