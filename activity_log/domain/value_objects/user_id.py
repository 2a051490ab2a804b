"""Value object identifying the user that performed an activity."""

from __future__ import annotations

from dataclasses import dataclass

from activity_log.domain.errors import ValidationError


@dataclass(frozen=True)
class UserId:
    """Non-empty user identifier."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError(
                f"Invalid user ID: {self.value!r}", field="userId", value=self.value
            )

    def __str__(self) -> str:
        return self.value


__all__ = ["UserId"]
