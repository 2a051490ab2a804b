"""Exceptions raised by the activity log domain and pipelines."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class ActivityLogError(Exception):
    """Base class for every error raised by the activity log pipelines."""


class ValidationError(ActivityLogError, ValueError):
    """Input rejected at the producer or consumer edge.

    ``errors`` holds one entry per offending field with the keys ``field``,
    ``message`` and (when known) ``value``.
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        errors: Sequence[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value
        if errors is None:
            errors = [{"field": field, "message": message, "value": value}] if field else []
        self.errors = list(errors)


class MessageDecodeError(ValidationError):
    """A channel message body could not be decoded as a JSON object."""


class PersistenceError(ActivityLogError):
    """Storage rejected or could not complete an operation."""


class DuplicateEventError(PersistenceError):
    """An activity log with the same event identifier already exists."""

    def __init__(self, event_id: str) -> None:
        super().__init__(f"Activity log with event ID {event_id} already exists")
        self.event_id = event_id


class PublishError(ActivityLogError):
    """The message could not be handed over to the channel."""


__all__ = [
    "ActivityLogError",
    "DuplicateEventError",
    "MessageDecodeError",
    "PersistenceError",
    "PublishError",
    "ValidationError",
]
