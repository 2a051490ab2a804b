"""Persistence contract for activity logs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Final

from activity_log.domain.entities import UserActivityLog
from activity_log.domain.errors import ValidationError
from activity_log.domain.value_objects import ActivityType, UserId

SORTABLE_FIELDS: Final[frozenset[str]] = frozenset(
    {"timestamp", "user_id", "activity_type", "event_id"}
)


@dataclass(frozen=True)
class ActivityLogFilter:
    """Typed filter for activity log lookups.

    Every criterion is optional; ``start`` and ``end`` are inclusive bounds on
    the activity timestamp.
    """

    user_id: UserId | None = None
    activity_type: ActivityType | None = None
    start: datetime | None = None
    end: datetime | None = None

    def __post_init__(self) -> None:
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValidationError(
                "endDate must not be earlier than startDate",
                field="endDate",
                value=self.end,
            )


@dataclass(frozen=True)
class SortOrder:
    """Ordering applied to paginated reads."""

    field: str = "timestamp"
    descending: bool = True

    def __post_init__(self) -> None:
        if self.field not in SORTABLE_FIELDS:
            raise ValidationError(
                f"Cannot sort activity logs by {self.field!r}",
                field="sort",
                value=self.field,
            )


DEFAULT_SORT: Final[SortOrder] = SortOrder()


class UserActivityLogRepository(ABC):
    """Storage agnostic access to persisted activity logs."""

    @abstractmethod
    def save(self, log: UserActivityLog) -> None:
        """Persist ``log``.

        Raises ``DuplicateEventError`` when the event identifier is already
        stored and ``PersistenceError`` when storage is unavailable.
        """

    @abstractmethod
    def find_by_id(self, event_id: str) -> UserActivityLog | None:
        """Return the log with ``event_id`` or ``None``."""

    @abstractmethod
    def find_by_user_id(self, user_id: str) -> Sequence[UserActivityLog]:
        """Return every log recorded for ``user_id``, newest first."""

    @abstractmethod
    def find_all(
        self,
        log_filter: ActivityLogFilter,
        *,
        page: int,
        limit: int,
        sort: SortOrder | None = None,
    ) -> tuple[list[UserActivityLog], int]:
        """Return one page of matching logs and the total number of matches.

        ``(page - 1) * limit`` matches are skipped; ordering defaults to the
        timestamp, newest first.
        """


__all__ = [
    "DEFAULT_SORT",
    "SORTABLE_FIELDS",
    "ActivityLogFilter",
    "SortOrder",
    "UserActivityLogRepository",
]
