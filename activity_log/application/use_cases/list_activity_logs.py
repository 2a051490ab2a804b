"""Use cases for reading persisted activity logs."""

from __future__ import annotations

from typing import Any

from activity_log.application.dtos import (
    ActivityLogPage,
    ActivityLogQuery,
    PaginationMeta,
    UserActivityLogDTO,
    validate_payload,
)
from activity_log.domain.errors import ValidationError
from activity_log.domain.repositories import ActivityLogFilter, UserActivityLogRepository
from activity_log.domain.value_objects import ActivityType, UserId


def build_filter(query: ActivityLogQuery) -> ActivityLogFilter:
    """Translate a validated query into the typed repository filter."""

    return ActivityLogFilter(
        user_id=UserId(query.user_id) if query.user_id is not None else None,
        activity_type=(
            ActivityType(query.activity_type) if query.activity_type is not None else None
        ),
        start=query.start_date,
        end=query.end_date,
    )


def list_activity_logs(
    repository: UserActivityLogRepository,
    query: ActivityLogQuery | dict[str, Any] | None = None,
) -> ActivityLogPage:
    """Return one page of activity logs matching ``query``, newest first."""

    valid_query = validate_payload(ActivityLogQuery, query or {})
    log_filter = build_filter(valid_query)

    logs, total = repository.find_all(
        log_filter, page=valid_query.page, limit=valid_query.limit
    )
    return ActivityLogPage(
        data=[UserActivityLogDTO.from_entity(log) for log in logs],
        meta=PaginationMeta.build(
            total=total, page=valid_query.page, limit=valid_query.limit
        ),
    )


def get_activity_log(
    repository: UserActivityLogRepository, event_id: str | None
) -> UserActivityLogDTO | None:
    """Return the activity log identified by ``event_id``, or ``None`` when absent."""

    if not event_id or not event_id.strip():
        raise ValidationError("Event ID is required", field="eventId", value=event_id)

    log = repository.find_by_id(event_id.strip())
    if log is None:
        return None
    return UserActivityLogDTO.from_entity(log)


def list_user_activity_logs(
    repository: UserActivityLogRepository, user_id: str
) -> list[UserActivityLogDTO]:
    """Return every activity log recorded for ``user_id``, newest first."""

    user = UserId(user_id)
    return [UserActivityLogDTO.from_entity(log) for log in repository.find_by_user_id(str(user))]


__all__ = [
    "build_filter",
    "get_activity_log",
    "list_activity_logs",
    "list_user_activity_logs",
]
