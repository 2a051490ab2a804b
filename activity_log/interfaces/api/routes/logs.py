"""Consumer endpoints for reading persisted activity logs."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from activity_log.application.use_cases import (
    get_activity_log,
    list_activity_logs,
    list_user_activity_logs,
)
from activity_log.domain.repositories import UserActivityLogRepository
from activity_log.interfaces.api.dependencies import get_repository
from activity_log.interfaces.api.schemas import (
    ActivityLogListRead,
    ActivityLogRead,
    UserActivityLogsRead,
)

router = APIRouter(prefix="/api/logs", tags=["activity_logs"])


@router.get("", response_model=ActivityLogListRead, response_model_exclude_none=True)
def read_logs(
    page: str | None = Query(None, description="Page number, starting at 1"),
    limit: str | None = Query(None, description="Records per page (1-100)"),
    user_id: str | None = Query(None, alias="userId"),
    activity_type: str | None = Query(None, alias="activityType"),
    start_date: str | None = Query(None, alias="startDate", description="ISO-8601"),
    end_date: str | None = Query(None, alias="endDate", description="ISO-8601"),
    repository: UserActivityLogRepository = Depends(get_repository),
) -> ActivityLogListRead:
    """Return a filtered page of activity logs, newest first."""

    result = list_activity_logs(
        repository,
        {
            "page": page,
            "limit": limit,
            "userId": user_id,
            "activityType": activity_type,
            "startDate": start_date,
            "endDate": end_date,
        },
    )
    return ActivityLogListRead(data=result.data, meta=result.meta)


@router.get(
    "/users/{user_id}",
    response_model=UserActivityLogsRead,
    response_model_exclude_none=True,
)
def read_user_logs(
    user_id: str,
    repository: UserActivityLogRepository = Depends(get_repository),
) -> UserActivityLogsRead:
    """Return every activity log recorded for ``user_id``."""

    return UserActivityLogsRead(data=list_user_activity_logs(repository, user_id))


@router.get(
    "/{event_id}",
    response_model=ActivityLogRead,
    response_model_exclude_none=True,
    responses={status.HTTP_404_NOT_FOUND: {"description": "Activity log not found"}},
)
def read_log(
    event_id: str,
    repository: UserActivityLogRepository = Depends(get_repository),
):
    """Return the activity log identified by ``event_id``."""

    log = get_activity_log(repository, event_id)
    if log is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"status": "fail", "message": "Activity log not found"},
        )
    return ActivityLogRead(data=log)


__all__ = ["router"]
