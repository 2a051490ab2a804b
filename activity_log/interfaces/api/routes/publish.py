"""Producer endpoint accepting new activity logs."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from activity_log.application.ports import ActivityLogPublisher
from activity_log.application.use_cases import publish_activity_log
from activity_log.interfaces.api.dependencies import get_publisher
from activity_log.interfaces.api.schemas import ActivityLogPublished

router = APIRouter(prefix="/api/logs", tags=["activity_logs"])

_EXAMPLE_BODY = {"userId": "u1", "activityType": "LOGIN", "metadata": {"browser": "chrome"}}


@router.post(
    "",
    response_model=ActivityLogPublished,
    status_code=status.HTTP_201_CREATED,
)
def publish_log(
    payload: Any = Body(..., examples=[_EXAMPLE_BODY]),
    publisher: ActivityLogPublisher = Depends(get_publisher),
) -> ActivityLogPublished:
    """Validate the activity log and publish it to the channel."""

    log = publish_activity_log(publisher, payload)
    return ActivityLogPublished(event_id=str(log.event_id))


__all__ = ["router"]
