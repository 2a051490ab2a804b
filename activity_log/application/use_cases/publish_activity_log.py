"""Use case publishing a new activity log to the channel."""

from __future__ import annotations

import logging
from typing import Any

from activity_log.application.dtos import (
    ActivityLogMessage,
    CreateUserActivityLogRequest,
    validate_payload,
)
from activity_log.application.ports import ActivityLogPublisher
from activity_log.domain.entities import UserActivityLog

logger = logging.getLogger(__name__)


def build_activity_log(request: CreateUserActivityLogRequest) -> UserActivityLog:
    """Turn a validated request into an entity with a freshly generated event ID."""

    return UserActivityLog.create(
        user_id=request.user_id,
        activity_type=request.activity_type.value,
        timestamp=request.timestamp,
        metadata=request.metadata,
        session_id=request.session_id,
        ip_address=request.ip_address,
        user_agent=request.user_agent,
    )


def publish_activity_log(
    publisher: ActivityLogPublisher,
    payload: CreateUserActivityLogRequest | dict[str, Any],
) -> UserActivityLog:
    """Validate ``payload`` and send it to the channel keyed by user ID.

    Raises ``ValidationError`` before anything is sent when the payload is
    invalid. Transport failures from ``publisher`` propagate unchanged.
    """

    request = validate_payload(CreateUserActivityLogRequest, payload)
    log = build_activity_log(request)
    message = ActivityLogMessage.from_entity(log).to_wire()

    publisher.send(message, key=str(log.user_id))
    logger.info(
        "Published %s activity %s for user %s",
        log.activity_type,
        log.event_id,
        log.user_id,
    )
    return log


__all__ = ["build_activity_log", "publish_activity_log"]
