"""Use cases rebuilding and persisting activity logs received from the channel."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from activity_log.application.dtos import ActivityLogMessage, validate_payload
from activity_log.domain.entities import UserActivityLog
from activity_log.domain.errors import MessageDecodeError
from activity_log.domain.repositories import UserActivityLogRepository

logger = logging.getLogger(__name__)


def parse_activity_log_message(raw: bytes | str | Mapping[str, Any]) -> dict[str, Any]:
    """Decode a channel message body into a JSON object."""

    if isinstance(raw, Mapping):
        return dict(raw)
    try:
        text = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw
        data = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError, TypeError) as exc:
        raise MessageDecodeError(f"Message body is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MessageDecodeError(
            f"Message body must be a JSON object, got {type(data).__name__}"
        )
    return data


def activity_log_from_message(data: Mapping[str, Any]) -> UserActivityLog:
    """Validate a decoded message and rebuild the entity it describes.

    Validation is repeated here even though the producer already checked the
    request: nothing on the channel enforces the schema. The producer's event
    ID is kept.
    """

    message = validate_payload(ActivityLogMessage, data)
    if message.event_id is None:
        logger.warning(
            "Message for user %s has no eventId; generating one", message.user_id
        )
    return UserActivityLog.create(
        user_id=message.user_id,
        activity_type=message.activity_type.value,
        timestamp=message.timestamp,
        metadata=message.metadata,
        event_id=message.event_id,
        session_id=message.session_id,
        ip_address=message.ip_address,
        user_agent=message.user_agent,
    )


def process_activity_log(
    repository: UserActivityLogRepository, data: Mapping[str, Any]
) -> UserActivityLog:
    """Rebuild the activity log described by ``data`` and store it."""

    log = activity_log_from_message(data)
    repository.save(log)
    return log


__all__ = [
    "activity_log_from_message",
    "parse_activity_log_message",
    "process_activity_log",
]
