"""Per-message handling for the consume pipeline."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from contextlib import AbstractContextManager
from enum import Enum
from typing import Any

from activity_log.application.ports import ActivityLogPublisher
from activity_log.application.use_cases import (
    parse_activity_log_message,
    process_activity_log,
)
from activity_log.domain.errors import (
    DuplicateEventError,
    PersistenceError,
    PublishError,
    ValidationError,
)
from activity_log.domain.repositories import UserActivityLogRepository
from activity_log.utils import format_iso_instant, now_utc

logger = logging.getLogger(__name__)

RepositoryScope = Callable[[], AbstractContextManager[UserActivityLogRepository]]


class MessageOutcome(str, Enum):
    PERSISTED = "persisted"
    DUPLICATE = "duplicate"
    INVALID = "invalid"
    DEAD_LETTERED = "dead_lettered"
    FAILED = "failed"


class ActivityLogMessageHandler:
    """Parse, validate and persist one channel message.

    A single bad message never raises: malformed messages are logged and
    dropped, duplicates count as already handled and storage failures are
    retried ``max_retries`` times before the message goes to ``dead_letter``.
    """

    def __init__(
        self,
        repository_scope: RepositoryScope,
        *,
        dead_letter: ActivityLogPublisher | None = None,
        max_retries: int = 3,
        retry_backoff_seconds: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._repository_scope = repository_scope
        self._dead_letter = dead_letter
        self._max_retries = max(1, max_retries)
        self._retry_backoff_seconds = retry_backoff_seconds
        self._sleep = sleep

    def handle(self, raw: bytes | str | dict[str, Any]) -> MessageOutcome:
        try:
            data = parse_activity_log_message(raw)
        except ValidationError as exc:
            logger.warning("Dropping undecodable activity log message: %s", exc)
            return MessageOutcome.INVALID

        last_error: PersistenceError | None = None
        for attempt in range(1, self._max_retries + 1):
            try:
                with self._repository_scope() as repository:
                    log = process_activity_log(repository, data)
            except ValidationError as exc:
                logger.warning(
                    "Dropping invalid activity log message %s: %s", data.get("eventId"), exc
                )
                return MessageOutcome.INVALID
            except DuplicateEventError as exc:
                logger.info("Duplicate activity log %s skipped", exc.event_id)
                return MessageOutcome.DUPLICATE
            except PersistenceError as exc:
                last_error = exc
                logger.warning(
                    "Attempt %d/%d to store activity log %s failed: %s",
                    attempt,
                    self._max_retries,
                    data.get("eventId"),
                    exc,
                )
                if attempt < self._max_retries and self._retry_backoff_seconds:
                    self._sleep(self._retry_backoff_seconds * attempt)
            else:
                logger.info("Processed activity log %s for user %s", log.event_id, log.user_id)
                return MessageOutcome.PERSISTED

        return self._send_to_dead_letter(data, last_error)

    def _send_to_dead_letter(
        self, data: dict[str, Any], error: PersistenceError | None
    ) -> MessageOutcome:
        if self._dead_letter is None:
            logger.error(
                "Giving up on activity log %s after %d attempts: %s",
                data.get("eventId"),
                self._max_retries,
                error,
            )
            return MessageOutcome.FAILED

        envelope = {
            "message": data,
            "error": str(error),
            "attempts": self._max_retries,
            "failedAt": format_iso_instant(now_utc()),
        }
        try:
            self._dead_letter.send(envelope, key=str(data.get("userId", "")))
        except PublishError as exc:
            logger.error(
                "Could not dead-letter activity log %s: %s", data.get("eventId"), exc
            )
            return MessageOutcome.FAILED
        logger.warning("Activity log %s sent to the dead-letter topic", data.get("eventId"))
        return MessageOutcome.DEAD_LETTERED


__all__ = ["ActivityLogMessageHandler", "MessageOutcome", "RepositoryScope"]
