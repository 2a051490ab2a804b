"""Tests for per-message handling in the consume pipeline."""

import json
from contextlib import contextmanager
from functools import partial

import pytest

from activity_log.domain.errors import PersistenceError, PublishError
from activity_log.domain.repositories import UserActivityLogRepository
from activity_log.infrastructure.messaging import (
    ActivityLogMessageHandler,
    MessageOutcome,
    json_serializer,
)
from activity_log.infrastructure.repositories import repository_scope

EVENT_ID = "2b7e4c1a-9f3d-4e2b-a1c0-5d6e7f8a9b0c"


def _wire(**overrides):
    message = {
        "eventId": EVENT_ID,
        "userId": "u1",
        "activityType": "PURCHASE",
        "timestamp": "2024-01-01T00:00:00.000Z",
        "metadata": {"amount": 10},
    }
    message.update(overrides)
    return json_serializer(message)


class UnavailableRepository(UserActivityLogRepository):
    def __init__(self):
        self.attempts = 0

    def save(self, log):
        self.attempts += 1
        raise PersistenceError("database unavailable")

    def find_by_id(self, event_id):
        return None

    def find_by_user_id(self, user_id):
        return []

    def find_all(self, log_filter, *, page, limit, sort=None):
        return [], 0


@pytest.fixture()
def handler(database):
    return ActivityLogMessageHandler(partial(repository_scope, database))


@pytest.fixture()
def unavailable():
    repository = UnavailableRepository()

    @contextmanager
    def scope():
        yield repository

    return repository, scope


def test_valid_message_is_persisted(handler, database):
    assert handler.handle(_wire()) is MessageOutcome.PERSISTED

    with repository_scope(database) as repository:
        stored = repository.find_by_id(EVENT_ID)
    assert stored is not None
    assert stored.metadata.to_dict() == {"amount": 10}


def test_redelivered_message_is_a_duplicate(handler, database):
    assert handler.handle(_wire()) is MessageOutcome.PERSISTED
    assert handler.handle(_wire()) is MessageOutcome.DUPLICATE

    with repository_scope(database) as repository:
        assert len(repository.find_by_user_id("u1")) == 1


@pytest.mark.parametrize(
    "raw",
    [
        b"not json at all",
        b"[]",
        _wire(activityType="SIGNUP"),
        _wire(userId=""),
        _wire(eventId="123"),
    ],
)
def test_invalid_messages_are_dropped(handler, database, raw):
    assert handler.handle(raw) is MessageOutcome.INVALID

    with repository_scope(database) as repository:
        assert repository.find_by_user_id("u1") == []


def test_dropped_message_does_not_stall_the_stream(handler):
    assert handler.handle(b"{") is MessageOutcome.INVALID
    assert handler.handle(_wire()) is MessageOutcome.PERSISTED


def test_storage_failures_are_retried_then_reported(unavailable):
    repository, scope = unavailable
    delays = []
    handler = ActivityLogMessageHandler(
        scope, max_retries=3, retry_backoff_seconds=0.5, sleep=delays.append
    )

    assert handler.handle(_wire()) is MessageOutcome.FAILED
    assert repository.attempts == 3
    assert delays == [0.5, 1.0]


def test_storage_failures_go_to_the_dead_letter_topic(unavailable, publisher):
    repository, scope = unavailable
    handler = ActivityLogMessageHandler(
        scope, dead_letter=publisher, max_retries=2, retry_backoff_seconds=0
    )

    assert handler.handle(_wire()) is MessageOutcome.DEAD_LETTERED
    assert repository.attempts == 2

    key, envelope = publisher.sent[0]
    assert key == "u1"
    assert envelope["message"] == json.loads(_wire())
    assert envelope["attempts"] == 2
    assert "database unavailable" in envelope["error"]
    assert envelope["failedAt"].endswith("Z")


def test_dead_letter_failures_do_not_raise(unavailable):
    _, scope = unavailable

    class BrokenDeadLetter:
        def send(self, message, *, key):
            raise PublishError("broker down")

    handler = ActivityLogMessageHandler(
        scope, dead_letter=BrokenDeadLetter(), max_retries=1, retry_backoff_seconds=0
    )
    assert handler.handle(_wire()) is MessageOutcome.FAILED
