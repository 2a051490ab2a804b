"""Tests for the publish pipeline."""

import re

import pytest

from activity_log.application.dtos import ActivityLogMessage
from activity_log.application.use_cases import publish_activity_log
from activity_log.domain.errors import PublishError, ValidationError

UUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[0-9a-f]{4}-[0-9a-f]{12}$")


def test_publishes_one_keyed_message(publisher):
    log = publish_activity_log(
        publisher,
        {"userId": "u1", "activityType": "LOGIN", "metadata": {"browser": "chrome"}},
    )

    assert len(publisher.sent) == 1
    key, message = publisher.sent[0]
    assert key == "u1"
    assert message["eventId"] == str(log.event_id)
    assert UUID_PATTERN.match(message["eventId"])
    assert message["userId"] == "u1"
    assert message["activityType"] == "LOGIN"
    assert message["metadata"] == {"browser": "chrome"}
    assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$", message["timestamp"])
    assert set(message) == {"eventId", "userId", "activityType", "timestamp", "metadata"}


def test_defaults_metadata_and_keeps_supplied_timestamp(publisher):
    publish_activity_log(
        publisher,
        {"userId": "u1", "activityType": "view_page", "timestamp": "2024-05-01T10:00:00Z"},
    )

    _, message = publisher.sent[0]
    assert message["metadata"] == {}
    assert message["activityType"] == "VIEW_PAGE"
    assert message["timestamp"] == "2024-05-01T10:00:00.000Z"


def test_ignores_caller_supplied_event_id(publisher):
    supplied = "5f1d7c1e-2b0a-4c1e-9d3f-0a1b2c3d4e5f"
    log = publish_activity_log(
        publisher, {"userId": "u1", "activityType": "LOGIN", "eventId": supplied}
    )
    assert str(log.event_id) != supplied
    assert publisher.sent[0][1]["eventId"] != supplied


def test_each_publish_gets_its_own_event_id(publisher):
    for _ in range(3):
        publish_activity_log(publisher, {"userId": "u1", "activityType": "PURCHASE"})

    assert len({message["eventId"] for _, message in publisher.sent}) == 3


def test_optional_context_fields_travel_on_the_wire(publisher):
    publish_activity_log(
        publisher,
        {
            "userId": "u1",
            "activityType": "LOGIN",
            "sessionId": "sess-1",
            "ipAddress": "10.0.0.1",
            "userAgent": "pytest",
        },
    )
    _, message = publisher.sent[0]
    assert message["sessionId"] == "sess-1"
    assert message["ipAddress"] == "10.0.0.1"
    assert message["userAgent"] == "pytest"
    ActivityLogMessage.model_validate(message)


@pytest.mark.parametrize(
    ("payload", "field"),
    [
        ({"activityType": "LOGIN"}, "userId"),
        ({"userId": "", "activityType": "LOGIN"}, "userId"),
        ({"userId": "   ", "activityType": "LOGIN"}, "userId"),
        ({"userId": "u1", "activityType": "INVALID"}, "activityType"),
        ({"userId": "u1"}, "activityType"),
        ({"userId": "u1", "activityType": "LOGIN", "timestamp": "not-a-date"}, "timestamp"),
        ({"userId": "u1", "activityType": "LOGIN", "timestamp": 1700000000}, "timestamp"),
        ({"userId": "u1", "activityType": "LOGIN", "timestamp": "2024-05-01"}, "timestamp"),
        ({"userId": "u1", "activityType": "LOGIN", "metadata": ["x"]}, "metadata"),
        ({"userId": "u1", "activityType": "LOGIN", "ipAddress": "999.0.0.1"}, "ipAddress"),
    ],
)
def test_invalid_requests_are_never_sent(publisher, payload, field):
    with pytest.raises(ValidationError) as excinfo:
        publish_activity_log(publisher, payload)

    assert excinfo.value.field == field
    assert publisher.sent == []


def test_non_object_payload_is_rejected(publisher):
    with pytest.raises(ValidationError):
        publish_activity_log(publisher, ["userId", "u1"])
    assert publisher.sent == []


def test_transport_errors_propagate(publisher):
    class BrokenPublisher:
        def send(self, message, *, key):
            raise PublishError("broker down")

    with pytest.raises(PublishError):
        publish_activity_log(BrokenPublisher(), {"userId": "u1", "activityType": "LOGIN"})
