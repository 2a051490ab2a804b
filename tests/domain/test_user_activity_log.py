"""Tests for the :class:`UserActivityLog` entity."""

import dataclasses

import pytest

from activity_log.domain.entities import UserActivityLog
from activity_log.domain.errors import ValidationError
from activity_log.domain.value_objects import (
    ActivityType,
    EventId,
    IpAddress,
    LogTimestamp,
    Metadata,
    SessionId,
    UserAgent,
    UserId,
)


def test_required_props_get_defaults():
    log = UserActivityLog(user_id=UserId("user-1"), activity_type=ActivityType("LOGIN"))

    assert isinstance(log.timestamp, LogTimestamp)
    assert log.metadata.to_dict() == {}
    assert isinstance(log.event_id, EventId)
    assert log.session_id is None
    assert log.ip_address is None
    assert log.user_agent is None


def test_all_props_are_kept():
    props = dict(
        user_id=UserId("user-1"),
        activity_type=ActivityType("LOGIN"),
        timestamp=LogTimestamp(),
        metadata=Metadata({"key": "value"}),
        session_id=SessionId("sess-1"),
        ip_address=IpAddress("127.0.0.1"),
        user_agent=UserAgent("test-agent"),
        event_id=EventId(),
    )
    log = UserActivityLog(**props)

    for name, value in props.items():
        assert getattr(log, name) is value


@pytest.mark.parametrize("activity", ["LOGIN", "logout", "View_Page", "PURCHASE"])
def test_create_generates_a_fresh_event_id(activity):
    first = UserActivityLog.create(user_id="u1", activity_type=activity)
    second = UserActivityLog.create(user_id="u1", activity_type=activity)

    assert first.event_id != second.event_id
    assert str(first.activity_type) == activity.upper()


def test_create_preserves_an_explicit_event_id():
    event_id = "5f1d7c1e-2b0a-4c1e-9d3f-0a1b2c3d4e5f"
    log = UserActivityLog.create(user_id="u1", activity_type="LOGIN", event_id=event_id)
    assert str(log.event_id) == event_id


def test_create_validates_every_field():
    with pytest.raises(ValidationError):
        UserActivityLog.create(user_id="", activity_type="LOGIN")
    with pytest.raises(ValidationError):
        UserActivityLog.create(user_id="u1", activity_type="INVALID")
    with pytest.raises(ValidationError):
        UserActivityLog.create(user_id="u1", activity_type="LOGIN", ip_address="nope")


def test_entity_is_immutable():
    log = UserActivityLog.create(user_id="u1", activity_type="LOGIN")
    with pytest.raises(dataclasses.FrozenInstanceError):
        log.user_id = UserId("u2")  # type: ignore[misc]


def test_identity_is_the_event_id():
    event_id = "5f1d7c1e-2b0a-4c1e-9d3f-0a1b2c3d4e5f"
    login = UserActivityLog.create(user_id="u1", activity_type="LOGIN", event_id=event_id)
    logout = UserActivityLog.create(user_id="u2", activity_type="LOGOUT", event_id=event_id)

    assert login == logout
    assert len({login, logout}) == 1
    assert not login.same_values(logout)
