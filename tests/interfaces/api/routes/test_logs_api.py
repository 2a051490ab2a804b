"""End-to-end tests for the producer and consumer HTTP services."""

from functools import partial

import pytest
from fastapi.testclient import TestClient

from activity_log.application.dtos.activity_log_query import MAX_PAGE
from activity_log.domain.errors import PublishError
from activity_log.infrastructure.messaging import (
    ActivityLogMessageHandler,
    json_serializer,
)
from activity_log.infrastructure.repositories import repository_scope
from main import create_consumer_app, create_producer_app


@pytest.fixture()
def producer_client(settings, publisher):
    app = create_producer_app(settings, publisher=publisher)
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def consumer_client(settings, database):
    app = create_consumer_app(settings, database=database, start_consumer=False)
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def deliver(publisher, database):
    """Feed everything published so far through the consume pipeline."""

    handler = ActivityLogMessageHandler(partial(repository_scope, database))

    def _deliver():
        outcomes = [handler.handle(json_serializer(message)) for _, message in publisher.sent]
        publisher.sent.clear()
        return outcomes

    return _deliver


def test_published_log_can_be_read_back(producer_client, consumer_client, deliver):
    response = producer_client.post(
        "/api/logs",
        json={"userId": "u1", "activityType": "login", "metadata": {"browser": "chrome"}},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "success"
    event_id = body["eventId"]

    deliver()

    response = consumer_client.get(f"/api/logs/{event_id}")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["eventId"] == event_id
    assert data["userId"] == "u1"
    assert data["activityType"] == "LOGIN"
    assert data["metadata"] == {"browser": "chrome"}
    assert data["timestamp"].endswith("Z")
    assert "sessionId" not in data


def test_published_message_is_keyed_by_user(producer_client, publisher):
    producer_client.post(
        "/api/logs",
        json={
            "userId": "u7",
            "activityType": "PURCHASE",
            "timestamp": "2024-03-01T10:00:00Z",
            "ipAddress": "10.0.0.1",
        },
    )

    key, message = publisher.sent[0]
    assert key == "u7"
    assert message["timestamp"] == "2024-03-01T10:00:00.000Z"
    assert message["ipAddress"] == "10.0.0.1"


def test_logs_by_user_returns_every_record_newest_first(
    producer_client, consumer_client, deliver
):
    for minute, kind in ((0, "LOGIN"), (5, "LOGOUT")):
        producer_client.post(
            "/api/logs",
            json={
                "userId": "u1",
                "activityType": kind,
                "timestamp": f"2024-01-01T12:0{minute}:00Z",
            },
        )
    producer_client.post("/api/logs", json={"userId": "u2", "activityType": "LOGIN"})
    deliver()

    response = consumer_client.get("/api/logs/users/u1")
    assert response.status_code == 200
    assert [item["activityType"] for item in response.json()["data"]] == ["LOGOUT", "LOGIN"]

    assert consumer_client.get("/api/logs/users/nobody").json()["data"] == []


def test_list_logs_filters_and_paginates(consumer_client, database, make_log):
    with repository_scope(database) as repository:
        for minute in range(12):
            repository.save(make_log("u1", "PURCHASE", minutes=minute))
        repository.save(make_log("u2", "LOGIN", minutes=30))

    response = consumer_client.get(
        "/api/logs", params={"userId": "u1", "activityType": "purchase", "limit": 5, "page": 3}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["meta"] == {"total": 12, "page": 3, "limit": 5, "totalPages": 3}
    assert len(body["data"]) == 2

    response = consumer_client.get(
        "/api/logs",
        params={"startDate": "2024-01-01T12:20:00Z", "endDate": "2024-01-01T13:00:00Z"},
    )
    assert [item["userId"] for item in response.json()["data"]] == ["u2"]


def test_list_logs_uses_default_pagination(consumer_client):
    body = consumer_client.get("/api/logs").json()
    assert body["data"] == []
    assert body["meta"] == {"total": 0, "page": 1, "limit": 10, "totalPages": 0}


@pytest.mark.parametrize(
    ("params", "field"),
    [
        ({"limit": 101}, "limit"),
        ({"limit": 0}, "limit"),
        ({"limit": "many"}, "limit"),
        ({"page": 0}, "page"),
        ({"page": "abc"}, "page"),
        ({"page": "10000000000000000000"}, "page"),
        ({"startDate": "yesterday"}, "startDate"),
        ({"startDate": "2024-01-01"}, "startDate"),
        ({"activityType": "JUMP"}, "activityType"),
    ],
)
def test_list_logs_rejects_invalid_queries(consumer_client, params, field):
    response = consumer_client.get("/api/logs", params=params)
    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "error"
    assert body["message"] == "Validation Error"
    assert field in [error["field"] for error in body["errors"]]


def test_list_logs_accepts_the_last_addressable_page(consumer_client):
    response = consumer_client.get("/api/logs", params={"page": MAX_PAGE, "limit": 100})
    assert response.status_code == 200
    assert response.json()["data"] == []


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"activityType": "LOGIN"}, "userId"),
        ({"userId": "", "activityType": "LOGIN"}, "userId"),
        ({"userId": "u1", "activityType": "SIGNUP"}, "activityType"),
        ({"userId": "u1", "activityType": "LOGIN", "timestamp": "soon"}, "timestamp"),
        ({"userId": "u1", "activityType": "LOGIN", "metadata": "x"}, "metadata"),
    ],
)
def test_publish_rejects_invalid_payloads(producer_client, publisher, payload, field):
    response = producer_client.post("/api/logs", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "error"
    assert field in [error["field"] for error in body["errors"]]
    assert publisher.sent == []


def test_publish_rejects_non_object_bodies(producer_client):
    response = producer_client.post("/api/logs", json=["u1", "LOGIN"])
    assert response.status_code == 400


def test_publish_reports_channel_failures(settings):
    class FailingPublisher:
        def send(self, message, *, key):
            raise PublishError("broker unreachable")

        def is_healthy(self):
            return False

    app = create_producer_app(settings, publisher=FailingPublisher())
    with TestClient(app) as client:
        response = client.post("/api/logs", json={"userId": "u1", "activityType": "LOGIN"})
        health = client.get("/api/health").json()

    assert response.status_code == 503
    assert response.json()["status"] == "error"
    assert health["kafkaConnected"] is False


def test_unknown_event_returns_not_found(consumer_client):
    response = consumer_client.get("/api/logs/0f8fad5b-d9cb-469f-a165-70867728950e")

    assert response.status_code == 404
    assert response.json() == {"status": "fail", "message": "Activity log not found"}


def test_health_endpoints(producer_client, consumer_client):
    producer = producer_client.get("/api/health").json()
    assert producer["service"] == "producer-service"
    assert producer["kafkaConnected"] is True

    consumer = consumer_client.get("/api/health").json()
    assert consumer["service"] == "consumer-service"
    assert consumer["databaseConnected"] is True
