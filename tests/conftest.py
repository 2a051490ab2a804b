"""Shared fixtures for the activity log test-suite."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from activity_log.config import Settings, reset_settings_cache  # noqa: E402
from activity_log.domain.entities import UserActivityLog  # noqa: E402
from activity_log.infrastructure.database import Database  # noqa: E402
from activity_log.infrastructure.repositories import (  # noqa: E402
    SqlAlchemyUserActivityLogRepository,
)

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class RecordingPublisher:
    """In-memory stand-in for the Kafka publisher."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, dict[str, Any]]] = []

    def send(self, message: dict[str, Any], *, key: str) -> None:
        self.sent.append((key, message))

    def is_healthy(self) -> bool:
        return True


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        kafka_bootstrap_servers="broker-1:9092, broker-2:9092",
        consumer_max_retries=3,
        consumer_retry_backoff_seconds=0,
        run_consumer_in_api=False,
    )


@pytest.fixture()
def database(settings: Settings) -> Iterator[Database]:
    db = Database(settings.database_url)
    db.connect()
    yield db
    db.disconnect()


@pytest.fixture()
def repository(database: Database) -> Iterator[SqlAlchemyUserActivityLogRepository]:
    with database.session_scope() as session:
        yield SqlAlchemyUserActivityLogRepository(session)


@pytest.fixture()
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


def _make_log(
    user_id: str = "u1",
    activity_type: str = "LOGIN",
    *,
    minutes: int = 0,
    **extra: Any,
) -> UserActivityLog:
    """Build a log whose timestamp is ``minutes`` after ``BASE_TIME``."""

    return UserActivityLog.create(
        user_id=user_id,
        activity_type=activity_type,
        timestamp=BASE_TIME + timedelta(minutes=minutes),
        **extra,
    )


@pytest.fixture()
def make_log():
    return _make_log
