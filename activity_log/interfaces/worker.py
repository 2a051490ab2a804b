"""Standalone consumer process: Kafka → validation → database.

Run with ``python -m activity_log.interfaces.worker``.
"""

from __future__ import annotations

import logging
import signal
from functools import partial

from activity_log.config import Settings, get_settings
from activity_log.infrastructure.database import Database
from activity_log.infrastructure.messaging import (
    ActivityLogMessageHandler,
    KafkaActivityLogConsumer,
    KafkaActivityLogProducer,
)
from activity_log.infrastructure.repositories import repository_scope
from activity_log.utils import configure_logging

logger = logging.getLogger(__name__)


def build_consumer(
    settings: Settings, database: Database
) -> tuple[KafkaActivityLogConsumer, KafkaActivityLogProducer | None]:
    """Wire the consumer loop with its handler and optional dead-letter publisher."""

    dead_letter = None
    if settings.kafka_dead_letter_topic:
        dead_letter = KafkaActivityLogProducer(
            settings, topic=settings.kafka_dead_letter_topic, schema=None
        )
    handler = ActivityLogMessageHandler(
        partial(repository_scope, database),
        dead_letter=dead_letter,
        max_retries=settings.consumer_max_retries,
        retry_backoff_seconds=settings.consumer_retry_backoff_seconds,
    )
    return KafkaActivityLogConsumer(settings, handler), dead_letter


def run_worker(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    database = Database(settings.database_url)
    database.connect()
    consumer, dead_letter = build_consumer(settings, database)

    def _shutdown(signum, _frame) -> None:
        logger.info("Received signal %s, stopping consumer", signum)
        consumer.stop()

    signal.signal(signal.SIGTERM, _shutdown)
    signal.signal(signal.SIGINT, _shutdown)

    try:
        consumer.connect()
        consumer.subscribe()
        consumer.run()
    finally:
        consumer.disconnect()
        if dead_letter is not None:
            dead_letter.disconnect()
        database.disconnect()


if __name__ == "__main__":
    run_worker()
