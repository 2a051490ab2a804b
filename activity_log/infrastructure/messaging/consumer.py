"""Kafka consumer loop feeding the consume pipeline."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from kafka import KafkaConsumer
from kafka.errors import KafkaError

from activity_log.config import Settings

from .handler import ActivityLogMessageHandler

logger = logging.getLogger(__name__)


class KafkaActivityLogConsumer:
    """Consume activity log messages one at a time.

    Each record is handled to completion before its offset is committed, so
    records sharing a key (the user ID) are stored in the order they were
    published.
    """

    def __init__(
        self,
        settings: Settings,
        handler: ActivityLogMessageHandler,
        *,
        consumer_factory: Callable[..., Any] = KafkaConsumer,
        poll_timeout_ms: int = 1000,
    ) -> None:
        self._settings = settings
        self._handler = handler
        self._consumer_factory = consumer_factory
        self._poll_timeout_ms = poll_timeout_ms
        self._consumer: Any = None
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self.topic = settings.kafka_topic

    @property
    def connected(self) -> bool:
        return self._consumer is not None

    def connect(self) -> None:
        if self.connected:
            return
        try:
            self._consumer = self._consumer_factory(
                bootstrap_servers=self._settings.bootstrap_servers,
                client_id=self._settings.kafka_consumer_client_id,
                group_id=self._settings.kafka_group_id,
                auto_offset_reset="earliest",
                enable_auto_commit=False,
            )
        except KafkaError as exc:
            logger.error("Error connecting to Kafka: %s", exc)
            raise
        logger.info("Kafka consumer connected")

    def subscribe(self) -> None:
        if not self.connected:
            self.connect()
        self._consumer.subscribe([self.topic])
        logger.info("Subscribed to topic: %s", self.topic)

    def poll_once(self) -> int:
        """Handle at most one pending record and return how many were handled."""

        batches = self._consumer.poll(timeout_ms=self._poll_timeout_ms, max_records=1)
        handled = 0
        for records in batches.values():
            for record in records:
                self._handle_record(record)
                handled += 1
        return handled

    def run(self) -> None:
        """Poll until :meth:`stop` is called."""

        self._stop_event.clear()
        logger.info("Kafka consumer loop started")
        while not self._stop_event.is_set():
            try:
                self.poll_once()
            except KafkaError as exc:
                logger.error("Kafka error while polling: %s", exc)
                self._stop_event.wait(1.0)
        logger.info("Kafka consumer loop stopped")

    def start(self) -> threading.Thread:
        """Subscribe and run the loop on a daemon thread."""

        self.subscribe()
        self._thread = threading.Thread(
            target=self.run, name="activity-log-consumer", daemon=True
        )
        self._thread.start()
        return self._thread

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=(self._poll_timeout_ms / 1000) + 5)
            self._thread = None

    def disconnect(self) -> None:
        if not self.connected:
            return
        consumer, self._consumer = self._consumer, None
        try:
            consumer.close()
        except KafkaError as exc:
            logger.warning("Error disconnecting Kafka consumer: %s", exc)
        else:
            logger.info("Kafka consumer disconnected")

    def _handle_record(self, record: Any) -> None:
        if record.value is None:
            logger.debug("Skipping empty record at offset %s", record.offset)
        else:
            try:
                outcome = self._handler.handle(record.value)
                logger.debug(
                    "Record %s/%s@%s handled: %s",
                    record.topic,
                    record.partition,
                    record.offset,
                    outcome.value,
                )
            except Exception:
                logger.exception(
                    "Unexpected error processing record %s/%s@%s",
                    record.topic,
                    record.partition,
                    record.offset,
                )
        try:
            self._consumer.commit()
        except KafkaError as exc:
            # The record will be redelivered; duplicates are skipped by the handler.
            logger.warning("Could not commit offset %s: %s", record.offset, exc)


__all__ = ["KafkaActivityLogConsumer"]
