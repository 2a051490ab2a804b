"""Kafka publisher for activity log messages."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from kafka import KafkaProducer
from kafka.errors import KafkaError
from pydantic import BaseModel

from activity_log.application.dtos import ActivityLogMessage, validate_payload
from activity_log.config import Settings
from activity_log.domain.errors import PublishError

from .serialization import json_serializer, key_serializer

logger = logging.getLogger(__name__)


class KafkaActivityLogProducer:
    """Publish JSON messages to one Kafka topic.

    Outgoing messages are checked against ``schema`` before they are sent;
    pass ``schema=None`` to send arbitrary JSON objects.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        topic: str | None = None,
        schema: type[BaseModel] | None = ActivityLogMessage,
        producer_factory: Callable[..., Any] = KafkaProducer,
    ) -> None:
        self._settings = settings
        self.topic = topic or settings.kafka_topic
        self._schema = schema
        self._producer_factory = producer_factory
        self._producer: Any = None

    @property
    def connected(self) -> bool:
        return self._producer is not None

    def connect(self) -> None:
        if self.connected:
            return
        try:
            self._producer = self._producer_factory(
                bootstrap_servers=self._settings.bootstrap_servers,
                client_id=self._settings.kafka_producer_client_id,
                key_serializer=key_serializer,
                value_serializer=json_serializer,
                acks="all",
                retries=5,
            )
        except KafkaError as exc:
            logger.error("Error connecting to Kafka: %s", exc)
            raise PublishError(f"Could not connect to Kafka: {exc}") from exc
        logger.info("Kafka producer connected (topic '%s')", self.topic)

    def disconnect(self) -> None:
        if not self.connected:
            return
        producer, self._producer = self._producer, None
        try:
            producer.flush()
            producer.close(timeout=5)
        except KafkaError as exc:
            logger.warning("Error disconnecting Kafka producer: %s", exc)
        else:
            logger.info("Kafka producer disconnected")

    def is_healthy(self) -> bool:
        return bool(self._producer is not None and self._producer.bootstrap_connected())

    def send(self, message: dict[str, Any], *, key: str) -> None:
        """Send ``message`` and wait for the broker acknowledgement."""

        if self._schema is not None:
            validate_payload(self._schema, message)

        if not self.connected:
            self.connect()

        try:
            future = self._producer.send(self.topic, key=key, value=message)
            future.get(timeout=self._settings.kafka_send_timeout_seconds)
        except KafkaError as exc:
            logger.error("Error sending message to topic '%s': %s", self.topic, exc)
            raise PublishError(f"Failed to send message to Kafka: {exc}") from exc
        logger.debug("Message sent to topic '%s' with key %s", self.topic, key)


__all__ = ["KafkaActivityLogProducer"]
