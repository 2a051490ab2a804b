"""Kafka adapters for the activity log channel."""

from .consumer import KafkaActivityLogConsumer
from .handler import ActivityLogMessageHandler, MessageOutcome
from .producer import KafkaActivityLogProducer
from .serialization import json_serializer, key_serializer

__all__ = [
    "ActivityLogMessageHandler",
    "KafkaActivityLogConsumer",
    "KafkaActivityLogProducer",
    "MessageOutcome",
    "json_serializer",
    "key_serializer",
]
