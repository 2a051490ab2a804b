"""User activity log pipeline.

Activity events are published by the producer service, travel through Kafka
and are persisted and queried by the consumer service.
"""
