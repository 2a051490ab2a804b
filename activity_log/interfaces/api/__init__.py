"""FastAPI interface for the producer and consumer services."""
