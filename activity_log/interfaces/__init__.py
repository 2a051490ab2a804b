"""Entry points: HTTP API and the consumer worker."""
