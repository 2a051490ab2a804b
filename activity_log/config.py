"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to store activity logs",
        min_length=1,
    )
    kafka_bootstrap_servers: str = Field(
        default="127.0.0.1:9092",
        description="Comma separated list of Kafka brokers",
        min_length=1,
    )
    kafka_topic: str = Field(
        default="user-activity-logs",
        description="Topic carrying activity log messages",
        min_length=1,
    )
    kafka_producer_client_id: str = Field(default="producer-service")
    kafka_consumer_client_id: str = Field(default="consumer-service")
    kafka_group_id: str = Field(default="consumer-service-group", min_length=1)
    kafka_dead_letter_topic: str | None = Field(
        default=None,
        description="Topic receiving messages that could not be persisted after retries",
    )
    kafka_send_timeout_seconds: float = Field(
        default=10.0,
        description="Seconds to wait for the broker to acknowledge a published message",
        gt=0,
    )
    consumer_max_retries: int = Field(
        default=3,
        description="Persistence attempts for a consumed message before dead-lettering it",
        ge=1,
    )
    consumer_retry_backoff_seconds: float = Field(default=0.5, ge=0)
    run_consumer_in_api: bool = Field(
        default=True,
        description="Start the Kafka consumer loop inside the query API process",
    )
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def _validate_dead_letter_topic(self) -> "Settings":
        if self.kafka_dead_letter_topic and self.kafka_dead_letter_topic == self.kafka_topic:
            raise ValueError(
                "KAFKA_DEAD_LETTER_TOPIC must be different from KAFKA_TOPIC"
            )
        return self

    @property
    def bootstrap_servers(self) -> list[str]:
        """Return the configured brokers as a list."""

        return [
            server.strip()
            for server in self.kafka_bootstrap_servers.split(",")
            if server.strip()
        ]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
