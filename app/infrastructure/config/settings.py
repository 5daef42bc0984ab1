"""
Application settings.

Vehicle events are always written to ``outbox_events`` with the vehicle. They
reach Kafka only when ``KAFKA_ENABLED=true`` starts the outbox relay; until
then they stay pending and the application logs ``outbox_relay_disabled`` at
startup.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    debug_mode: bool = False
    database_url: str = "sqlite:///./garage_management.db"
    database_auto_create: bool = True  # create tables at startup (alembic in production)
    kafka_enabled: bool = False  # off: events queue in the outbox, nothing is published
    kafka_bootstrap_servers: str = "localhost:9092"
    kafka_topic_vehicle_created: str = "vehicle-created"
    kafka_consumer_group_id: str = "garage-management-group"
    kafka_consumer_enabled: bool = False  # run the consumer inside the API process
    kafka_producer_retries: int = 3
    kafka_send_timeout_seconds: float = 10.0
    outbox_relay_interval_seconds: float = 5.0
    outbox_relay_batch_size: int = 100
    redis_url: str = "redis://localhost:6379/0"
    consumer_idempotency_enabled: bool = True
    consumer_idempotency_ttl_seconds: int = 604800  # 7 days

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
    )


settings = Settings()
