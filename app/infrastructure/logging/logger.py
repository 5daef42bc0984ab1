"""Structured logger for observability."""

import logging
from typing import Any, Optional

# Configure project logger with key=value structured format
_logger = logging.getLogger("garage_management")
_logger.setLevel(logging.INFO)

# Create console handler if not exists
if not _logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def log_event(
    component: str,
    event: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """
    Log a structured event.

    Args:
        component: Component name (e.g., 'garage_service', 'outbox_relay', 'kafka_consumer')
        event: Event name (e.g., 'garage_created')
        level: Log level (default: INFO)
        **kwargs: Additional structured fields to log
    """
    fields = {
        "component": component,
        "event": event,
    }
    fields.update(kwargs)

    # Format as key=value pairs for readability
    log_parts = [f"{k}={v!r}" for k, v in fields.items()]
    log_message = " | ".join(log_parts)

    _logger.log(level, log_message)


def log_vehicle_event_published(
    vehicle_id: int,
    event_id: str,
    topic: str,
    partition: Optional[int] = None,
    offset: Optional[int] = None,
    **kwargs: Any,
) -> None:
    """
    Log broker acknowledgement of a vehicle event.

    Args:
        vehicle_id: Vehicle identifier (message key)
        event_id: Event identifier
        topic: Kafka topic
        partition: Partition the event landed on
        offset: Offset of the event in the partition
        **kwargs: Additional fields
    """
    log_event(
        component="kafka_producer",
        event="vehicle_event_published",
        vehicle_id=vehicle_id,
        event_id=event_id,
        topic=topic,
        partition=partition,
        offset=offset,
        **kwargs,
    )


def log_vehicle_event_failed(
    vehicle_id: int,
    event_id: str,
    error: str,
    **kwargs: Any,
) -> None:
    """
    Log a failed vehicle event delivery.

    Args:
        vehicle_id: Vehicle identifier (message key)
        event_id: Event identifier
        error: Error description
        **kwargs: Additional fields
    """
    log_event(
        component="kafka_producer",
        event="vehicle_event_failed",
        level=logging.ERROR,
        vehicle_id=vehicle_id,
        event_id=event_id,
        error=error,
        **kwargs,
    )


def log_vehicle_event_received(
    partition: int,
    offset: int,
    vehicle_id: Optional[int] = None,
    **kwargs: Any,
) -> None:
    """
    Log a vehicle event received by the consumer.

    Args:
        partition: Partition the event was read from
        offset: Offset of the event
        vehicle_id: Vehicle identifier, when the payload could be decoded
        **kwargs: Additional fields (brand, model, garage_name...)
    """
    log_event(
        component="kafka_consumer",
        event="vehicle_event_received",
        partition=partition,
        offset=offset,
        vehicle_id=vehicle_id,
        **kwargs,
    )


# Export logger instance for direct use
logger = _logger
