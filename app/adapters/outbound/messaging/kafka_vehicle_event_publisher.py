"""Kafka vehicle event publisher adapter."""

import json
from typing import Any, Optional

from kafka import KafkaProducer
from kafka.errors import KafkaError

from app.application.dtos.vehicle_created_event import VehicleCreatedEvent
from app.application.ports.vehicle_event_publisher import VehicleEventPublisher
from app.domain.exceptions import EventPublicationError
from app.infrastructure.logging.logger import (
    log_event,
    log_vehicle_event_failed,
    log_vehicle_event_published,
)


class KafkaPublishHandle:
    """Wraps a kafka-python future, turning broker errors into EventPublicationError."""

    def __init__(self, future: Any) -> None:
        self._future = future

    def get(self, timeout: Optional[float] = None) -> Any:
        """
        Wait for the broker acknowledgement.

        Args:
            timeout: Seconds to wait

        Returns:
            Record metadata (topic, partition, offset)

        Raises:
            EventPublicationError: If delivery failed or timed out
        """
        try:
            return self._future.get(timeout=timeout)
        except KafkaError as e:
            raise EventPublicationError(f"Kafka delivery failed: {e}") from e


class KafkaVehicleEventPublisher(VehicleEventPublisher):
    """Publishes vehicle events as JSON, keyed by vehicle ID.

    The producer waits for all in-sync replicas (acks=all), retries transient
    failures and runs in idempotent mode so retries never duplicate records.
    """

    def __init__(
        self,
        bootstrap_servers: str,
        topic: str,
        retries: int = 3,
    ) -> None:
        """
        Initialize Kafka publisher.

        Args:
            bootstrap_servers: Comma separated broker addresses
            topic: Topic receiving vehicle created events
            retries: Producer retries, at least 3
        """
        self._bootstrap_servers = bootstrap_servers
        self._topic = topic
        self._retries = max(retries, 3)
        self._producer: Optional[KafkaProducer] = None

    def _get_producer(self) -> KafkaProducer:
        """
        Get or create the Kafka producer.

        Returns:
            KafkaProducer instance
        """
        if self._producer is None:
            self._producer = KafkaProducer(
                bootstrap_servers=self._bootstrap_servers.split(","),
                acks="all",
                retries=self._retries,
                enable_idempotence=True,
                key_serializer=lambda key: str(key).encode("utf-8"),
                value_serializer=lambda value: json.dumps(value).encode("utf-8"),
            )
        return self._producer

    def publish(self, event: VehicleCreatedEvent) -> KafkaPublishHandle:
        """
        Enqueue an event on the topic.

        Args:
            event: Event to publish

        Returns:
            Handle on the pending delivery

        Raises:
            EventPublicationError: If the producer refuses the event
        """
        log_event(
            component="kafka_producer",
            event="vehicle_event_publishing",
            vehicle_id=event.vehicle_id,
            event_id=event.event_id,
        )
        try:
            future = self._get_producer().send(
                self._topic,
                key=str(event.vehicle_id),
                value=event.model_dump(mode="json", by_alias=True),
            )
        except KafkaError as e:
            log_vehicle_event_failed(event.vehicle_id, event.event_id, str(e))
            raise EventPublicationError(f"Kafka send failed: {e}") from e

        future.add_callback(self._on_send_success, event)
        future.add_errback(self._on_send_error, event)
        return KafkaPublishHandle(future)

    def _on_send_success(self, event: VehicleCreatedEvent, record_metadata: Any) -> None:
        log_vehicle_event_published(
            event.vehicle_id,
            event.event_id,
            topic=record_metadata.topic,
            partition=record_metadata.partition,
            offset=record_metadata.offset,
        )

    def _on_send_error(self, event: VehicleCreatedEvent, exception: Exception) -> None:
        log_vehicle_event_failed(event.vehicle_id, event.event_id, str(exception))

    def close(self) -> None:
        """Flush pending events and close the producer."""
        if self._producer is not None:
            self._producer.flush()
            self._producer.close()
            self._producer = None
