"""Dependency injection factory functions."""

from typing import Optional

from app.adapters.inbound.kafka.vehicle_created_consumer import VehicleCreatedConsumer
from app.adapters.outbound.idempotency.noop_idempotency_store import NoOpIdempotencyStore
from app.adapters.outbound.idempotency.redis_idempotency_store import RedisIdempotencyStore
from app.adapters.outbound.messaging.kafka_vehicle_event_publisher import (
    KafkaVehicleEventPublisher,
)
from app.adapters.outbound.persistence.unit_of_work import SqlAlchemyUnitOfWork
from app.application.ports.idempotency_store import IdempotencyStore
from app.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory
from app.application.ports.vehicle_event_publisher import VehicleEventPublisher
from app.application.use_cases.accessory_service import AccessoryService
from app.application.use_cases.garage_service import GarageService
from app.application.use_cases.handle_vehicle_created_event import HandleVehicleCreatedEvent
from app.application.use_cases.relay_outbox_events import RelayOutboxEvents
from app.application.use_cases.vehicle_service import VehicleService
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import log_event
from app.infrastructure.workers.outbox_relay_worker import OutboxRelayWorker

# Process-wide relay worker, created on first use
_outbox_relay_worker: Optional[OutboxRelayWorker] = None
_vehicle_event_publisher: Optional[VehicleEventPublisher] = None


def _logger_func(component, event, **kwargs):
    log_event(component, event, **kwargs)


def create_unit_of_work_factory() -> UnitOfWorkFactory:
    """
    Factory function to create the unit of work factory.

    Returns:
        Callable opening a SQLAlchemy unit of work (read_only keyword supported)
    """

    def _unit_of_work(read_only: bool = False) -> UnitOfWork:
        return SqlAlchemyUnitOfWork(read_only=read_only)

    return _unit_of_work


def create_vehicle_event_publisher() -> VehicleEventPublisher:
    """
    Factory function to create the vehicle event publisher.

    Returns:
        Kafka publisher bound to the vehicle created topic
    """
    return KafkaVehicleEventPublisher(
        settings.kafka_bootstrap_servers,
        settings.kafka_topic_vehicle_created,
        retries=settings.kafka_producer_retries,
    )


def get_outbox_relay_worker() -> OutboxRelayWorker:
    """
    Get the process-wide outbox relay worker, creating it if needed.

    Returns:
        OutboxRelayWorker instance (not started)
    """
    global _outbox_relay_worker, _vehicle_event_publisher
    if _outbox_relay_worker is None:
        _vehicle_event_publisher = create_vehicle_event_publisher()
        relay = RelayOutboxEvents(
            create_unit_of_work_factory(),
            _vehicle_event_publisher,
            batch_size=settings.outbox_relay_batch_size,
            send_timeout_seconds=settings.kafka_send_timeout_seconds,
            logger=_logger_func,
        )
        _outbox_relay_worker = OutboxRelayWorker(
            relay, interval_seconds=settings.outbox_relay_interval_seconds
        )
    return _outbox_relay_worker


def shutdown_outbox_relay_worker() -> None:
    """Stop the relay worker and close its publisher."""
    global _outbox_relay_worker, _vehicle_event_publisher
    if _outbox_relay_worker is not None:
        _outbox_relay_worker.stop()
        _outbox_relay_worker = None
    if _vehicle_event_publisher is not None:
        _vehicle_event_publisher.close()
        _vehicle_event_publisher = None


def trigger_outbox_relay() -> None:
    """Wake the relay worker if one is running."""
    if _outbox_relay_worker is not None:
        _outbox_relay_worker.trigger()


def create_garage_service() -> GarageService:
    """
    Factory function to create GarageService with dependencies.

    Returns:
        GarageService instance
    """
    return GarageService(create_unit_of_work_factory(), logger=_logger_func)


def create_vehicle_service() -> VehicleService:
    """
    Factory function to create VehicleService with dependencies.

    Vehicle commits wake the outbox relay so events leave without waiting for
    the next polling interval.

    Returns:
        VehicleService instance
    """
    return VehicleService(
        create_unit_of_work_factory(),
        on_vehicle_committed=trigger_outbox_relay,
        logger=_logger_func,
    )


def create_accessory_service() -> AccessoryService:
    """
    Factory function to create AccessoryService with dependencies.

    Returns:
        AccessoryService instance
    """
    return AccessoryService(create_unit_of_work_factory(), logger=_logger_func)


def create_idempotency_store() -> IdempotencyStore:
    """
    Factory function to create idempotency store.

    Returns:
        IdempotencyStore instance (Redis or NoOp)
    """
    if not settings.consumer_idempotency_enabled:
        return NoOpIdempotencyStore()

    if not settings.redis_url:
        # Deduplication disabled; the handler still runs for every delivery
        return NoOpIdempotencyStore()

    return RedisIdempotencyStore(settings.redis_url)


def create_handle_vehicle_created_event() -> HandleVehicleCreatedEvent:
    """
    Factory function to create the vehicle created event handler.

    Returns:
        HandleVehicleCreatedEvent instance
    """
    return HandleVehicleCreatedEvent(
        create_idempotency_store(),
        ttl_seconds=settings.consumer_idempotency_ttl_seconds,
        logger=_logger_func,
    )


def create_vehicle_created_consumer() -> VehicleCreatedConsumer:
    """
    Factory function to create the vehicle created Kafka consumer.

    Returns:
        VehicleCreatedConsumer instance (not started)
    """
    return VehicleCreatedConsumer(
        create_handle_vehicle_created_event(),
        bootstrap_servers=settings.kafka_bootstrap_servers,
        topic=settings.kafka_topic_vehicle_created,
        group_id=settings.kafka_consumer_group_id,
    )
