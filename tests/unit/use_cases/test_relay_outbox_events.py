"""Unit tests for the outbox relay use case."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.orm import sessionmaker

from app.adapters.outbound.persistence.models import Base, GarageModel
from app.adapters.outbound.persistence.unit_of_work import SqlAlchemyUnitOfWork
from app.application.dtos.outbox import OutboxMessage
from app.application.dtos.vehicle_created_event import VehicleCreatedEvent
from app.application.use_cases.relay_outbox_events import RelayOutboxEvents
from app.domain.exceptions import EventPublicationError
from app.domain.value_objects.fuel_type import FuelType
from app.infrastructure.db import create_db_engine


def make_event(vehicle_id: int) -> VehicleCreatedEvent:
    return VehicleCreatedEvent(
        vehicle_id=vehicle_id,
        brand="Renault",
        model="Zoe",
        year_of_manufacture=2023,
        fuel_type=FuelType.ELECTRIQUE,
        garage_id=1,
        garage_name="G1",
        created_at=datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc),
        event_id=f"event-{vehicle_id}",
    )


async def enqueue(uow_factory, *vehicle_ids):
    async with uow_factory() as uow:
        for vehicle_id in vehicle_ids:
            event = make_event(vehicle_id)
            await uow.outbox.add(
                OutboxMessage(
                    event_id=event.event_id,
                    event_type="VehicleCreatedEvent",
                    aggregate_id=str(vehicle_id),
                    payload=event.model_dump(mode="json", by_alias=True),
                )
            )
        await uow.commit()


async def pending_ids(uow_factory):
    async with uow_factory(read_only=True) as uow:
        return [message.event_id for message in await uow.outbox.fetch_pending(100)]


@pytest.fixture
def publisher():
    """Publisher whose deliveries are acknowledged."""
    publisher = MagicMock()
    publisher.publish.return_value.get.return_value = MagicMock(partition=0, offset=1)
    return publisher


@pytest.mark.asyncio
async def test_publishes_pending_events_in_order(uow_factory, publisher, clock):
    await enqueue(uow_factory, 1, 2, 3)
    relay = RelayOutboxEvents(uow_factory, publisher, send_timeout_seconds=5.0, clock=clock)

    published = await relay.execute()

    assert published == 3
    sent = [call.args[0] for call in publisher.publish.call_args_list]
    assert [event.vehicle_id for event in sent] == [1, 2, 3]
    assert sent[0] == make_event(1)
    publisher.publish.return_value.get.assert_called_with(timeout=5.0)
    assert await pending_ids(uow_factory) == []


@pytest.mark.asyncio
async def test_nothing_to_publish(uow_factory, publisher):
    relay = RelayOutboxEvents(uow_factory, publisher)

    assert await relay.execute() == 0
    publisher.publish.assert_not_called()


@pytest.mark.asyncio
async def test_failure_stops_batch_and_keeps_event_pending(uow_factory, clock):
    await enqueue(uow_factory, 1, 2, 3)
    publisher = MagicMock()
    acknowledged = MagicMock()
    failed = MagicMock()
    failed.get.side_effect = EventPublicationError("Kafka delivery failed: timeout")
    publisher.publish.side_effect = [acknowledged, failed]
    logger = MagicMock()
    relay = RelayOutboxEvents(uow_factory, publisher, clock=clock, logger=logger)

    published = await relay.execute()

    assert published == 1
    assert publisher.publish.call_count == 2
    assert await pending_ids(uow_factory) == ["event-2", "event-3"]
    async with uow_factory(read_only=True) as uow:
        failed_message = (await uow.outbox.fetch_pending(1))[0]
    assert failed_message.attempts == 1
    assert "timeout" in failed_message.last_error
    logger.assert_any_call(
        "outbox_relay",
        "outbox_publish_failed",
        outbox_id=failed_message.id,
        event_id="event-2",
        attempts=1,
        error="Kafka delivery failed: timeout",
    )


@pytest.mark.asyncio
async def test_batch_size_limits_one_run(uow_factory, publisher):
    await enqueue(uow_factory, 1, 2, 3)
    relay = RelayOutboxEvents(uow_factory, publisher, batch_size=2)

    assert await relay.execute() == 2
    assert await pending_ids(uow_factory) == ["event-3"]
    assert await relay.execute() == 1


@pytest.fixture
def file_session_factory(tmp_path):
    """Session factory over a SQLite file, where writers contend for one lock."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'relay.db'}")
    Base.metadata.create_all(engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.mark.asyncio
async def test_waiting_for_broker_does_not_block_other_writers(file_session_factory, clock):
    def uow_factory(read_only: bool = False):
        return SqlAlchemyUnitOfWork(file_session_factory, clock=clock, read_only=read_only)

    await enqueue(uow_factory, 1, 2, 3)
    concurrent_writes = []

    def acknowledge_after_concurrent_write(timeout=None):
        # Another request commits while the relay waits for the broker
        session = file_session_factory()
        try:
            session.add(
                GarageModel(
                    name=f"Garage {len(concurrent_writes)}",
                    address="10 Rue Paris 75001",
                    telephone="0140000000",
                    email=f"garage{len(concurrent_writes)}@garage.fr",
                )
            )
            session.commit()
        finally:
            session.close()
        concurrent_writes.append(timeout)
        return MagicMock(partition=0, offset=len(concurrent_writes))

    publisher = MagicMock()
    publisher.publish.return_value.get.side_effect = acknowledge_after_concurrent_write
    relay = RelayOutboxEvents(uow_factory, publisher, send_timeout_seconds=5.0, clock=clock)

    published = await relay.execute()

    assert published == 3
    assert len(concurrent_writes) == 3
    assert await pending_ids(uow_factory) == []
