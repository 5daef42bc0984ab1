"""Unit tests for the vehicle created Kafka consumer."""

import asyncio
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from kafka import TopicPartition

from app.adapters.inbound.kafka.vehicle_created_consumer import VehicleCreatedConsumer

PARTITION = TopicPartition("vehicle-created", 0)


def make_record(offset: int, vehicle_id: int = 5) -> SimpleNamespace:
    payload = {
        "vehicleId": vehicle_id,
        "brand": "Renault",
        "model": "Zoe",
        "yearOfManufacture": 2023,
        "fuelType": "ELECTRIQUE",
        "garageId": 1,
        "garageName": "G1",
        "createdAt": "2024-06-01T12:00:00Z",
        "eventId": f"event-{vehicle_id}",
    }
    return SimpleNamespace(
        partition=0, offset=offset, value=json.dumps(payload).encode("utf-8")
    )


@pytest.fixture
def handler():
    handler = MagicMock()
    handler.execute = AsyncMock(return_value=True)
    handler.close = AsyncMock()
    return handler


@pytest.fixture
def consumer_factory():
    return MagicMock()


@pytest.fixture
def vehicle_consumer(handler, consumer_factory):
    return VehicleCreatedConsumer(
        handler,
        bootstrap_servers="broker-1:9092,broker-2:9092",
        topic="vehicle-created",
        group_id="garage-management",
        poll_timeout_ms=250,
        retry_backoff_seconds=0,
        consumer_factory=consumer_factory,
    )


@pytest.fixture
def loop():
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


def test_create_consumer_commits_manually_from_earliest(vehicle_consumer, consumer_factory):
    vehicle_consumer.create_consumer()

    consumer_factory.assert_called_once_with(
        "vehicle-created",
        bootstrap_servers=["broker-1:9092", "broker-2:9092"],
        group_id="garage-management",
        auto_offset_reset="earliest",
        enable_auto_commit=False,
    )


def test_poll_once_processes_and_commits(vehicle_consumer, handler, loop):
    kafka_consumer = MagicMock()
    kafka_consumer.poll.return_value = {PARTITION: [make_record(0, 5), make_record(1, 6)]}

    failed = vehicle_consumer.poll_once(kafka_consumer, loop)

    assert failed is False
    kafka_consumer.poll.assert_called_once_with(timeout_ms=250)
    events = [call.args[0] for call in handler.execute.await_args_list]
    assert [event.vehicle_id for event in events] == [5, 6]
    assert events[0].event_id == "event-5"
    kafka_consumer.commit.assert_called_once()
    kafka_consumer.seek.assert_not_called()


def test_poll_once_without_records_does_not_commit(vehicle_consumer, loop):
    kafka_consumer = MagicMock()
    kafka_consumer.poll.return_value = {}

    assert vehicle_consumer.poll_once(kafka_consumer, loop) is False
    kafka_consumer.commit.assert_not_called()


def test_malformed_record_is_skipped(vehicle_consumer, handler, loop):
    kafka_consumer = MagicMock()
    poison = SimpleNamespace(partition=0, offset=0, value=b'{"vehicleId": "abc"}')
    kafka_consumer.poll.return_value = {PARTITION: [poison, make_record(1)]}

    failed = vehicle_consumer.poll_once(kafka_consumer, loop)

    assert failed is False
    handler.execute.assert_awaited_once()
    kafka_consumer.commit.assert_called_once()


def test_handler_failure_rewinds_partition(vehicle_consumer, handler, loop):
    kafka_consumer = MagicMock()
    kafka_consumer.poll.return_value = {
        PARTITION: [make_record(0, 5), make_record(1, 6), make_record(2, 7)]
    }
    handler.execute.side_effect = [True, RuntimeError("downstream unavailable"), True]

    failed = vehicle_consumer.poll_once(kafka_consumer, loop)

    assert failed is True
    assert handler.execute.await_count == 2
    kafka_consumer.seek.assert_called_once_with(PARTITION, 1)
    kafka_consumer.commit.assert_called_once()


def test_run_closes_resources_when_stopped(vehicle_consumer, consumer_factory, handler):
    kafka_consumer = consumer_factory.return_value

    def poll(timeout_ms):
        vehicle_consumer.stop()
        return {}

    kafka_consumer.poll.side_effect = poll

    vehicle_consumer.run()

    kafka_consumer.close.assert_called_once()
    handler.close.assert_awaited_once()
