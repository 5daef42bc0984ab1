"""Unit tests for the Kafka vehicle event publisher."""

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from kafka.errors import KafkaError, KafkaTimeoutError

from app.adapters.outbound.messaging.kafka_vehicle_event_publisher import (
    KafkaVehicleEventPublisher,
)
from app.application.dtos.vehicle_created_event import VehicleCreatedEvent
from app.domain.exceptions import EventPublicationError
from app.domain.value_objects.fuel_type import FuelType


@pytest.fixture
def event():
    return VehicleCreatedEvent(
        vehicle_id=42,
        brand="Peugeot",
        model="208",
        year_of_manufacture=2021,
        fuel_type=FuelType.DIESEL,
        garage_id=3,
        garage_name="Garage Lyon",
        created_at=datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc),
        event_id="event-42",
    )


@pytest.fixture
def mock_producer_class():
    with patch(
        "app.adapters.outbound.messaging.kafka_vehicle_event_publisher.KafkaProducer"
    ) as mock_producer_class:
        yield mock_producer_class


@pytest.fixture
def publisher(mock_producer_class):
    return KafkaVehicleEventPublisher("localhost:9092", "vehicle-created", retries=1)


def test_producer_is_durable_and_idempotent(publisher, mock_producer_class, event):
    publisher.publish(event)

    kwargs = mock_producer_class.call_args.kwargs
    assert kwargs["bootstrap_servers"] == ["localhost:9092"]
    assert kwargs["acks"] == "all"
    assert kwargs["retries"] == 3
    assert kwargs["enable_idempotence"] is True
    assert kwargs["key_serializer"](42) == b"42"
    assert json.loads(kwargs["value_serializer"]({"brand": "Peugeot"})) == {"brand": "Peugeot"}


def test_publish_sends_json_keyed_by_vehicle(publisher, mock_producer_class, event):
    producer = mock_producer_class.return_value

    publisher.publish(event)

    producer.send.assert_called_once()
    args, kwargs = producer.send.call_args
    assert args == ("vehicle-created",)
    assert kwargs["key"] == "42"
    assert kwargs["value"]["vehicleId"] == 42
    assert kwargs["value"]["fuelType"] == "DIESEL"
    assert kwargs["value"]["eventId"] == "event-42"
    future = producer.send.return_value
    future.add_callback.assert_called_once()
    future.add_errback.assert_called_once()


def test_producer_is_created_once(publisher, mock_producer_class, event):
    publisher.publish(event)
    publisher.publish(event)

    assert mock_producer_class.call_count == 1


def test_handle_returns_metadata(publisher, mock_producer_class, event):
    metadata = MagicMock(topic="vehicle-created", partition=0, offset=7)
    mock_producer_class.return_value.send.return_value.get.return_value = metadata

    handle = publisher.publish(event)

    assert handle.get(timeout=2.0) is metadata
    mock_producer_class.return_value.send.return_value.get.assert_called_once_with(timeout=2.0)


def test_delivery_failure_raises_publication_error(publisher, mock_producer_class, event):
    future = mock_producer_class.return_value.send.return_value
    future.get.side_effect = KafkaTimeoutError("no ack")

    handle = publisher.publish(event)

    with pytest.raises(EventPublicationError):
        handle.get(timeout=1.0)


def test_send_failure_raises_publication_error(publisher, mock_producer_class, event):
    mock_producer_class.return_value.send.side_effect = KafkaError("buffer full")

    with pytest.raises(EventPublicationError):
        publisher.publish(event)


def test_close_flushes_producer(publisher, mock_producer_class, event):
    publisher.publish(event)
    producer = mock_producer_class.return_value

    publisher.close()

    producer.flush.assert_called_once()
    producer.close.assert_called_once()


def test_close_without_producer(publisher, mock_producer_class):
    publisher.close()

    mock_producer_class.assert_not_called()
