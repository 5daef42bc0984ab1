"""Kafka consumer for vehicle created events."""

import asyncio
import logging
import threading
from typing import Any, Callable, Optional

from kafka import KafkaConsumer
from pydantic import ValidationError

from app.application.dtos.vehicle_created_event import VehicleCreatedEvent
from app.application.use_cases.handle_vehicle_created_event import HandleVehicleCreatedEvent
from app.infrastructure.logging.logger import log_event, log_vehicle_event_received, logger


class VehicleCreatedConsumer:
    """Reads vehicle created events and hands them to the handler use case.

    Offsets are committed manually after processing. When a message fails,
    the partition is rewound to it so it is delivered again after a back-off
    (at-least-once; the handler deduplicates on event_id).
    """

    def __init__(
        self,
        handler: HandleVehicleCreatedEvent,
        bootstrap_servers: str,
        topic: str,
        group_id: str,
        poll_timeout_ms: int = 1000,
        retry_backoff_seconds: float = 5.0,
        consumer_factory: Callable[..., Any] = KafkaConsumer,
    ) -> None:
        """
        Initialize consumer.

        Args:
            handler: Use case applied to each event
            bootstrap_servers: Comma separated broker addresses
            topic: Topic to subscribe to
            group_id: Consumer group
            poll_timeout_ms: Poll timeout in milliseconds
            retry_backoff_seconds: Pause after a failed message before polling again
            consumer_factory: KafkaConsumer class or a compatible factory
        """
        self._handler = handler
        self._bootstrap_servers = bootstrap_servers
        self._topic = topic
        self._group_id = group_id
        self._poll_timeout_ms = poll_timeout_ms
        self._retry_backoff_seconds = retry_backoff_seconds
        self._consumer_factory = consumer_factory
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def create_consumer(self) -> Any:
        """Create a Kafka consumer starting at the earliest offset for a new group."""
        return self._consumer_factory(
            self._topic,
            bootstrap_servers=self._bootstrap_servers.split(","),
            group_id=self._group_id,
            auto_offset_reset="earliest",
            enable_auto_commit=False,
        )

    async def process(self, message: Any) -> None:
        """
        Decode one Kafka record and run the handler.

        Records that are not valid events are logged and skipped.

        Args:
            message: Kafka ConsumerRecord with a JSON value
        """
        try:
            event = VehicleCreatedEvent.model_validate_json(message.value)
        except ValidationError as e:
            log_event(
                component="kafka_consumer",
                event="vehicle_event_rejected",
                level=logging.ERROR,
                partition=message.partition,
                offset=message.offset,
                error=str(e),
            )
            return

        log_vehicle_event_received(
            message.partition,
            message.offset,
            vehicle_id=event.vehicle_id,
            brand=event.brand,
            model=event.model,
            garage_name=event.garage_name,
        )
        await self._handler.execute(event)

    def poll_once(self, consumer: Any, loop: asyncio.AbstractEventLoop) -> bool:
        """
        Process one poll batch and commit what succeeded.

        Args:
            consumer: Kafka consumer
            loop: Event loop running the handler

        Returns:
            True if a message failed and was rewound
        """
        records = consumer.poll(timeout_ms=self._poll_timeout_ms)
        failed = False
        for partition, messages in records.items():
            for message in messages:
                try:
                    loop.run_until_complete(self.process(message))
                except Exception as e:
                    logger.error(
                        f"Error processing vehicle event at {partition.topic}:"
                        f"{partition.partition}@{message.offset}: {str(e)}"
                    )
                    consumer.seek(partition, message.offset)
                    failed = True
                    break

        if records:
            consumer.commit()
        return failed

    def run(self) -> None:
        """Consume until stop() is called."""
        loop = asyncio.new_event_loop()
        consumer = self.create_consumer()
        log_event(component="kafka_consumer", event="consumer_started", topic=self._topic)
        try:
            while not self._stopped.is_set():
                if self.poll_once(consumer, loop):
                    self._stopped.wait(self._retry_backoff_seconds)
        finally:
            consumer.close()
            loop.run_until_complete(self._handler.close())
            loop.close()
            log_event(component="kafka_consumer", event="consumer_stopped", topic=self._topic)

    def start(self) -> None:
        """Run the consumer on a daemon thread."""
        self._stopped.clear()
        self._thread = threading.Thread(
            target=self.run, name="vehicle-created-consumer", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float = 10.0) -> None:
        """Ask the consumer loop to finish and wait for it."""
        self._stopped.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
