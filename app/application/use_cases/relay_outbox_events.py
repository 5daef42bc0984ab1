"""Outbox relay use case."""

from typing import Any, Callable, Optional

from app.application.dtos.vehicle_created_event import VehicleCreatedEvent
from app.application.ports.clock import Clock, utc_now
from app.application.ports.unit_of_work import UnitOfWorkFactory
from app.application.ports.vehicle_event_publisher import VehicleEventPublisher
from app.domain.exceptions import EventPublicationError


class RelayOutboxEvents:
    """Drain pending outbox messages to the message broker.

    Messages are published in insertion order and marked published only once
    the broker acknowledged them. The first failure stops the batch so later
    events of the same vehicle are never sent ahead of earlier ones; the
    failed message stays pending for the next run.
    """

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        publisher: VehicleEventPublisher,
        batch_size: int = 100,
        send_timeout_seconds: float = 10.0,
        clock: Clock = utc_now,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize outbox relay.

        Args:
            unit_of_work_factory: Factory opening a transaction
            publisher: Broker publisher
            batch_size: Maximum messages handled per run
            send_timeout_seconds: Time to wait for each broker acknowledgement
            clock: Clock for published_at
            logger: Optional logger function (component, event, **kwargs)
        """
        self._unit_of_work_factory = unit_of_work_factory
        self._publisher = publisher
        self._batch_size = batch_size
        self._send_timeout_seconds = send_timeout_seconds
        self._clock = clock
        self._logger = logger

    def _log(self, event: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger("outbox_relay", event, **kwargs)

    async def execute(self) -> int:
        """
        Publish one batch of pending messages.

        Pending rows are read in a transaction that ends before the first
        broker call; each outcome is then recorded in its own short transaction,
        so no database lock is held while waiting for acknowledgements.

        Returns:
            Number of messages published
        """
        async with self._unit_of_work_factory() as uow:
            pending = await uow.outbox.fetch_pending(self._batch_size)

        published = 0
        for message in pending:
            event = VehicleCreatedEvent.model_validate(message.payload)
            try:
                handle = self._publisher.publish(event)
                handle.get(timeout=self._send_timeout_seconds)
            except EventPublicationError as e:
                async with self._unit_of_work_factory() as uow:
                    await uow.outbox.mark_failed(message.id, str(e))
                    await uow.commit()
                self._log(
                    "outbox_publish_failed",
                    outbox_id=message.id,
                    event_id=message.event_id,
                    attempts=message.attempts + 1,
                    error=str(e),
                )
                break

            async with self._unit_of_work_factory() as uow:
                await uow.outbox.mark_published(message.id, self._clock())
                await uow.commit()
            published += 1

        if published:
            self._log("outbox_batch_published", published=published, pending=len(pending))
        return published
