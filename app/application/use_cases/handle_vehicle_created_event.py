"""Vehicle created event handling use case."""

from typing import Any, Awaitable, Callable, Optional

from app.application.dtos.vehicle_created_event import VehicleCreatedEvent
from app.application.ports.idempotency_store import IdempotencyStore

VehicleCreatedHandler = Callable[[VehicleCreatedEvent], Awaitable[None]]


class HandleVehicleCreatedEvent:
    """Apply downstream processing to a vehicle creation, once per event_id."""

    def __init__(
        self,
        idempotency_store: IdempotencyStore,
        ttl_seconds: int,
        on_vehicle_created: Optional[VehicleCreatedHandler] = None,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize handler.

        Args:
            idempotency_store: Store of processed event identifiers
            ttl_seconds: How long processed identifiers are remembered
            on_vehicle_created: Side effect to run for each new event (logs only by default)
            logger: Optional logger function (component, event, **kwargs)
        """
        self._idempotency_store = idempotency_store
        self._ttl_seconds = ttl_seconds
        self._on_vehicle_created = on_vehicle_created
        self._logger = logger

    def _log(self, event: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger("vehicle_created_handler", event, **kwargs)

    async def execute(self, event: VehicleCreatedEvent) -> bool:
        """
        Process an event unless it was already processed.

        The event is marked processed only after the side effect succeeded, so a
        failure leads to a retry on redelivery.

        Args:
            event: Received event

        Returns:
            True if processed now, False if skipped as a duplicate
        """
        if await self._idempotency_store.is_processed(event.event_id):
            self._log(
                "duplicate_event_skipped", event_id=event.event_id, vehicle_id=event.vehicle_id
            )
            return False

        self._log(
            "vehicle_created_processing", event_id=event.event_id, vehicle_id=event.vehicle_id
        )
        if self._on_vehicle_created:
            await self._on_vehicle_created(event)

        await self._idempotency_store.mark_processed(event.event_id, self._ttl_seconds)
        self._log(
            "vehicle_created_processed", event_id=event.event_id, vehicle_id=event.vehicle_id
        )
        return True

    async def close(self) -> None:
        """Release the idempotency store."""
        await self._idempotency_store.close()
