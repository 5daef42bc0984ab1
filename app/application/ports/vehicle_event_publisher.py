"""Vehicle event publisher port."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol

from app.application.dtos.vehicle_created_event import VehicleCreatedEvent


class PublishHandle(Protocol):
    """Future-like handle on an enqueued event."""

    def get(self, timeout: Optional[float] = None) -> Any:
        """Block until the broker acknowledged the event.

        Raises:
            EventPublicationError: If delivery failed or timed out
        """
        ...


class VehicleEventPublisher(ABC):
    """Port interface for publishing vehicle events to the message broker."""

    @abstractmethod
    def publish(self, event: VehicleCreatedEvent) -> PublishHandle:
        """
        Enqueue an event keyed by its vehicle identifier.

        Returns immediately; delivery happens in the background.

        Args:
            event: Event to publish

        Returns:
            Handle to wait for the broker acknowledgement

        Raises:
            EventPublicationError: If the event cannot be enqueued
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Flush pending events and release broker connections."""
        pass
