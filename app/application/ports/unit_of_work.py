"""Unit of work port."""

from abc import ABC, abstractmethod
from typing import Callable

from app.application.ports.accessory_repository import AccessoryRepository
from app.application.ports.garage_repository import GarageRepository
from app.application.ports.outbox_repository import OutboxRepository
from app.application.ports.vehicle_repository import VehicleRepository


class UnitOfWork(ABC):
    """Transaction boundary giving access to the repositories.

    Used as an async context manager. Leaving the block without commit()
    rolls back; leaving it on an exception always rolls back.
    """

    garages: GarageRepository
    vehicles: VehicleRepository
    accessories: AccessoryRepository
    outbox: OutboxRepository

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork":
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc, tb) -> None:
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Commit the transaction."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Roll back the transaction."""
        pass


# Called with read_only=True for query-only operations
UnitOfWorkFactory = Callable[..., UnitOfWork]
