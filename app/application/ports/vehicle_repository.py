"""Vehicle repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from app.application.queries.pagination import Page, PageRequest
from app.application.queries.predicates import Predicate
from app.domain.entities.vehicle import Vehicle
from app.domain.value_objects.fuel_type import FuelType


class VehicleRepository(ABC):
    """Port interface for vehicle persistence."""

    @abstractmethod
    async def find_by_id(self, vehicle_id: int) -> Optional[Vehicle]:
        """
        Get a vehicle with its accessories.

        Args:
            vehicle_id: Vehicle identifier

        Returns:
            Vehicle entity, or None if not found
        """
        pass

    @abstractmethod
    async def save(self, vehicle: Vehicle) -> Vehicle:
        """
        Insert or update a vehicle.

        Args:
            vehicle: Vehicle entity, garage_id must be set on insert

        Returns:
            Persisted vehicle with identity, timestamps and garage name
        """
        pass

    @abstractmethod
    async def delete_by_id(self, vehicle_id: int) -> None:
        """Delete a vehicle and its accessories."""
        pass

    @abstractmethod
    async def exists_by_id(self, vehicle_id: int) -> bool:
        pass

    @abstractmethod
    async def find_all(self, predicate: Predicate, page_request: PageRequest) -> Page[Vehicle]:
        pass

    @abstractmethod
    async def find_by_garage_id(self, garage_id: int, page_request: PageRequest) -> Page[Vehicle]:
        pass

    @abstractmethod
    async def find_by_brand_ignore_case(
        self, brand: str, page_request: PageRequest
    ) -> Page[Vehicle]:
        pass

    @abstractmethod
    async def find_by_model_ignore_case(
        self, model: str, page_request: PageRequest
    ) -> Page[Vehicle]:
        pass

    @abstractmethod
    async def find_by_brand_and_model_ignore_case(
        self, brand: str, model: str, page_request: PageRequest
    ) -> Page[Vehicle]:
        pass

    @abstractmethod
    async def find_by_fuel_type(
        self, fuel_type: FuelType, page_request: PageRequest
    ) -> Page[Vehicle]:
        pass

    @abstractmethod
    async def find_by_vin(self, vin: str) -> Optional[Vehicle]:
        pass

    @abstractmethod
    async def count_by_garage_id(self, garage_id: int) -> int:
        pass

    @abstractmethod
    async def exists_by_vin(self, vin: str) -> bool:
        pass

    @abstractmethod
    async def find_all_by_model(self, model: str) -> list[Vehicle]:
        """
        List every vehicle of a model, ignoring case, without paging.

        Args:
            model: Model name

        Returns:
            Matching vehicles ordered by identifier
        """
        pass

    @abstractmethod
    async def find_by_garage_id_and_fuel_type(
        self, garage_id: int, fuel_type: FuelType, page_request: PageRequest
    ) -> Page[Vehicle]:
        pass

    @abstractmethod
    async def find_eco_friendly(self, page_request: PageRequest) -> Page[Vehicle]:
        pass
