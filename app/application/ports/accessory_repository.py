"""Accessory repository port."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from app.application.queries.pagination import Page, PageRequest
from app.domain.entities.accessory import Accessory
from app.domain.value_objects.accessory_type import AccessoryType


class AccessoryRepository(ABC):
    """Port interface for accessory persistence."""

    @abstractmethod
    async def find_by_id(self, accessory_id: int) -> Optional[Accessory]:
        pass

    @abstractmethod
    async def save(self, accessory: Accessory) -> Accessory:
        """
        Insert or update an accessory.

        Args:
            accessory: Accessory entity, vehicle_id must be set on insert

        Returns:
            Persisted accessory with identity, timestamps and vehicle label
        """
        pass

    @abstractmethod
    async def delete_by_id(self, accessory_id: int) -> None:
        pass

    @abstractmethod
    async def exists_by_id(self, accessory_id: int) -> bool:
        pass

    @abstractmethod
    async def find_by_vehicle_id(
        self, vehicle_id: int, page_request: PageRequest
    ) -> Page[Accessory]:
        pass

    @abstractmethod
    async def list_by_vehicle_id(self, vehicle_id: int) -> list[Accessory]:
        pass

    @abstractmethod
    async def find_by_type(
        self, accessory_type: AccessoryType, page_request: PageRequest
    ) -> Page[Accessory]:
        pass

    @abstractmethod
    async def find_by_name_containing_ignore_case(
        self, name: str, page_request: PageRequest
    ) -> Page[Accessory]:
        pass

    @abstractmethod
    async def find_by_price_between(
        self, min_price: Decimal, max_price: Decimal, page_request: PageRequest
    ) -> Page[Accessory]:
        pass

    @abstractmethod
    async def count_by_vehicle_id(self, vehicle_id: int) -> int:
        pass

    @abstractmethod
    async def find_by_vehicle_id_and_type(
        self, vehicle_id: int, accessory_type: AccessoryType
    ) -> list[Accessory]:
        pass

    @abstractmethod
    async def find_top_expensive(self, limit: int) -> list[Accessory]:
        """
        Get the most expensive accessories.

        Args:
            limit: Maximum number of accessories

        Returns:
            Accessories ordered by price, highest first
        """
        pass

    @abstractmethod
    async def sum_price_by_vehicle_id(self, vehicle_id: int) -> Decimal:
        """
        Sum the prices of a vehicle's accessories.

        Args:
            vehicle_id: Vehicle identifier

        Returns:
            Total price, Decimal("0") when the vehicle has none
        """
        pass

    @abstractmethod
    async def find_garage_ids_with_accessory_type(
        self, accessory_type: AccessoryType
    ) -> list[int]:
        """Distinct garage IDs hosting a vehicle with an accessory of the type."""
        pass
