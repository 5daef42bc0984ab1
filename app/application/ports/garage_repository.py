"""Garage repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from app.application.queries.pagination import Page, PageRequest
from app.application.queries.predicates import Predicate
from app.domain.entities.garage import MAX_VEHICLES_PER_GARAGE, Garage


class GarageRepository(ABC):
    """Port interface for garage persistence."""

    @abstractmethod
    async def find_by_id(self, garage_id: int) -> Optional[Garage]:
        """
        Get a garage with its vehicles.

        Args:
            garage_id: Garage identifier

        Returns:
            Garage entity, or None if not found
        """
        pass

    @abstractmethod
    async def find_by_id_for_update(self, garage_id: int) -> Optional[Garage]:
        """
        Get a garage and lock its row until the transaction ends.

        Args:
            garage_id: Garage identifier

        Returns:
            Garage entity, or None if not found
        """
        pass

    @abstractmethod
    async def save(self, garage: Garage) -> Garage:
        """
        Insert or update a garage and its opening hours.

        Args:
            garage: Garage entity (id None for insert)

        Returns:
            Persisted garage with identity and timestamps
        """
        pass

    @abstractmethod
    async def delete_by_id(self, garage_id: int) -> None:
        """
        Delete a garage together with its vehicles and their accessories.

        Args:
            garage_id: Garage identifier
        """
        pass

    @abstractmethod
    async def exists_by_id(self, garage_id: int) -> bool:
        pass

    @abstractmethod
    async def find_all(self, predicate: Predicate, page_request: PageRequest) -> Page[Garage]:
        """
        Page through garages matching a predicate.

        Args:
            predicate: Filter, Always() for every garage
            page_request: Window and ordering

        Returns:
            Page of garages
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Garage]:
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        pass

    @abstractmethod
    async def find_by_name_containing_ignore_case(
        self, name: str, page_request: PageRequest
    ) -> Page[Garage]:
        pass

    @abstractmethod
    async def find_by_address_containing_ignore_case(
        self, address: str, page_request: PageRequest
    ) -> Page[Garage]:
        pass

    @abstractmethod
    async def find_with_available_capacity(
        self, page_request: PageRequest, max_vehicles: int = MAX_VEHICLES_PER_GARAGE
    ) -> Page[Garage]:
        pass

    @abstractmethod
    async def find_full(
        self, page_request: PageRequest, max_vehicles: int = MAX_VEHICLES_PER_GARAGE
    ) -> Page[Garage]:
        pass

    @abstractmethod
    async def count_with_at_least_one_vehicle(self) -> int:
        pass
