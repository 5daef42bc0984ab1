"""Garage use cases."""

from typing import Any, Callable, Optional

from app.application.dtos.garage import GarageRequest, GarageResponse
from app.application.dtos.page import PageResponse
from app.application.mappers import apply_garage_request, garage_from_request, garage_to_response
from app.application.ports.unit_of_work import UnitOfWorkFactory
from app.application.queries.garage_specifications import (
    has_city,
    has_email,
    has_name,
    has_vehicle_with_accessory_type,
    has_vehicle_with_fuel_type,
)
from app.application.queries.pagination import PageRequest, SortOrder
from app.application.queries.predicates import Predicate, conjunction
from app.domain.entities.garage import Garage, normalize_email
from app.domain.exceptions import DuplicateEmailError, GarageNotFoundError
from app.domain.value_objects.accessory_type import AccessoryType
from app.domain.value_objects.fuel_type import FuelType

DEFAULT_SORT = (SortOrder("name"),)


class GarageService:
    """Create, read, update, delete and search garages."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize garage service.

        Args:
            unit_of_work_factory: Factory opening a transaction (read_only keyword supported)
            logger: Optional logger function (component, event, **kwargs)
        """
        self._unit_of_work_factory = unit_of_work_factory
        self._logger = logger

    def _log(self, event: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger("garage_service", event, **kwargs)

    async def create(self, request: GarageRequest) -> GarageResponse:
        """
        Create a garage.

        Args:
            request: Garage payload

        Returns:
            Created garage

        Raises:
            DuplicateEmailError: If another garage uses the email
        """
        async with self._unit_of_work_factory() as uow:
            if await uow.garages.exists_by_email(request.email):
                raise DuplicateEmailError()
            garage = await uow.garages.save(garage_from_request(request))
            await uow.commit()

        self._log("garage_created", garage_id=garage.id, name=garage.name)
        return garage_to_response(garage)

    async def get_by_id(self, garage_id: int) -> GarageResponse:
        async with self._unit_of_work_factory(read_only=True) as uow:
            garage = await uow.garages.find_by_id(garage_id)
        if garage is None:
            raise GarageNotFoundError(garage_id)
        return garage_to_response(garage)

    async def list_all(self, page_request: PageRequest) -> PageResponse[GarageResponse]:
        return await self._search(conjunction(), page_request.with_default_sort(*DEFAULT_SORT))

    async def update(self, garage_id: int, request: GarageRequest) -> GarageResponse:
        """
        Update a garage.

        Args:
            garage_id: Garage identifier
            request: New garage values

        Returns:
            Updated garage

        Raises:
            GarageNotFoundError: If the garage does not exist
            DuplicateEmailError: If the new email is used by another garage
        """
        async with self._unit_of_work_factory() as uow:
            garage = await uow.garages.find_by_id(garage_id)
            if garage is None:
                raise GarageNotFoundError(garage_id)

            new_email = normalize_email(request.email)
            if new_email != garage.email and await uow.garages.exists_by_email(new_email):
                raise DuplicateEmailError()

            apply_garage_request(garage, request)
            saved = await uow.garages.save(garage)
            await uow.commit()

        self._log("garage_updated", garage_id=garage_id)
        return garage_to_response(saved)

    async def delete(self, garage_id: int) -> None:
        """
        Delete a garage with all its vehicles and their accessories.

        Args:
            garage_id: Garage identifier

        Raises:
            GarageNotFoundError: If the garage does not exist
        """
        async with self._unit_of_work_factory() as uow:
            if not await uow.garages.exists_by_id(garage_id):
                raise GarageNotFoundError(garage_id)
            await uow.garages.delete_by_id(garage_id)
            await uow.commit()

        self._log("garage_deleted", garage_id=garage_id)

    async def search_by_name(
        self, name: Optional[str], page_request: PageRequest
    ) -> PageResponse[GarageResponse]:
        return await self._search(has_name(name), page_request)

    async def search_by_city(
        self, city: Optional[str], page_request: PageRequest
    ) -> PageResponse[GarageResponse]:
        return await self._search(has_city(city), page_request)

    async def search_by_fuel_type(
        self, fuel_type: Optional[FuelType], page_request: PageRequest
    ) -> PageResponse[GarageResponse]:
        return await self._search(has_vehicle_with_fuel_type(fuel_type), page_request)

    async def search_by_accessory_type(
        self, accessory_type: Optional[AccessoryType], page_request: PageRequest
    ) -> PageResponse[GarageResponse]:
        """
        Find garages hosting a vehicle equipped with an accessory of the type.

        Each returned garage embeds only its vehicles carrying such an accessory.

        Args:
            accessory_type: Accessory type, None for every garage
            page_request: Window and ordering

        Returns:
            Page of garages with their matching vehicles
        """
        async with self._unit_of_work_factory(read_only=True) as uow:
            page = await uow.garages.find_all(
                has_vehicle_with_accessory_type(accessory_type), page_request
            )

        def to_response(garage: Garage) -> GarageResponse:
            matching = [
                vehicle
                for vehicle in garage.vehicles
                if accessory_type is None
                or any(accessory.type == accessory_type for accessory in vehicle.accessories)
            ]
            return garage_to_response(garage, vehicles=matching)

        return PageResponse.from_page(page.map(to_response))

    async def get_garages_with_available_capacity(
        self, page_request: PageRequest
    ) -> PageResponse[GarageResponse]:
        async with self._unit_of_work_factory(read_only=True) as uow:
            page = await uow.garages.find_with_available_capacity(page_request)
        return PageResponse.from_page(page.map(garage_to_response))

    async def get_full_garages(self, page_request: PageRequest) -> PageResponse[GarageResponse]:
        async with self._unit_of_work_factory(read_only=True) as uow:
            page = await uow.garages.find_full(page_request)
        return PageResponse.from_page(page.map(garage_to_response))

    async def search(
        self,
        page_request: PageRequest,
        name: Optional[str] = None,
        city: Optional[str] = None,
        email: Optional[str] = None,
        fuel_type: Optional[FuelType] = None,
        accessory_type: Optional[AccessoryType] = None,
    ) -> PageResponse[GarageResponse]:
        """
        Search garages with any combination of optional filters.

        Absent or blank filters match every garage.

        Returns:
            Page of garages matching all given filters
        """
        predicate = conjunction(
            has_name(name),
            has_city(city),
            has_email(email),
            has_vehicle_with_fuel_type(fuel_type),
            has_vehicle_with_accessory_type(accessory_type),
        )
        return await self._search(predicate, page_request)

    async def count_garages_with_vehicles(self) -> int:
        async with self._unit_of_work_factory(read_only=True) as uow:
            return await uow.garages.count_with_at_least_one_vehicle()

    async def _search(
        self, predicate: Predicate, page_request: PageRequest
    ) -> PageResponse[GarageResponse]:
        async with self._unit_of_work_factory(read_only=True) as uow:
            page = await uow.garages.find_all(predicate, page_request)
        return PageResponse.from_page(page.map(garage_to_response))
