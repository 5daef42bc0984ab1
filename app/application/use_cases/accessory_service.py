"""Accessory use cases."""

from decimal import Decimal
from typing import Any, Callable, Optional

from app.application.dtos.accessory import AccessoryRequest, AccessoryResponse
from app.application.dtos.page import PageResponse
from app.application.mappers import (
    accessory_from_request,
    accessory_to_response,
    apply_accessory_request,
)
from app.application.ports.unit_of_work import UnitOfWorkFactory
from app.application.queries.pagination import PageRequest
from app.domain.exceptions import AccessoryNotFoundError, InvalidArgumentError, VehicleNotFoundError
from app.domain.value_objects.accessory_type import AccessoryType


class AccessoryService:
    """Manage accessories mounted on vehicles."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize accessory service.

        Args:
            unit_of_work_factory: Factory opening a transaction (read_only keyword supported)
            logger: Optional logger function (component, event, **kwargs)
        """
        self._unit_of_work_factory = unit_of_work_factory
        self._logger = logger

    def _log(self, event: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger("accessory_service", event, **kwargs)

    async def add_to_vehicle(
        self, vehicle_id: int, request: AccessoryRequest
    ) -> AccessoryResponse:
        """
        Mount a new accessory on a vehicle.

        Args:
            vehicle_id: Vehicle identifier
            request: Accessory payload

        Returns:
            Created accessory

        Raises:
            VehicleNotFoundError: If the vehicle does not exist
        """
        async with self._unit_of_work_factory() as uow:
            vehicle = await uow.vehicles.find_by_id(vehicle_id)
            if vehicle is None:
                raise VehicleNotFoundError(vehicle_id)

            accessory = accessory_from_request(request)
            vehicle.add_accessory(accessory)
            accessory = await uow.accessories.save(accessory)
            await uow.commit()

        self._log("accessory_created", accessory_id=accessory.id, vehicle_id=vehicle_id)
        return accessory_to_response(accessory)

    async def get_by_id(self, accessory_id: int) -> AccessoryResponse:
        async with self._unit_of_work_factory(read_only=True) as uow:
            accessory = await uow.accessories.find_by_id(accessory_id)
        if accessory is None:
            raise AccessoryNotFoundError(accessory_id)
        return accessory_to_response(accessory)

    async def list_by_vehicle(self, vehicle_id: int) -> list[AccessoryResponse]:
        """
        List every accessory of a vehicle.

        Raises:
            VehicleNotFoundError: If the vehicle does not exist
        """
        async with self._unit_of_work_factory(read_only=True) as uow:
            if not await uow.vehicles.exists_by_id(vehicle_id):
                raise VehicleNotFoundError(vehicle_id)
            accessories = await uow.accessories.list_by_vehicle_id(vehicle_id)
        return [accessory_to_response(accessory) for accessory in accessories]

    async def update(self, accessory_id: int, request: AccessoryRequest) -> AccessoryResponse:
        async with self._unit_of_work_factory() as uow:
            accessory = await uow.accessories.find_by_id(accessory_id)
            if accessory is None:
                raise AccessoryNotFoundError(accessory_id)

            apply_accessory_request(accessory, request)
            saved = await uow.accessories.save(accessory)
            await uow.commit()

        self._log("accessory_updated", accessory_id=accessory_id)
        return accessory_to_response(saved)

    async def delete(self, accessory_id: int) -> None:
        """
        Delete an accessory.

        Raises:
            AccessoryNotFoundError: If the accessory does not exist
        """
        async with self._unit_of_work_factory() as uow:
            if not await uow.accessories.exists_by_id(accessory_id):
                raise AccessoryNotFoundError(accessory_id)
            await uow.accessories.delete_by_id(accessory_id)
            await uow.commit()

        self._log("accessory_deleted", accessory_id=accessory_id)

    async def find_by_type(
        self, accessory_type: AccessoryType, page_request: PageRequest
    ) -> PageResponse[AccessoryResponse]:
        async with self._unit_of_work_factory(read_only=True) as uow:
            page = await uow.accessories.find_by_type(accessory_type, page_request)
        return PageResponse.from_page(page.map(accessory_to_response))

    async def search_by_name(
        self, name: str, page_request: PageRequest
    ) -> PageResponse[AccessoryResponse]:
        async with self._unit_of_work_factory(read_only=True) as uow:
            page = await uow.accessories.find_by_name_containing_ignore_case(name, page_request)
        return PageResponse.from_page(page.map(accessory_to_response))

    async def find_by_price_range(
        self, min_price: Decimal, max_price: Decimal, page_request: PageRequest
    ) -> PageResponse[AccessoryResponse]:
        """
        Page through accessories priced between two bounds (inclusive).

        Raises:
            InvalidArgumentError: If min_price is greater than max_price
        """
        if min_price > max_price:
            raise InvalidArgumentError("Le prix minimum doit être inférieur au prix maximum")
        async with self._unit_of_work_factory(read_only=True) as uow:
            page = await uow.accessories.find_by_price_between(min_price, max_price, page_request)
        return PageResponse.from_page(page.map(accessory_to_response))

    async def find_top_expensive(self, limit: int) -> list[AccessoryResponse]:
        async with self._unit_of_work_factory(read_only=True) as uow:
            accessories = await uow.accessories.find_top_expensive(limit)
        return [accessory_to_response(accessory) for accessory in accessories]

    async def total_price_by_vehicle(self, vehicle_id: int) -> Decimal:
        """
        Sum the prices of a vehicle's accessories.

        Returns:
            Total price, 0 when the vehicle has no accessory

        Raises:
            VehicleNotFoundError: If the vehicle does not exist
        """
        async with self._unit_of_work_factory(read_only=True) as uow:
            if not await uow.vehicles.exists_by_id(vehicle_id):
                raise VehicleNotFoundError(vehicle_id)
            return await uow.accessories.sum_price_by_vehicle_id(vehicle_id)
