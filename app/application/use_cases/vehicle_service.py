"""Vehicle use cases."""

from typing import Any, Callable, Optional
from uuid import uuid4

from app.application.dtos.outbox import OutboxMessage
from app.application.dtos.page import PageResponse
from app.application.dtos.vehicle import VehicleRequest, VehicleResponse, VehicleSearchCriteria
from app.application.mappers import (
    apply_vehicle_request,
    vehicle_created_event,
    vehicle_from_request,
    vehicle_to_response,
)
from app.application.ports.clock import Clock, utc_now
from app.application.ports.unit_of_work import UnitOfWorkFactory
from app.application.queries.pagination import PageRequest, SortOrder
from app.application.queries.predicates import conjunction
from app.application.queries.vehicle_specifications import (
    belongs_to_garage,
    has_brand,
    has_color,
    has_fuel_type,
    has_model,
    has_year_of_manufacture,
)
from app.domain.exceptions import DuplicateVinError, GarageNotFoundError, VehicleNotFoundError
from app.domain.value_objects.fuel_type import FuelType

VEHICLE_CREATED_EVENT_TYPE = "VehicleCreatedEvent"
GARAGE_VEHICLES_DEFAULT_SORT = (SortOrder("brand"),)


class VehicleService:
    """Manage vehicles parked in garages."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        clock: Clock = utc_now,
        on_vehicle_committed: Optional[Callable[[], None]] = None,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize vehicle service.

        Args:
            unit_of_work_factory: Factory opening a transaction (read_only keyword supported)
            clock: Clock used for the future-year rule
            on_vehicle_committed: Called after a vehicle creation commits (wakes the outbox relay)
            logger: Optional logger function (component, event, **kwargs)
        """
        self._unit_of_work_factory = unit_of_work_factory
        self._clock = clock
        self._on_vehicle_committed = on_vehicle_committed
        self._logger = logger

    def _log(self, event: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger("vehicle_service", event, **kwargs)

    async def add_to_garage(self, garage_id: int, request: VehicleRequest) -> VehicleResponse:
        """
        Park a new vehicle in a garage and record its creation event.

        The garage row stays locked until commit so concurrent creations cannot
        exceed the quota. The event goes to the outbox in the same transaction.

        Args:
            garage_id: Garage identifier
            request: Vehicle payload

        Returns:
            Created vehicle

        Raises:
            GarageNotFoundError: If the garage does not exist
            DuplicateVinError: If another vehicle uses the VIN
            InvalidYearOfManufactureError: If the year is after next year
            VehicleQuotaExceededError: If the garage already holds 50 vehicles
        """
        async with self._unit_of_work_factory() as uow:
            garage = await uow.garages.find_by_id_for_update(garage_id)
            if garage is None:
                raise GarageNotFoundError(garage_id)

            if request.vin and await uow.vehicles.exists_by_vin(request.vin):
                raise DuplicateVinError()

            vehicle = vehicle_from_request(request)
            vehicle.validate_year_of_manufacture(self._clock().year)
            garage.add_vehicle(vehicle)
            vehicle = await uow.vehicles.save(vehicle)

            event = vehicle_created_event(vehicle, event_id=str(uuid4()))
            await uow.outbox.add(
                OutboxMessage(
                    event_id=event.event_id,
                    event_type=VEHICLE_CREATED_EVENT_TYPE,
                    aggregate_id=str(vehicle.id),
                    payload=event.model_dump(mode="json", by_alias=True),
                )
            )
            await uow.commit()

        self._log(
            "vehicle_created", vehicle_id=vehicle.id, garage_id=garage_id, event_id=event.event_id
        )
        if self._on_vehicle_committed:
            self._on_vehicle_committed()
        return vehicle_to_response(vehicle)

    async def get_by_id(self, vehicle_id: int) -> VehicleResponse:
        async with self._unit_of_work_factory(read_only=True) as uow:
            vehicle = await uow.vehicles.find_by_id(vehicle_id)
        if vehicle is None:
            raise VehicleNotFoundError(vehicle_id)
        return vehicle_to_response(vehicle)

    async def list_by_garage(
        self, garage_id: int, page_request: PageRequest
    ) -> PageResponse[VehicleResponse]:
        """
        Page through the vehicles of a garage, by brand unless another order is given.

        Raises:
            GarageNotFoundError: If the garage does not exist
        """
        async with self._unit_of_work_factory(read_only=True) as uow:
            if not await uow.garages.exists_by_id(garage_id):
                raise GarageNotFoundError(garage_id)
            page = await uow.vehicles.find_by_garage_id(
                garage_id, page_request.with_default_sort(*GARAGE_VEHICLES_DEFAULT_SORT)
            )
        return PageResponse.from_page(page.map(vehicle_to_response))

    async def update(self, vehicle_id: int, request: VehicleRequest) -> VehicleResponse:
        """
        Update a vehicle. The owning garage never changes.

        Raises:
            VehicleNotFoundError: If the vehicle does not exist
            DuplicateVinError: If the new VIN is used by another vehicle
            InvalidYearOfManufactureError: If the year is after next year
        """
        async with self._unit_of_work_factory() as uow:
            vehicle = await uow.vehicles.find_by_id(vehicle_id)
            if vehicle is None:
                raise VehicleNotFoundError(vehicle_id)

            if (
                request.vin is not None
                and request.vin != vehicle.vin
                and await uow.vehicles.exists_by_vin(request.vin)
            ):
                raise DuplicateVinError()

            apply_vehicle_request(vehicle, request)
            vehicle.validate_year_of_manufacture(self._clock().year)
            saved = await uow.vehicles.save(vehicle)
            await uow.commit()

        self._log("vehicle_updated", vehicle_id=vehicle_id)
        return vehicle_to_response(saved)

    async def delete(self, vehicle_id: int) -> None:
        """
        Delete a vehicle; its accessories go with it.

        Raises:
            VehicleNotFoundError: If the vehicle does not exist
        """
        async with self._unit_of_work_factory() as uow:
            if not await uow.vehicles.exists_by_id(vehicle_id):
                raise VehicleNotFoundError(vehicle_id)
            await uow.vehicles.delete_by_id(vehicle_id)
            await uow.commit()

        self._log("vehicle_deleted", vehicle_id=vehicle_id)

    async def find_by_model(self, model: str) -> list[VehicleResponse]:
        async with self._unit_of_work_factory(read_only=True) as uow:
            vehicles = await uow.vehicles.find_all_by_model(model)
        return [vehicle_to_response(vehicle) for vehicle in vehicles]

    async def find_by_fuel_type(
        self, fuel_type: FuelType, page_request: PageRequest
    ) -> PageResponse[VehicleResponse]:
        async with self._unit_of_work_factory(read_only=True) as uow:
            page = await uow.vehicles.find_by_fuel_type(fuel_type, page_request)
        return PageResponse.from_page(page.map(vehicle_to_response))

    async def get_eco_friendly(self, page_request: PageRequest) -> PageResponse[VehicleResponse]:
        async with self._unit_of_work_factory(read_only=True) as uow:
            page = await uow.vehicles.find_eco_friendly(page_request)
        return PageResponse.from_page(page.map(vehicle_to_response))

    async def search(
        self, criteria: VehicleSearchCriteria, page_request: PageRequest
    ) -> PageResponse[VehicleResponse]:
        """Search vehicles matching every given criterion; absent ones match all."""
        predicate = conjunction(
            has_brand(criteria.brand),
            has_model(criteria.model),
            has_color(criteria.color),
            has_fuel_type(criteria.fuel_type),
            has_year_of_manufacture(criteria.year_of_manufacture),
            belongs_to_garage(criteria.garage_id),
        )
        async with self._unit_of_work_factory(read_only=True) as uow:
            page = await uow.vehicles.find_all(predicate, page_request)
        return PageResponse.from_page(page.map(vehicle_to_response))
