"""Unit tests for VehicleService."""

from unittest.mock import MagicMock, patch

import pytest
import pytest_asyncio

from app.adapters.outbound.persistence.garage_repository import SqlAlchemyGarageRepository
from app.application.dtos.vehicle import VehicleSearchCriteria
from app.application.queries.pagination import PageRequest
from app.application.use_cases.garage_service import GarageService
from app.application.use_cases.vehicle_service import VehicleService
from app.domain.exceptions import (
    DuplicateVinError,
    GarageNotFoundError,
    InvalidYearOfManufactureError,
    VehicleNotFoundError,
    VehicleQuotaExceededError,
)
from app.domain.value_objects.fuel_type import FuelType


@pytest.fixture
def on_vehicle_committed():
    return MagicMock()


@pytest.fixture
def vehicle_service(uow_factory, clock, on_vehicle_committed):
    return VehicleService(uow_factory, clock=clock, on_vehicle_committed=on_vehicle_committed)


@pytest.fixture
def garage_service(uow_factory):
    return GarageService(uow_factory)


@pytest_asyncio.fixture
async def garage(garage_service, garage_request):
    return await garage_service.create(garage_request())


async def pending_events(uow_factory):
    async with uow_factory(read_only=True) as uow:
        return await uow.outbox.fetch_pending(1000)


class TestAddToGarage:
    """Tests for vehicle creation."""

    @pytest.mark.asyncio
    async def test_creates_vehicle_and_outbox_event(
        self,
        vehicle_service,
        garage,
        vehicle_request,
        uow_factory,
        on_vehicle_committed,
        fixed_now,
    ):
        response = await vehicle_service.add_to_garage(
            garage.id,
            vehicle_request(
                model="Zoe", year_of_manufacture=2023, fuel_type=FuelType.ELECTRIQUE
            ),
        )

        assert response.garage_id == garage.id
        assert response.garage_name == garage.name
        assert response.is_eco_friendly is True
        assert response.display_name == "Renault Zoe (2023)"
        assert response.created_at == fixed_now

        events = await pending_events(uow_factory)
        assert len(events) == 1
        assert events[0].event_type == "VehicleCreatedEvent"
        assert events[0].aggregate_id == str(response.id)
        payload = events[0].payload
        assert payload["vehicleId"] == response.id
        assert payload["garageName"] == garage.name
        assert payload["fuelType"] == "ELECTRIQUE"
        assert payload["eventId"] == events[0].event_id
        on_vehicle_committed.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_each_vehicle_gets_its_own_event_id(
        self, vehicle_service, garage, vehicle_request, uow_factory
    ):
        await vehicle_service.add_to_garage(garage.id, vehicle_request())
        await vehicle_service.add_to_garage(garage.id, vehicle_request(model="Captur"))

        events = await pending_events(uow_factory)

        assert len({event.event_id for event in events}) == 2

    @pytest.mark.asyncio
    async def test_fiftieth_succeeds_and_fifty_first_is_rejected(
        self, vehicle_service, garage, vehicle_request, uow_factory, garage_service
    ):
        for index in range(50):
            await vehicle_service.add_to_garage(garage.id, vehicle_request(model=f"Clio {index}"))

        with pytest.raises(VehicleQuotaExceededError) as exc_info:
            await vehicle_service.add_to_garage(garage.id, vehicle_request(model="Clio 50"))

        assert "quota maximum de 50" in exc_info.value.message
        stored = await garage_service.get_by_id(garage.id)
        assert stored.vehicle_count == 50
        assert stored.is_full is True
        assert stored.available_capacity == 0
        assert len(await pending_events(uow_factory)) == 50

    @pytest.mark.asyncio
    async def test_year_boundaries(self, vehicle_service, garage, vehicle_request, uow_factory):
        accepted = await vehicle_service.add_to_garage(
            garage.id, vehicle_request(year_of_manufacture=2025)
        )

        with pytest.raises(InvalidYearOfManufactureError):
            await vehicle_service.add_to_garage(
                garage.id, vehicle_request(year_of_manufacture=2026)
            )

        assert accepted.year_of_manufacture == 2025
        assert len(await pending_events(uow_factory)) == 1

    @pytest.mark.asyncio
    async def test_duplicate_vin_is_rejected(self, vehicle_service, garage, vehicle_request):
        await vehicle_service.add_to_garage(garage.id, vehicle_request(vin="VF1RFB00123456789"))

        with pytest.raises(DuplicateVinError) as exc_info:
            await vehicle_service.add_to_garage(
                garage.id, vehicle_request(model="Captur", vin="VF1RFB00123456789")
            )

        assert "existe déjà" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_unknown_garage(self, vehicle_service, vehicle_request, on_vehicle_committed):
        with pytest.raises(GarageNotFoundError):
            await vehicle_service.add_to_garage(12, vehicle_request())

        on_vehicle_committed.assert_not_called()


class TestVehicleQueries:
    """Tests for vehicle reads, updates and deletes."""

    @pytest.mark.asyncio
    async def test_list_by_garage_sorted_by_brand(
        self, vehicle_service, garage, vehicle_request
    ):
        for brand in ["Renault", "Alpine", "Dacia"]:
            await vehicle_service.add_to_garage(garage.id, vehicle_request(brand=brand))

        page = await vehicle_service.list_by_garage(garage.id, PageRequest())

        assert [vehicle.brand for vehicle in page.items] == ["Alpine", "Dacia", "Renault"]

    @pytest.mark.asyncio
    async def test_list_by_unknown_garage(self, vehicle_service):
        with pytest.raises(GarageNotFoundError):
            await vehicle_service.list_by_garage(77, PageRequest())

    @pytest.mark.asyncio
    async def test_update_keeps_garage_and_checks_vin(
        self, vehicle_service, garage, vehicle_request
    ):
        first = await vehicle_service.add_to_garage(
            garage.id, vehicle_request(vin="VF1RFB00123456789")
        )
        second = await vehicle_service.add_to_garage(garage.id, vehicle_request(model="Captur"))

        updated = await vehicle_service.update(
            second.id, vehicle_request(model="Captur", color="Rouge", mileage=1200)
        )

        assert updated.color == "Rouge"
        assert updated.mileage == 1200
        assert updated.garage_id == garage.id
        with pytest.raises(DuplicateVinError):
            await vehicle_service.update(second.id, vehicle_request(vin=first.vin))

    @pytest.mark.asyncio
    async def test_update_rejects_future_year(self, vehicle_service, garage, vehicle_request):
        vehicle = await vehicle_service.add_to_garage(garage.id, vehicle_request())

        with pytest.raises(InvalidYearOfManufactureError):
            await vehicle_service.update(vehicle.id, vehicle_request(year_of_manufacture=2030))

    @pytest.mark.asyncio
    async def test_delete(self, vehicle_service, garage, vehicle_request, garage_service):
        vehicle = await vehicle_service.add_to_garage(garage.id, vehicle_request())

        await vehicle_service.delete(vehicle.id)

        with pytest.raises(VehicleNotFoundError):
            await vehicle_service.get_by_id(vehicle.id)
        assert (await garage_service.get_by_id(garage.id)).vehicle_count == 0
        with pytest.raises(VehicleNotFoundError):
            await vehicle_service.delete(vehicle.id)

    @pytest.mark.asyncio
    async def test_delete_does_not_load_the_garage(self, vehicle_service, garage, vehicle_request):
        vehicle = await vehicle_service.add_to_garage(garage.id, vehicle_request())

        with patch.object(
            SqlAlchemyGarageRepository, "find_by_id", side_effect=AssertionError("garage loaded")
        ):
            await vehicle_service.delete(vehicle.id)

        with pytest.raises(VehicleNotFoundError):
            await vehicle_service.get_by_id(vehicle.id)

    @pytest.mark.asyncio
    async def test_fuel_type_queries(self, vehicle_service, garage, vehicle_request):
        for fuel_type in FuelType:
            await vehicle_service.add_to_garage(
                garage.id, vehicle_request(model=fuel_type.value.title(), fuel_type=fuel_type)
            )

        eco = await vehicle_service.get_eco_friendly(PageRequest(size=10))
        hybrid = await vehicle_service.find_by_fuel_type(FuelType.HYBRIDE, PageRequest())
        by_model = await vehicle_service.find_by_model("DIESEL")

        assert eco.total_elements == 2
        assert all(vehicle.is_eco_friendly for vehicle in eco.items)
        assert [vehicle.fuel_type for vehicle in hybrid.items] == [FuelType.HYBRIDE]
        assert [vehicle.model for vehicle in by_model] == ["Diesel"]

    @pytest.mark.asyncio
    async def test_search_with_blank_criteria_returns_everything(
        self, vehicle_service, garage, vehicle_request
    ):
        await vehicle_service.add_to_garage(garage.id, vehicle_request(color="Bleu"))
        await vehicle_service.add_to_garage(garage.id, vehicle_request(color="Noir"))

        everything = await vehicle_service.search(
            VehicleSearchCriteria(brand="  ", color=""), PageRequest()
        )
        blue = await vehicle_service.search(
            VehicleSearchCriteria(color="BLEU", garage_id=garage.id), PageRequest()
        )

        assert everything.total_elements == 2
        assert [vehicle.color for vehicle in blue.items] == ["Bleu"]
