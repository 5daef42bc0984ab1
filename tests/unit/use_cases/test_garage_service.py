"""Unit tests for GarageService."""

from unittest.mock import MagicMock

import pytest

from app.application.queries.pagination import PageRequest
from app.application.use_cases.accessory_service import AccessoryService
from app.application.use_cases.garage_service import GarageService
from app.application.use_cases.vehicle_service import VehicleService
from app.domain.exceptions import DuplicateEmailError, GarageNotFoundError, VehicleNotFoundError
from app.domain.value_objects.accessory_type import AccessoryType
from app.domain.value_objects.day_of_week import DayOfWeek
from app.domain.value_objects.fuel_type import FuelType


@pytest.fixture
def logger_mock():
    return MagicMock()


@pytest.fixture
def garage_service(uow_factory, logger_mock):
    return GarageService(uow_factory, logger=logger_mock)


@pytest.fixture
def vehicle_service(uow_factory, clock):
    return VehicleService(uow_factory, clock=clock)


@pytest.fixture
def accessory_service(uow_factory):
    return AccessoryService(uow_factory)


class TestGarageCrud:
    """Tests for garage create, read, update and delete."""

    @pytest.mark.asyncio
    async def test_create_returns_quota_figures(self, garage_service, garage_request, logger_mock):
        response = await garage_service.create(garage_request())

        assert response.id is not None
        assert response.vehicle_count == 0
        assert response.available_capacity == 50
        assert response.is_full is False
        assert response.vehicles is None
        assert response.opening_hours == {DayOfWeek.MONDAY: "08:00-12:00,14:00-18:00"}
        logger_mock.assert_called_with(
            "garage_service", "garage_created", garage_id=response.id, name=response.name
        )

    @pytest.mark.asyncio
    async def test_create_rejects_duplicate_email_ignoring_case(
        self, garage_service, garage_request
    ):
        await garage_service.create(garage_request())

        with pytest.raises(DuplicateEmailError) as exc_info:
            await garage_service.create(
                garage_request(name="Autre garage", email="PARIS@garage.fr")
            )

        assert "existe déjà" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_get_unknown_garage(self, garage_service):
        with pytest.raises(GarageNotFoundError) as exc_info:
            await garage_service.get_by_id(999)

        assert exc_info.value.message == "Garage avec l'ID 999 n'a pas été trouvé"

    @pytest.mark.asyncio
    async def test_update_keeps_own_email(self, garage_service, garage_request):
        created = await garage_service.create(garage_request())

        updated = await garage_service.update(
            created.id, garage_request(name="Garage Renault Paris Est")
        )

        assert updated.name == "Garage Renault Paris Est"
        assert updated.email == "paris@garage.fr"

    @pytest.mark.asyncio
    async def test_update_rejects_email_of_another_garage(self, garage_service, garage_request):
        await garage_service.create(garage_request())
        other = await garage_service.create(
            garage_request(name="Garage Renault Lyon", email="lyon@garage.fr")
        )

        with pytest.raises(DuplicateEmailError):
            await garage_service.update(other.id, garage_request(email="paris@garage.fr"))

    @pytest.mark.asyncio
    async def test_update_unknown_garage(self, garage_service, garage_request):
        with pytest.raises(GarageNotFoundError):
            await garage_service.update(42, garage_request())

    @pytest.mark.asyncio
    async def test_delete_removes_vehicles(
        self, garage_service, vehicle_service, garage_request, vehicle_request
    ):
        garage = await garage_service.create(garage_request())
        vehicle = await vehicle_service.add_to_garage(garage.id, vehicle_request())

        await garage_service.delete(garage.id)

        with pytest.raises(GarageNotFoundError):
            await garage_service.get_by_id(garage.id)
        with pytest.raises(VehicleNotFoundError):
            await vehicle_service.get_by_id(vehicle.id)

    @pytest.mark.asyncio
    async def test_delete_unknown_garage(self, garage_service):
        with pytest.raises(GarageNotFoundError):
            await garage_service.delete(404)


class TestGarageSearch:
    """Tests for garage listing and searches."""

    @pytest.mark.asyncio
    async def test_list_defaults_to_name_order(self, garage_service, garage_request):
        names = [("Garage Zeta", "zeta@garage.fr"), ("Garage Alpha", "alpha@garage.fr")]
        for name, email in names:
            await garage_service.create(garage_request(name=name, email=email))

        page = await garage_service.list_all(PageRequest())

        assert [garage.name for garage in page.items] == ["Garage Alpha", "Garage Zeta"]
        assert page.total_elements == 2

    @pytest.mark.asyncio
    async def test_search_by_name_and_city(self, garage_service, garage_request):
        await garage_service.create(garage_request())
        await garage_service.create(
            garage_request(
                name="Garage Dacia Lyon",
                email="lyon@garage.fr",
                address="5 place Bellecour, 69002 Lyon",
            )
        )

        by_name = await garage_service.search_by_name("renault", PageRequest())
        by_city = await garage_service.search_by_city("lyon", PageRequest())
        combined = await garage_service.search(PageRequest(), name="dacia", city="paris")

        assert [garage.name for garage in by_name.items] == ["Garage Renault Paris"]
        assert [garage.name for garage in by_city.items] == ["Garage Dacia Lyon"]
        assert combined.items == []

    @pytest.mark.asyncio
    async def test_search_by_fuel_type_leaves_vehicles_absent(
        self, garage_service, vehicle_service, garage_request, vehicle_request
    ):
        garage = await garage_service.create(garage_request())
        await vehicle_service.add_to_garage(
            garage.id, vehicle_request(model="Zoe", fuel_type=FuelType.ELECTRIQUE)
        )

        page = await garage_service.search_by_fuel_type(FuelType.ELECTRIQUE, PageRequest())

        assert [item.id for item in page.items] == [garage.id]
        assert page.items[0].vehicles is None
        assert page.items[0].vehicle_count == 1

    @pytest.mark.asyncio
    async def test_search_by_accessory_type_embeds_matching_vehicles_only(
        self,
        garage_service,
        vehicle_service,
        accessory_service,
        garage_request,
        vehicle_request,
        accessory_request,
    ):
        garage_a = await garage_service.create(garage_request())
        garage_b = await garage_service.create(
            garage_request(name="Garage Renault Lyon", email="lyon@garage.fr")
        )
        equipped = await vehicle_service.add_to_garage(garage_a.id, vehicle_request())
        await vehicle_service.add_to_garage(garage_a.id, vehicle_request(model="Captur"))
        comfort = await vehicle_service.add_to_garage(garage_b.id, vehicle_request())
        await accessory_service.add_to_vehicle(equipped.id, accessory_request())
        await accessory_service.add_to_vehicle(
            comfort.id, accessory_request(name="Sièges chauffants", type=AccessoryType.CONFORT)
        )

        page = await garage_service.search_by_accessory_type(
            AccessoryType.SECURITE, PageRequest()
        )

        assert [garage.id for garage in page.items] == [garage_a.id]
        assert [vehicle.id for vehicle in page.items[0].vehicles] == [equipped.id]
        assert page.items[0].vehicle_count == 2

    @pytest.mark.asyncio
    async def test_capacity_and_count(
        self, garage_service, vehicle_service, garage_request, vehicle_request
    ):
        garage = await garage_service.create(garage_request())
        await garage_service.create(
            garage_request(name="Garage Renault Lyon", email="lyon@garage.fr")
        )
        await vehicle_service.add_to_garage(garage.id, vehicle_request())

        available = await garage_service.get_garages_with_available_capacity(PageRequest())
        full = await garage_service.get_full_garages(PageRequest())
        with_vehicles = await garage_service.count_garages_with_vehicles()

        assert available.total_elements == 2
        assert full.total_elements == 0
        assert with_vehicles == 1
