"""Unit tests for Vehicle and Accessory entities."""

from decimal import Decimal

import pytest

from app.domain.entities.accessory import Accessory
from app.domain.entities.vehicle import Vehicle
from app.domain.exceptions import InvalidArgumentError, InvalidYearOfManufactureError
from app.domain.value_objects.accessory_type import AccessoryType
from app.domain.value_objects.fuel_type import FuelType


def make_accessory(price: str = "49.90") -> Accessory:
    return Accessory(
        name="Tapis",
        description="Tapis de sol en caoutchouc",
        price=Decimal(price),
        type=AccessoryType.INTERIEUR,
    )


@pytest.mark.parametrize(
    "fuel_type, expected",
    [
        (FuelType.ESSENCE, False),
        (FuelType.DIESEL, False),
        (FuelType.GPL, False),
        (FuelType.ELECTRIQUE, True),
        (FuelType.HYBRIDE, True),
    ],
)
def test_is_eco_friendly_only_for_electric_and_hybrid(fuel_type, expected):
    vehicle = Vehicle(brand="Renault", model="Zoe", year_of_manufacture=2023, fuel_type=fuel_type)

    assert vehicle.is_eco_friendly() is expected


def test_display_name():
    vehicle = Vehicle(
        brand="Renault", model="Zoe", year_of_manufacture=2023, fuel_type=FuelType.ELECTRIQUE
    )

    assert vehicle.display_name() == "Renault Zoe (2023)"


def test_fuel_type_display_name():
    assert FuelType.ELECTRIQUE.display_name == "Électrique"


def test_year_of_manufacture_next_year_is_accepted():
    vehicle = Vehicle(
        brand="Renault", model="Megane", year_of_manufacture=2025, fuel_type=FuelType.DIESEL
    )

    vehicle.validate_year_of_manufacture(2024)


def test_year_of_manufacture_two_years_ahead_is_rejected():
    vehicle = Vehicle(
        brand="Renault", model="Megane", year_of_manufacture=2026, fuel_type=FuelType.DIESEL
    )

    with pytest.raises(InvalidYearOfManufactureError) as exc_info:
        vehicle.validate_year_of_manufacture(2024)

    assert exc_info.value.message == "L'année de fabrication ne peut pas être dans le futur"


def test_add_and_remove_accessory():
    vehicle = Vehicle(
        id=4, brand="Renault", model="Clio", year_of_manufacture=2022, fuel_type=FuelType.ESSENCE
    )
    accessory = make_accessory()

    vehicle.add_accessory(accessory)

    assert vehicle.accessory_count() == 1
    assert accessory.vehicle_id == 4
    assert accessory.vehicle_display_name == "Renault Clio (2022)"

    vehicle.remove_accessory(accessory)

    assert vehicle.accessory_count() == 0
    assert accessory.vehicle_id is None


@pytest.mark.parametrize("price", ["0", "-5.00"])
def test_accessory_price_must_be_positive(price):
    with pytest.raises(InvalidArgumentError):
        make_accessory(price)
