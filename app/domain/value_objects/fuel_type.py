"""Fuel type value object."""

from enum import Enum


class FuelType(str, Enum):
    """Fuel type of a vehicle."""

    ESSENCE = "ESSENCE"
    DIESEL = "DIESEL"
    ELECTRIQUE = "ELECTRIQUE"
    HYBRIDE = "HYBRIDE"
    GPL = "GPL"

    @property
    def display_name(self) -> str:
        """French label shown to back-office users."""
        return _DISPLAY_NAMES[self]

    def is_eco_friendly(self) -> bool:
        """Check if the fuel type counts as eco-friendly."""
        return self in ECO_FRIENDLY_FUEL_TYPES


_DISPLAY_NAMES = {
    FuelType.ESSENCE: "Essence",
    FuelType.DIESEL: "Diesel",
    FuelType.ELECTRIQUE: "Électrique",
    FuelType.HYBRIDE: "Hybride",
    FuelType.GPL: "GPL",
}

ECO_FRIENDLY_FUEL_TYPES = (FuelType.ELECTRIQUE, FuelType.HYBRIDE)
