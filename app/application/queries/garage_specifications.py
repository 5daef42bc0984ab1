"""Search predicates over garages."""

from typing import Optional

from app.application.queries.predicates import (
    Always,
    Contains,
    Equals,
    Join,
    Predicate,
    SizeCompare,
    is_blank,
)
from app.domain.entities.garage import MAX_VEHICLES_PER_GARAGE, normalize_email
from app.domain.value_objects.accessory_type import AccessoryType
from app.domain.value_objects.fuel_type import FuelType


def has_name(name: Optional[str]) -> Predicate:
    """Garages whose name contains the text, ignoring case."""
    if is_blank(name):
        return Always()
    return Contains("name", name.strip())


def has_city(city: Optional[str]) -> Predicate:
    """Garages whose address contains the city, ignoring case."""
    if is_blank(city):
        return Always()
    return Contains("address", city.strip())


def has_email(email: Optional[str]) -> Predicate:
    """Garage with exactly this email, ignoring case."""
    if is_blank(email):
        return Always()
    return Equals("email", normalize_email(email), ignore_case=True)


def has_vehicle_with_fuel_type(fuel_type: Optional[FuelType]) -> Predicate:
    """Garages owning at least one vehicle of the fuel type."""
    if is_blank(fuel_type):
        return Always()
    return Join("vehicles", Equals("fuel_type", fuel_type))


def has_vehicle_with_accessory_type(accessory_type: Optional[AccessoryType]) -> Predicate:
    """Garages owning a vehicle equipped with an accessory of the type."""
    if is_blank(accessory_type):
        return Always()
    return Join("vehicles", Join("accessories", Equals("type", accessory_type)))


def has_available_capacity(max_vehicles: int = MAX_VEHICLES_PER_GARAGE) -> Predicate:
    """Garages below the vehicle quota."""
    return SizeCompare("vehicles", "<", max_vehicles)


def is_full(max_vehicles: int = MAX_VEHICLES_PER_GARAGE) -> Predicate:
    """Garages that reached the vehicle quota."""
    return SizeCompare("vehicles", ">=", max_vehicles)


def has_vehicles() -> Predicate:
    """Garages owning at least one vehicle."""
    return SizeCompare("vehicles", ">", 0)


def is_empty() -> Predicate:
    """Garages owning no vehicle."""
    return SizeCompare("vehicles", "==", 0)
