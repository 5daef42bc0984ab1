"""Search predicates over vehicles."""

from typing import Optional

from app.application.queries.predicates import Always, Equals, In, Predicate, is_blank
from app.domain.value_objects.fuel_type import ECO_FRIENDLY_FUEL_TYPES, FuelType


def has_brand(brand: Optional[str]) -> Predicate:
    if is_blank(brand):
        return Always()
    return Equals("brand", brand.strip(), ignore_case=True)


def has_model(model: Optional[str]) -> Predicate:
    if is_blank(model):
        return Always()
    return Equals("model", model.strip(), ignore_case=True)


def has_color(color: Optional[str]) -> Predicate:
    if is_blank(color):
        return Always()
    return Equals("color", color.strip(), ignore_case=True)


def has_fuel_type(fuel_type: Optional[FuelType]) -> Predicate:
    if is_blank(fuel_type):
        return Always()
    return Equals("fuel_type", fuel_type)


def has_year_of_manufacture(year: Optional[int]) -> Predicate:
    if year is None:
        return Always()
    return Equals("year_of_manufacture", year)


def belongs_to_garage(garage_id: Optional[int]) -> Predicate:
    if garage_id is None:
        return Always()
    return Equals("garage_id", garage_id)


def is_eco_friendly() -> Predicate:
    """Vehicles running on an electric or hybrid powertrain."""
    return In("fuel_type", ECO_FRIENDLY_FUEL_TYPES)
