"""Unit tests for query predicates and specifications."""

import pytest

from app.application.queries.garage_specifications import (
    has_available_capacity,
    has_city,
    has_email,
    has_name,
    has_vehicle_with_accessory_type,
    has_vehicle_with_fuel_type,
    is_full,
)
from app.application.queries.predicates import (
    Always,
    And,
    Contains,
    Equals,
    In,
    Join,
    SizeCompare,
    conjunction,
)
from app.application.queries.vehicle_specifications import (
    belongs_to_garage,
    has_brand,
    is_eco_friendly,
)
from app.domain.value_objects.accessory_type import AccessoryType
from app.domain.value_objects.fuel_type import FuelType


class TestConjunction:
    """Tests for predicate composition."""

    def test_empty_conjunction_matches_everything(self):
        assert conjunction() == Always()

    def test_neutral_predicates_are_dropped(self):
        name = Contains("name", "paris")

        assert conjunction(Always(), name, Always()) == name

    def test_nested_conjunctions_are_flattened(self):
        first = Contains("name", "renault")
        second = Contains("address", "lyon")
        third = Equals("email", "a@garage.fr")

        combined = (first & second) & third

        assert combined == And((first, second, third))


class TestSpecifications:
    """Tests for garage and vehicle specifications."""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_criteria_match_everything(self, value):
        assert has_name(value) == Always()
        assert has_city(value) == Always()
        assert has_email(value) == Always()
        assert has_brand(value) == Always()

    def test_none_enums_match_everything(self):
        assert has_vehicle_with_fuel_type(None) == Always()
        assert has_vehicle_with_accessory_type(None) == Always()
        assert belongs_to_garage(None) == Always()

    def test_city_is_substring_of_address(self):
        assert has_city(" Lyon ") == Contains("address", "Lyon")

    def test_email_is_normalized(self):
        assert has_email("Paris@Garage.FR") == Equals("email", "paris@garage.fr", ignore_case=True)

    def test_accessory_type_joins_through_vehicles(self):
        predicate = has_vehicle_with_accessory_type(AccessoryType.SECURITE)

        assert predicate == Join(
            "vehicles", Join("accessories", Equals("type", AccessoryType.SECURITE))
        )

    def test_capacity_predicates(self):
        assert has_available_capacity() == SizeCompare("vehicles", "<", 50)
        assert is_full() == SizeCompare("vehicles", ">=", 50)

    def test_eco_friendly_is_fuel_type_membership(self):
        predicate = is_eco_friendly()

        assert isinstance(predicate, In)
        assert set(predicate.values) == {FuelType.ELECTRIQUE, FuelType.HYBRIDE}

    def test_size_compare_rejects_unknown_operator(self):
        with pytest.raises(ValueError):
            SizeCompare("vehicles", "<>", 1)
