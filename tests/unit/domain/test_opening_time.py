"""Unit tests for opening hours parsing."""

from datetime import time

import pytest

from app.domain.exceptions import InvalidOpeningHoursError
from app.domain.value_objects.day_of_week import DayOfWeek
from app.domain.value_objects.opening_time import (
    OpeningTime,
    parse_opening_hours,
    validate_opening_hours,
)


def test_parse_two_ranges():
    ranges = parse_opening_hours(DayOfWeek.MONDAY, "08:00-12:00, 14:00-18:30")

    assert ranges == [
        OpeningTime(time(8, 0), time(12, 0)),
        OpeningTime(time(14, 0), time(18, 30)),
    ]
    assert str(ranges[1]) == "14:00 - 18:30"


@pytest.mark.parametrize("hours", [None, "", "Fermé", "closed"])
def test_closed_markers_yield_no_range(hours):
    assert parse_opening_hours(DayOfWeek.SUNDAY, hours) == []


@pytest.mark.parametrize(
    "hours",
    [
        "8h-12h",
        "25:00-26:00",
        "12:00-08:00",
        "08:00-12:00,11:00-15:00",
    ],
)
def test_invalid_hours_are_rejected(hours):
    with pytest.raises(InvalidOpeningHoursError) as exc_info:
        parse_opening_hours(DayOfWeek.FRIDAY, hours)

    assert "FRIDAY" in exc_info.value.message


def test_contains_includes_bounds():
    opening_time = OpeningTime(time(9, 0), time(17, 0))

    assert opening_time.contains(time(9, 0))
    assert opening_time.contains(time(17, 0))
    assert not opening_time.contains(time(17, 1))


def test_invalid_range_contains_nothing():
    assert OpeningTime(time(17, 0), time(9, 0)).contains(time(12, 0)) is False
    assert OpeningTime(None, time(9, 0)).is_valid() is False


def test_validate_opening_hours_checks_every_day():
    validate_opening_hours({DayOfWeek.MONDAY: "08:00-18:00", DayOfWeek.SUNDAY: "Fermé"})

    with pytest.raises(InvalidOpeningHoursError):
        validate_opening_hours({DayOfWeek.MONDAY: "08:00-18:00", DayOfWeek.TUESDAY: "bad"})
