"""Opening time value object and opening hours parsing."""

import re
from dataclasses import dataclass
from datetime import time
from typing import Mapping, Optional

from app.domain.exceptions import InvalidOpeningHoursError

CLOSED_MARKERS = {"", "fermé", "ferme", "closed"}

_RANGE_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*-\s*(\d{1,2}):(\d{2})\s*$")


@dataclass(frozen=True)
class OpeningTime:
    """A time-of-day range during which a garage is open."""

    start_time: Optional[time]
    end_time: Optional[time]

    def is_valid(self) -> bool:
        """Check that both bounds are set and start precedes end."""
        return (
            self.start_time is not None
            and self.end_time is not None
            and self.start_time < self.end_time
        )

    def contains(self, moment: time) -> bool:
        """
        Check if a time of day falls inside the range (bounds included).

        Args:
            moment: Time of day to test

        Returns:
            True if start_time <= moment <= end_time
        """
        if not self.is_valid():
            return False
        return self.start_time <= moment <= self.end_time

    def __str__(self) -> str:
        return f"{_format(self.start_time)} - {_format(self.end_time)}"


def _format(value: Optional[time]) -> str:
    return value.strftime("%H:%M") if value is not None else "?"


def _parse_range(day: object, text: str) -> OpeningTime:
    match = _RANGE_PATTERN.match(text)
    if not match:
        raise InvalidOpeningHoursError(day, f"format attendu HH:MM-HH:MM, reçu '{text.strip()}'")

    start_hour, start_minute, end_hour, end_minute = (int(group) for group in match.groups())
    try:
        opening_time = OpeningTime(time(start_hour, start_minute), time(end_hour, end_minute))
    except ValueError as exc:
        raise InvalidOpeningHoursError(day, f"heure hors limites dans '{text.strip()}'") from exc

    if not opening_time.is_valid():
        raise InvalidOpeningHoursError(
            day, f"l'heure de début doit précéder l'heure de fin ({opening_time})"
        )
    return opening_time


def parse_opening_hours(day: object, hours: Optional[str]) -> list[OpeningTime]:
    """
    Parse the free-form hours of one day into ranges.

    A value like "08:00-12:00,14:00-18:00" yields two ranges. An empty value or
    a closed marker ("Fermé", "closed") yields no range.

    Args:
        day: Day the hours belong to (used in error messages)
        hours: Hours string

    Returns:
        Ordered list of opening ranges

    Raises:
        InvalidOpeningHoursError: If a range is malformed, inverted or overlaps the previous one
    """
    if hours is None or hours.strip().lower() in CLOSED_MARKERS:
        return []

    ranges = [_parse_range(day, part) for part in hours.split(",")]
    for previous, current in zip(ranges, ranges[1:]):
        if current.start_time < previous.end_time:
            raise InvalidOpeningHoursError(
                day, f"les plages {previous} et {current} se chevauchent"
            )
    return ranges


def validate_opening_hours(opening_hours: Mapping[object, Optional[str]]) -> None:
    """
    Validate every day of an opening hours mapping.

    Args:
        opening_hours: Mapping from day to hours string

    Raises:
        InvalidOpeningHoursError: On the first invalid day
    """
    for day, hours in opening_hours.items():
        parse_opening_hours(day, hours)
