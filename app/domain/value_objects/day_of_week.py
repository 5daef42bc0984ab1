"""Day of week value object."""

from enum import Enum


class DayOfWeek(str, Enum):
    """Day of the week used as opening hours key."""

    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @classmethod
    def from_weekday(cls, weekday: int) -> "DayOfWeek":
        """
        Map a Python weekday number (Monday is 0) to a day.

        Args:
            weekday: Value returned by date.weekday()

        Returns:
            Matching DayOfWeek
        """
        return list(cls)[weekday]
