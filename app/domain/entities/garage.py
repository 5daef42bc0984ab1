"""Garage aggregate root."""

from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Optional

from app.domain.entities.vehicle import Vehicle, same_entity
from app.domain.exceptions import VehicleQuotaExceededError
from app.domain.value_objects.day_of_week import DayOfWeek
from app.domain.value_objects.opening_time import OpeningTime, parse_opening_hours

MAX_VEHICLES_PER_GARAGE = 50


def normalize_email(email: str) -> str:
    """Normalize an email so uniqueness is case-insensitive."""
    return email.strip().lower()


@dataclass
class Garage:
    """Garage location owning a bounded set of vehicles."""

    name: str
    address: str
    telephone: str
    email: str
    opening_hours: dict[DayOfWeek, str] = field(default_factory=dict)
    vehicles: list[Vehicle] = field(default_factory=list)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Normalize email."""
        self.email = normalize_email(self.email)

    def vehicle_count(self) -> int:
        """Number of vehicles owned by the garage."""
        return len(self.vehicles)

    def can_accept_vehicle(self) -> bool:
        """Check if the quota leaves room for one more vehicle."""
        return self.vehicle_count() < MAX_VEHICLES_PER_GARAGE

    def available_capacity(self) -> int:
        """Remaining vehicle slots before the quota is reached."""
        return MAX_VEHICLES_PER_GARAGE - self.vehicle_count()

    def is_full(self) -> bool:
        """Check if the quota is reached."""
        return not self.can_accept_vehicle()

    def add_vehicle(self, vehicle: Vehicle) -> None:
        """
        Park a vehicle in the garage.

        Args:
            vehicle: Vehicle to attach

        Raises:
            VehicleQuotaExceededError: If the garage already owns 50 vehicles
        """
        if not self.can_accept_vehicle():
            raise VehicleQuotaExceededError(
                self.id if self.id is not None else self.name, MAX_VEHICLES_PER_GARAGE
            )
        self.vehicles.append(vehicle)
        vehicle.garage_id = self.id
        vehicle.garage_name = self.name

    def remove_vehicle(self, vehicle: Vehicle) -> None:
        """
        Detach a vehicle from the garage.

        Args:
            vehicle: Vehicle to detach
        """
        self.vehicles = [current for current in self.vehicles if not same_entity(current, vehicle)]
        vehicle.garage_id = None
        vehicle.garage_name = None

    def opening_times(self, day: DayOfWeek) -> list[OpeningTime]:
        """
        Parse the opening ranges of a day.

        Args:
            day: Day of the week

        Returns:
            Opening ranges, empty when the garage is closed that day
        """
        return parse_opening_hours(day, self.opening_hours.get(day))

    def is_open_at(self, day: DayOfWeek, moment: time) -> bool:
        """Check if the garage is open on a given day and time."""
        return any(opening_time.contains(moment) for opening_time in self.opening_times(day))
