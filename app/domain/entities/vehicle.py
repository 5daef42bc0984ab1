"""Vehicle entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from app.domain.entities.accessory import Accessory
from app.domain.exceptions import InvalidYearOfManufactureError
from app.domain.value_objects.fuel_type import FuelType


@dataclass
class Vehicle:
    """Car parked at a garage."""

    brand: str
    model: str
    year_of_manufacture: int
    fuel_type: FuelType
    vin: Optional[str] = None
    color: Optional[str] = None
    mileage: Optional[int] = None
    garage_id: Optional[int] = None
    garage_name: Optional[str] = None  # resolved by the repository
    accessories: list[Accessory] = field(default_factory=list)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_eco_friendly(self) -> bool:
        """Check if the vehicle runs on an electric or hybrid powertrain."""
        return self.fuel_type.is_eco_friendly()

    def display_name(self) -> str:
        """Build the label used in listings, e.g. "Renault Zoe (2023)"."""
        return f"{self.brand} {self.model} ({self.year_of_manufacture})"

    def accessory_count(self) -> int:
        """Number of accessories mounted on the vehicle."""
        return len(self.accessories)

    def add_accessory(self, accessory: Accessory) -> None:
        """
        Mount an accessory on the vehicle.

        Args:
            accessory: Accessory to attach
        """
        self.accessories.append(accessory)
        accessory.vehicle_id = self.id
        accessory.vehicle_display_name = self.display_name()

    def remove_accessory(self, accessory: Accessory) -> None:
        """
        Detach an accessory from the vehicle.

        Args:
            accessory: Accessory to detach
        """
        self.accessories = [
            current for current in self.accessories if not same_entity(current, accessory)
        ]
        accessory.vehicle_id = None
        accessory.vehicle_display_name = None

    def validate_year_of_manufacture(self, current_year: int) -> None:
        """
        Reject vehicles built after next year.

        Args:
            current_year: Year taken from the injected clock

        Raises:
            InvalidYearOfManufactureError: If year_of_manufacture > current_year + 1
        """
        if self.year_of_manufacture > current_year + 1:
            raise InvalidYearOfManufactureError(self.year_of_manufacture)


def same_entity(left: object, right: object) -> bool:
    """Compare two entities by object identity, or by ID once persisted."""
    if left is right:
        return True
    left_id = getattr(left, "id", None)
    return left_id is not None and left_id == getattr(right, "id", None)
