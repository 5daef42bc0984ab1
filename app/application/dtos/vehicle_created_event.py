"""Vehicle created event."""

from datetime import datetime
from typing import Optional

from app.application.dtos.base import DTO
from app.domain.value_objects.fuel_type import FuelType


class VehicleCreatedEvent(DTO):
    """Event emitted once per persisted vehicle.

    event_id is a fresh UUID4 string; consumers deduplicate redeliveries with it.
    """

    vehicle_id: int
    brand: str
    model: str
    year_of_manufacture: int
    fuel_type: FuelType
    vin: Optional[str] = None
    garage_id: int
    garage_name: str
    created_at: datetime
    event_id: str
