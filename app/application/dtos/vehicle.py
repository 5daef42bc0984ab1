"""Vehicle DTOs."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.application.dtos.base import DTO
from app.domain.value_objects.fuel_type import FuelType

VIN_PATTERN = r"^[A-HJ-NPR-Z0-9]{17}$"


class VehicleRequest(DTO):
    """Payload to create or update a vehicle."""

    brand: str = Field(min_length=2, max_length=50)
    model: str = Field(min_length=1, max_length=50)
    year_of_manufacture: int = Field(ge=1900, le=2100)
    fuel_type: FuelType
    vin: Optional[str] = Field(default=None, pattern=VIN_PATTERN)
    color: Optional[str] = Field(default=None, max_length=30)
    mileage: Optional[int] = Field(default=None, ge=0)


class VehicleResponse(DTO):
    """Vehicle projection. Never embeds its garage."""

    id: int
    brand: str
    model: str
    year_of_manufacture: int
    fuel_type: FuelType
    vin: Optional[str] = None
    color: Optional[str] = None
    mileage: Optional[int] = None
    garage_id: Optional[int] = None
    garage_name: Optional[str] = None
    accessory_count: int
    is_eco_friendly: bool
    display_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class VehicleSearchCriteria(DTO):
    """Optional filters combined with AND; absent ones match everything."""

    brand: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None
    fuel_type: Optional[FuelType] = None
    year_of_manufacture: Optional[int] = None
    garage_id: Optional[int] = None
