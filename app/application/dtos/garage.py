"""Garage DTOs."""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator, model_serializer

from app.application.dtos.base import DTO
from app.application.dtos.vehicle import VehicleResponse
from app.domain.exceptions import InvalidOpeningHoursError
from app.domain.value_objects.day_of_week import DayOfWeek
from app.domain.value_objects.opening_time import parse_opening_hours


class GarageRequest(DTO):
    """Payload to create or update a garage."""

    name: str = Field(min_length=3, max_length=100)
    address: str = Field(min_length=10, max_length=255)
    telephone: str = Field(pattern=r"^\+?[0-9]{10,15}$")
    email: EmailStr
    opening_hours: dict[DayOfWeek, str] = Field(default_factory=dict)

    @field_validator("name", "address")
    @classmethod
    def name_and_address_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("ne peut pas être vide")
        return value

    @field_validator("opening_hours")
    @classmethod
    def opening_hours_well_formed(cls, value: dict[DayOfWeek, str]) -> dict[DayOfWeek, str]:
        for day, hours in value.items():
            try:
                parse_opening_hours(day, hours)
            except InvalidOpeningHoursError as exc:
                raise ValueError(exc.message) from exc
        return value


class GarageResponse(DTO):
    """Garage projection with quota information."""

    id: int
    name: str
    address: str
    telephone: str
    email: str
    opening_hours: dict[DayOfWeek, str]
    vehicle_count: int
    available_capacity: int
    is_full: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    vehicles: Optional[list[VehicleResponse]] = None

    @model_serializer(mode="wrap")
    def serialize_without_absent_vehicles(self, handler):
        data = handler(self)
        if self.vehicles is None:
            data.pop("vehicles", None)
        return data
