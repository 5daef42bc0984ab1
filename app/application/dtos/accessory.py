"""Accessory DTOs."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import Field, PlainSerializer

from app.application.dtos.base import DTO
from app.domain.value_objects.accessory_type import AccessoryType

Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class AccessoryRequest(DTO):
    """Payload to create or update an accessory."""

    name: str = Field(min_length=2, max_length=100)
    description: str = Field(min_length=10, max_length=500)
    price: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    type: AccessoryType


class AccessoryResponse(DTO):
    """Accessory projection with its vehicle label."""

    id: int
    name: str
    description: str
    price: Price
    type: AccessoryType
    vehicle_id: Optional[int] = None
    vehicle_display_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
