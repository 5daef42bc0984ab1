"""Accessory entity."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from app.domain.exceptions import InvalidArgumentError
from app.domain.value_objects.accessory_type import AccessoryType


@dataclass
class Accessory:
    """Part mounted on a vehicle."""

    name: str
    description: str
    price: Decimal
    type: AccessoryType
    vehicle_id: Optional[int] = None
    vehicle_display_name: Optional[str] = None  # resolved by the repository
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Validate accessory price."""
        self.validate_price()

    def validate_price(self) -> None:
        """Reject prices that are not strictly positive."""
        if self.price is None or Decimal(self.price) <= 0:
            raise InvalidArgumentError("Le prix doit être supérieur à 0")
