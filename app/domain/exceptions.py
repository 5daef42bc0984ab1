"""Domain exceptions for garage management."""

from typing import Any, Optional


class BusinessError(Exception):
    """Base class for business rule violations."""

    def __init__(self, message: str, error_code: Optional[str] = None) -> None:
        """
        Initialize business error.

        Args:
            message: Human readable message (French)
            error_code: Stable error code, defaults to the exception class name
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or type(self).__name__


class ResourceNotFoundError(BusinessError):
    """Raised when a requested resource does not exist."""

    def __init__(self, resource: str, resource_id: Any) -> None:
        super().__init__(f"{resource} avec l'ID {resource_id} n'a pas été trouvé")
        self.resource = resource
        self.resource_id = resource_id


class GarageNotFoundError(ResourceNotFoundError):
    """Raised when a garage does not exist."""

    def __init__(self, garage_id: Any) -> None:
        super().__init__("Garage", garage_id)


class VehicleNotFoundError(ResourceNotFoundError):
    """Raised when a vehicle does not exist."""

    def __init__(self, vehicle_id: Any) -> None:
        super().__init__("Véhicule", vehicle_id)


class AccessoryNotFoundError(ResourceNotFoundError):
    """Raised when an accessory does not exist."""

    def __init__(self, accessory_id: Any) -> None:
        super().__init__("Accessoire", accessory_id)


class VehicleQuotaExceededError(BusinessError):
    """Raised when a garage already holds its maximum number of vehicles."""

    def __init__(self, garage_ref: Any, max_vehicles: int) -> None:
        """
        Initialize quota error.

        Args:
            garage_ref: Garage ID, or garage name when the garage is not persisted yet
            max_vehicles: Quota that was reached
        """
        if isinstance(garage_ref, int):
            message = (
                f"Le garage avec l'ID {garage_ref} a atteint le quota maximum "
                f"de {max_vehicles} véhicules"
            )
        else:
            message = (
                f"Le garage '{garage_ref}' a atteint le quota maximum "
                f"de {max_vehicles} véhicules"
            )
        super().__init__(message)
        self.garage_ref = garage_ref
        self.max_vehicles = max_vehicles


class InvalidOpeningHoursError(BusinessError):
    """Raised when opening hours of a day cannot be parsed or are inconsistent."""

    def __init__(self, day: Any, reason: str) -> None:
        day_label = getattr(day, "value", day)
        super().__init__(f"Horaires d'ouverture invalides pour {day_label}: {reason}")
        self.day = day
        self.reason = reason


class InvalidArgumentError(BusinessError):
    """Raised when an input is rejected by a service rule."""


class DuplicateEmailError(InvalidArgumentError):
    """Raised when another garage already uses the email."""

    def __init__(self) -> None:
        super().__init__("Un garage avec cet email existe déjà")


class DuplicateVinError(InvalidArgumentError):
    """Raised when another vehicle already uses the VIN."""

    def __init__(self) -> None:
        super().__init__("Un véhicule avec ce VIN existe déjà")


class InvalidYearOfManufactureError(InvalidArgumentError):
    """Raised when the year of manufacture lies too far in the future."""

    def __init__(self, year: int) -> None:
        super().__init__("L'année de fabrication ne peut pas être dans le futur")
        self.year = year


class EventPublicationError(Exception):
    """Raised when an event could not be delivered to the message broker."""
