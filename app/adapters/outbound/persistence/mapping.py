"""Conversions between ORM models and domain entities."""

from datetime import datetime, timezone
from typing import Optional

from app.adapters.outbound.persistence.models import AccessoryModel, GarageModel, VehicleModel
from app.domain.entities.accessory import Accessory
from app.domain.entities.garage import Garage
from app.domain.entities.vehicle import Vehicle


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Make a datetime timezone-aware (SQLite returns naive datetimes)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def accessory_to_entity(
    model: AccessoryModel, vehicle_display_name: Optional[str] = None
) -> Accessory:
    """
    Convert AccessoryModel to Accessory entity.

    Args:
        model: SQLAlchemy model instance
        vehicle_display_name: Label of the owning vehicle, loaded from the model when omitted

    Returns:
        Accessory entity
    """
    if vehicle_display_name is None and model.vehicle is not None:
        vehicle = model.vehicle
        vehicle_display_name = f"{vehicle.brand} {vehicle.model} ({vehicle.year_of_manufacture})"

    return Accessory(
        id=model.id,
        name=model.name,
        description=model.description,
        price=model.price,
        type=model.type,
        vehicle_id=model.vehicle_id,
        vehicle_display_name=vehicle_display_name,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


def vehicle_to_entity(model: VehicleModel, garage_name: Optional[str] = None) -> Vehicle:
    """
    Convert VehicleModel to Vehicle entity, accessories included.

    Args:
        model: SQLAlchemy model instance
        garage_name: Name of the owning garage, loaded from the model when omitted

    Returns:
        Vehicle entity
    """
    if garage_name is None and model.garage is not None:
        garage_name = model.garage.name

    vehicle = Vehicle(
        id=model.id,
        brand=model.brand,
        model=model.model,
        year_of_manufacture=model.year_of_manufacture,
        fuel_type=model.fuel_type,
        vin=model.vin,
        color=model.color,
        mileage=model.mileage,
        garage_id=model.garage_id,
        garage_name=garage_name,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )
    vehicle.accessories = [
        accessory_to_entity(accessory, vehicle.display_name()) for accessory in model.accessories
    ]
    return vehicle


def garage_to_entity(model: GarageModel) -> Garage:
    """
    Convert GarageModel to Garage entity, vehicles included.

    Args:
        model: SQLAlchemy model instance

    Returns:
        Garage entity
    """
    return Garage(
        id=model.id,
        name=model.name,
        address=model.address,
        telephone=model.telephone,
        email=model.email,
        opening_hours={row.day_of_week: row.hours for row in model.opening_hours},
        vehicles=[vehicle_to_entity(vehicle, model.name) for vehicle in model.vehicles],
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )
