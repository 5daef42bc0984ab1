"""Conversions between request/response DTOs, entities and events."""

from typing import Optional

from app.application.dtos.accessory import AccessoryRequest, AccessoryResponse
from app.application.dtos.garage import GarageRequest, GarageResponse
from app.application.dtos.vehicle import VehicleRequest, VehicleResponse
from app.application.dtos.vehicle_created_event import VehicleCreatedEvent
from app.domain.entities.accessory import Accessory
from app.domain.entities.garage import Garage, normalize_email
from app.domain.entities.vehicle import Vehicle


def garage_from_request(request: GarageRequest) -> Garage:
    return Garage(
        name=request.name,
        address=request.address,
        telephone=request.telephone,
        email=normalize_email(request.email),
        opening_hours=dict(request.opening_hours),
    )


def apply_garage_request(garage: Garage, request: GarageRequest) -> None:
    """Copy the mutable fields of a request onto an existing garage."""
    garage.name = request.name
    garage.address = request.address
    garage.telephone = request.telephone
    garage.email = normalize_email(request.email)
    garage.opening_hours = dict(request.opening_hours)


def garage_to_response(
    garage: Garage, vehicles: Optional[list[Vehicle]] = None
) -> GarageResponse:
    """
    Project a garage, with quota figures.

    Args:
        garage: Garage entity
        vehicles: Vehicles to embed; the field is omitted from JSON when None

    Returns:
        GarageResponse DTO
    """
    return GarageResponse(
        id=garage.id,
        name=garage.name,
        address=garage.address,
        telephone=garage.telephone,
        email=garage.email,
        opening_hours=garage.opening_hours,
        vehicle_count=garage.vehicle_count(),
        available_capacity=garage.available_capacity(),
        is_full=garage.is_full(),
        created_at=garage.created_at,
        updated_at=garage.updated_at,
        vehicles=[vehicle_to_response(vehicle) for vehicle in vehicles]
        if vehicles is not None
        else None,
    )


def vehicle_from_request(request: VehicleRequest) -> Vehicle:
    return Vehicle(
        brand=request.brand,
        model=request.model,
        year_of_manufacture=request.year_of_manufacture,
        fuel_type=request.fuel_type,
        vin=request.vin,
        color=request.color,
        mileage=request.mileage,
    )


def apply_vehicle_request(vehicle: Vehicle, request: VehicleRequest) -> None:
    """Copy the mutable fields of a request onto an existing vehicle."""
    vehicle.brand = request.brand
    vehicle.model = request.model
    vehicle.year_of_manufacture = request.year_of_manufacture
    vehicle.fuel_type = request.fuel_type
    vehicle.vin = request.vin
    vehicle.color = request.color
    vehicle.mileage = request.mileage


def vehicle_to_response(vehicle: Vehicle) -> VehicleResponse:
    return VehicleResponse(
        id=vehicle.id,
        brand=vehicle.brand,
        model=vehicle.model,
        year_of_manufacture=vehicle.year_of_manufacture,
        fuel_type=vehicle.fuel_type,
        vin=vehicle.vin,
        color=vehicle.color,
        mileage=vehicle.mileage,
        garage_id=vehicle.garage_id,
        garage_name=vehicle.garage_name,
        accessory_count=vehicle.accessory_count(),
        is_eco_friendly=vehicle.is_eco_friendly(),
        display_name=vehicle.display_name(),
        created_at=vehicle.created_at,
        updated_at=vehicle.updated_at,
    )


def accessory_from_request(request: AccessoryRequest) -> Accessory:
    return Accessory(
        name=request.name,
        description=request.description,
        price=request.price,
        type=request.type,
    )


def apply_accessory_request(accessory: Accessory, request: AccessoryRequest) -> None:
    """Copy the mutable fields of a request onto an existing accessory."""
    accessory.name = request.name
    accessory.description = request.description
    accessory.price = request.price
    accessory.type = request.type
    accessory.validate_price()


def accessory_to_response(accessory: Accessory) -> AccessoryResponse:
    return AccessoryResponse(
        id=accessory.id,
        name=accessory.name,
        description=accessory.description,
        price=accessory.price,
        type=accessory.type,
        vehicle_id=accessory.vehicle_id,
        vehicle_display_name=accessory.vehicle_display_name,
        created_at=accessory.created_at,
        updated_at=accessory.updated_at,
    )


def vehicle_created_event(vehicle: Vehicle, event_id: str) -> VehicleCreatedEvent:
    """
    Build the creation event of a persisted vehicle.

    Args:
        vehicle: Persisted vehicle (identity, garage and timestamps set)
        event_id: Fresh unique identifier of the event

    Returns:
        VehicleCreatedEvent DTO
    """
    return VehicleCreatedEvent(
        vehicle_id=vehicle.id,
        brand=vehicle.brand,
        model=vehicle.model,
        year_of_manufacture=vehicle.year_of_manufacture,
        fuel_type=vehicle.fuel_type,
        vin=vehicle.vin,
        garage_id=vehicle.garage_id,
        garage_name=vehicle.garage_name,
        created_at=vehicle.created_at,
        event_id=event_id,
    )
