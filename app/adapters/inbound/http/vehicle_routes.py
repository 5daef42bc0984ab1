"""Vehicle HTTP routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.adapters.inbound.http.pagination import page_request_params
from app.application.dtos.page import PageResponse
from app.application.dtos.vehicle import VehicleRequest, VehicleResponse, VehicleSearchCriteria
from app.application.queries.pagination import PageRequest
from app.domain.value_objects.fuel_type import FuelType
from app.infrastructure.wiring.dependencies import create_vehicle_service

router = APIRouter(prefix="/vehicles", tags=["vehicles"])

_vehicle_service = create_vehicle_service()


@router.post(
    "/garage/{garage_id}", status_code=status.HTTP_201_CREATED, response_model=VehicleResponse
)
async def add_vehicle_to_garage(garage_id: int, request: VehicleRequest) -> VehicleResponse:
    """
    Park a new vehicle in a garage.

    The vehicle created event is published asynchronously once the vehicle
    is committed.

    Args:
        garage_id: Garage identifier
        request: Vehicle payload

    Returns:
        Created vehicle
    """
    return await _vehicle_service.add_to_garage(garage_id, request)


@router.get("/garage/{garage_id}", response_model=PageResponse[VehicleResponse])
async def list_vehicles_by_garage(
    garage_id: int,
    page_request: PageRequest = Depends(page_request_params),
) -> PageResponse[VehicleResponse]:
    return await _vehicle_service.list_by_garage(garage_id, page_request)


@router.get("/search", response_model=PageResponse[VehicleResponse])
async def search_vehicles(
    brand: Optional[str] = None,
    model: Optional[str] = None,
    color: Optional[str] = None,
    fuel_type: Optional[FuelType] = Query(None, alias="fuelType"),
    year_of_manufacture: Optional[int] = Query(None, alias="yearOfManufacture"),
    garage_id: Optional[int] = Query(None, alias="garageId"),
    page_request: PageRequest = Depends(page_request_params),
) -> PageResponse[VehicleResponse]:
    """Search vehicles combining any of the optional criteria."""
    criteria = VehicleSearchCriteria(
        brand=brand,
        model=model,
        color=color,
        fuel_type=fuel_type,
        year_of_manufacture=year_of_manufacture,
        garage_id=garage_id,
    )
    return await _vehicle_service.search(criteria, page_request)


@router.get("/search/by-model", response_model=list[VehicleResponse])
async def find_vehicles_by_model(model: str) -> list[VehicleResponse]:
    return await _vehicle_service.find_by_model(model)


@router.get("/search/by-fuel-type", response_model=PageResponse[VehicleResponse])
async def find_vehicles_by_fuel_type(
    fuel_type: FuelType = Query(..., alias="fuelType"),
    page_request: PageRequest = Depends(page_request_params),
) -> PageResponse[VehicleResponse]:
    return await _vehicle_service.find_by_fuel_type(fuel_type, page_request)


@router.get("/eco-friendly", response_model=PageResponse[VehicleResponse])
async def eco_friendly_vehicles(
    page_request: PageRequest = Depends(page_request_params),
) -> PageResponse[VehicleResponse]:
    """List electric and hybrid vehicles."""
    return await _vehicle_service.get_eco_friendly(page_request)


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(vehicle_id: int) -> VehicleResponse:
    return await _vehicle_service.get_by_id(vehicle_id)


@router.put("/{vehicle_id}", response_model=VehicleResponse)
async def update_vehicle(vehicle_id: int, request: VehicleRequest) -> VehicleResponse:
    return await _vehicle_service.update(vehicle_id, request)


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle(vehicle_id: int) -> Response:
    await _vehicle_service.delete(vehicle_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
