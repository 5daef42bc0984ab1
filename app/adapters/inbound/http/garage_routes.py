"""Garage HTTP routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.adapters.inbound.http.pagination import page_request_params
from app.application.dtos.garage import GarageRequest, GarageResponse
from app.application.dtos.page import PageResponse
from app.application.queries.pagination import PageRequest
from app.domain.value_objects.accessory_type import AccessoryType
from app.domain.value_objects.fuel_type import FuelType
from app.infrastructure.wiring.dependencies import create_garage_service

router = APIRouter(prefix="/garages", tags=["garages"])

_garage_service = create_garage_service()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=GarageResponse)
async def create_garage(request: GarageRequest) -> GarageResponse:
    """
    Create a garage.

    Args:
        request: Garage payload

    Returns:
        Created garage
    """
    return await _garage_service.create(request)


@router.get("", response_model=PageResponse[GarageResponse])
async def list_garages(
    page_request: PageRequest = Depends(page_request_params),
) -> PageResponse[GarageResponse]:
    """List garages, by name unless another order is requested."""
    return await _garage_service.list_all(page_request)


@router.get("/search", response_model=PageResponse[GarageResponse])
async def search_garages(
    name: Optional[str] = None,
    city: Optional[str] = None,
    email: Optional[str] = None,
    fuel_type: Optional[FuelType] = Query(None, alias="fuelType"),
    accessory_type: Optional[AccessoryType] = Query(None, alias="accessoryType"),
    page_request: PageRequest = Depends(page_request_params),
) -> PageResponse[GarageResponse]:
    """
    Search garages combining any of the optional filters.

    Returns:
        Page of garages matching every given filter
    """
    return await _garage_service.search(
        page_request,
        name=name,
        city=city,
        email=email,
        fuel_type=fuel_type,
        accessory_type=accessory_type,
    )


@router.get("/search/by-name", response_model=PageResponse[GarageResponse])
async def search_garages_by_name(
    name: Optional[str] = None,
    page_request: PageRequest = Depends(page_request_params),
) -> PageResponse[GarageResponse]:
    return await _garage_service.search_by_name(name, page_request)


@router.get("/search/by-city", response_model=PageResponse[GarageResponse])
async def search_garages_by_city(
    city: Optional[str] = None,
    page_request: PageRequest = Depends(page_request_params),
) -> PageResponse[GarageResponse]:
    return await _garage_service.search_by_city(city, page_request)


@router.get("/search/by-fuel-type", response_model=PageResponse[GarageResponse])
async def search_garages_by_fuel_type(
    fuel_type: Optional[FuelType] = Query(None, alias="fuelType"),
    page_request: PageRequest = Depends(page_request_params),
) -> PageResponse[GarageResponse]:
    return await _garage_service.search_by_fuel_type(fuel_type, page_request)


@router.get("/search/by-accessory-type", response_model=PageResponse[GarageResponse])
async def search_garages_by_accessory_type(
    accessory_type: Optional[AccessoryType] = Query(None, alias="accessoryType"),
    page_request: PageRequest = Depends(page_request_params),
) -> PageResponse[GarageResponse]:
    """
    Find garages hosting a vehicle with an accessory of the type.

    Each garage embeds only its vehicles carrying such an accessory.
    """
    return await _garage_service.search_by_accessory_type(accessory_type, page_request)


@router.get("/available-capacity", response_model=PageResponse[GarageResponse])
async def garages_with_available_capacity(
    page_request: PageRequest = Depends(page_request_params),
) -> PageResponse[GarageResponse]:
    return await _garage_service.get_garages_with_available_capacity(page_request)


@router.get("/full", response_model=PageResponse[GarageResponse])
async def full_garages(
    page_request: PageRequest = Depends(page_request_params),
) -> PageResponse[GarageResponse]:
    return await _garage_service.get_full_garages(page_request)


@router.get("/count/with-vehicles")
async def count_garages_with_vehicles() -> int:
    return await _garage_service.count_garages_with_vehicles()


@router.get("/{garage_id}", response_model=GarageResponse)
async def get_garage(garage_id: int) -> GarageResponse:
    return await _garage_service.get_by_id(garage_id)


@router.put("/{garage_id}", response_model=GarageResponse)
async def update_garage(garage_id: int, request: GarageRequest) -> GarageResponse:
    return await _garage_service.update(garage_id, request)


@router.delete("/{garage_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_garage(garage_id: int) -> Response:
    """Delete a garage with all its vehicles and their accessories."""
    await _garage_service.delete(garage_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
