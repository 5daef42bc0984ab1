"""Accessory HTTP routes."""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query, Response, status

from app.adapters.inbound.http.pagination import page_request_params
from app.application.dtos.accessory import AccessoryRequest, AccessoryResponse
from app.application.dtos.page import PageResponse
from app.application.queries.pagination import PageRequest
from app.domain.value_objects.accessory_type import AccessoryType
from app.infrastructure.wiring.dependencies import create_accessory_service

router = APIRouter(prefix="/accessories", tags=["accessories"])

_accessory_service = create_accessory_service()


@router.post(
    "/vehicle/{vehicle_id}", status_code=status.HTTP_201_CREATED, response_model=AccessoryResponse
)
async def add_accessory_to_vehicle(
    vehicle_id: int, request: AccessoryRequest
) -> AccessoryResponse:
    """
    Mount a new accessory on a vehicle.

    Args:
        vehicle_id: Vehicle identifier
        request: Accessory payload

    Returns:
        Created accessory
    """
    return await _accessory_service.add_to_vehicle(vehicle_id, request)


@router.get("/vehicle/{vehicle_id}", response_model=list[AccessoryResponse])
async def list_accessories_by_vehicle(vehicle_id: int) -> list[AccessoryResponse]:
    return await _accessory_service.list_by_vehicle(vehicle_id)


@router.get("/vehicle/{vehicle_id}/total-price")
async def total_price_by_vehicle(vehicle_id: int) -> float:
    """Sum of the accessory prices of a vehicle, 0 without accessories."""
    total = await _accessory_service.total_price_by_vehicle(vehicle_id)
    return float(total)


@router.get("/search/by-type", response_model=PageResponse[AccessoryResponse])
async def find_accessories_by_type(
    accessory_type: AccessoryType = Query(..., alias="type"),
    page_request: PageRequest = Depends(page_request_params),
) -> PageResponse[AccessoryResponse]:
    return await _accessory_service.find_by_type(accessory_type, page_request)


@router.get("/search/by-name", response_model=PageResponse[AccessoryResponse])
async def search_accessories_by_name(
    name: str,
    page_request: PageRequest = Depends(page_request_params),
) -> PageResponse[AccessoryResponse]:
    return await _accessory_service.search_by_name(name, page_request)


@router.get("/search/by-price", response_model=PageResponse[AccessoryResponse])
async def find_accessories_by_price_range(
    min_price: Decimal = Query(..., alias="minPrice", ge=0),
    max_price: Decimal = Query(..., alias="maxPrice", ge=0),
    page_request: PageRequest = Depends(page_request_params),
) -> PageResponse[AccessoryResponse]:
    return await _accessory_service.find_by_price_range(min_price, max_price, page_request)


@router.get("/top-expensive", response_model=list[AccessoryResponse])
async def top_expensive_accessories(
    limit: int = Query(10, ge=1, le=100),
) -> list[AccessoryResponse]:
    return await _accessory_service.find_top_expensive(limit)


@router.get("/{accessory_id}", response_model=AccessoryResponse)
async def get_accessory(accessory_id: int) -> AccessoryResponse:
    return await _accessory_service.get_by_id(accessory_id)


@router.put("/{accessory_id}", response_model=AccessoryResponse)
async def update_accessory(accessory_id: int, request: AccessoryRequest) -> AccessoryResponse:
    return await _accessory_service.update(accessory_id, request)


@router.delete("/{accessory_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_accessory(accessory_id: int) -> Response:
    await _accessory_service.delete(accessory_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
