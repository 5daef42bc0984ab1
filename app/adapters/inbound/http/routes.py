"""HTTP routes."""

from fastapi import APIRouter, status

from app.adapters.inbound.http import accessory_routes, garage_routes, vehicle_routes

router = APIRouter()


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict[str, str]:
    """
    Health check endpoint for liveness/readiness.

    Returns:
        Health status
    """
    return {"status": "ok"}


router.include_router(garage_routes.router)
router.include_router(vehicle_routes.router)
router.include_router(accessory_routes.router)
