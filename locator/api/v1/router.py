"""API v1 router module."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from locator.api.v1.locations import router as locations_router
from locator.core.config import settings

router = APIRouter(default_response_class=JSONResponse)
router.include_router(locations_router)


# Health check endpoint


@router.get("/health")
async def health_check(request: Request) -> dict[str, object]:
    """
    Health check endpoint.

    Returns
    -------
        Dict containing health status information
    """
    service = getattr(request.app.state, "location_service", None)
    return {
        "status": "healthy" if service is not None else "starting",
        "version": settings.version,
        "cache_size": service.get_cache_info().size if service is not None else 0,
        "correlation_id": getattr(request.state, "correlation_id", None),
    }
