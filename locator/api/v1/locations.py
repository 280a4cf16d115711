"""Locations API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from locator.api.v1.models import (
    BoundsRequest,
    DistanceRequest,
    DistanceResponse,
    PositionReport,
    ReverseGeocodeResponse,
    ValidationResponse,
)
from locator.core.location.geolocation import DevicePosition, ReportedPositionProvider
from locator.core.location.models import BoundingBox, CacheInfo, Location, RegionInfo
from locator.core.location.service import LocationService

router = APIRouter(prefix="/locations", tags=["locations"])


def get_location_service(request: Request) -> LocationService:
    """Service created at startup and stored on the application state."""
    service = getattr(request.app.state, "location_service", None)
    if service is None:
        raise HTTPException(
            status_code=HTTP_503_SERVICE_UNAVAILABLE,
            detail="Location service is not running",
        )
    return service


@router.get("/geocode", response_model=list[Location])
async def geocode(
    q: str = Query(..., min_length=1, description="Free-text location"),
    service: LocationService = Depends(get_location_service),
) -> list[Location]:
    """Forward geocode a query into ranked candidates."""
    return await service.geocode(q)


@router.get("/postcode/{postcode}", response_model=Location)
async def geocode_postcode(
    postcode: str,
    service: LocationService = Depends(get_location_service),
) -> Location:
    return await service.geocode_postcode(postcode)


@router.get("/reverse", response_model=ReverseGeocodeResponse)
async def reverse_geocode(
    lat: float = Query(...),
    lng: float = Query(...),
    service: LocationService = Depends(get_location_service),
) -> ReverseGeocodeResponse:
    """Short display label for coordinates; ``display`` is null on provider failure."""
    display = await service.reverse_geocode(lat, lng)
    return ReverseGeocodeResponse(lat=lat, lng=lng, display=display)


@router.get("/region", response_model=RegionInfo | None)
async def region_info(
    lat: float = Query(...),
    lng: float = Query(...),
    service: LocationService = Depends(get_location_service),
) -> RegionInfo | None:
    return await service.get_region_info(lat, lng)


@router.get("/search", response_model=list[Location])
async def search(
    q: str = Query("", description="Partial location typed by the user"),
    include_popular: bool = Query(True),
    service: LocationService = Depends(get_location_service),
) -> list[Location]:
    """Autocomplete; falls back to popular locations when the provider fails."""
    return await service.search(q, include_popular=include_popular)


@router.post("/distance", response_model=DistanceResponse)
async def distance(
    body: DistanceRequest,
    service: LocationService = Depends(get_location_service),
) -> DistanceResponse:
    result = service.distance(body.origin, body.destination)
    return DistanceResponse(distance=result, formatted=service.format_distance(result))


@router.post("/bounds", response_model=BoundingBox | None)
async def bounds(
    body: BoundsRequest,
    service: LocationService = Depends(get_location_service),
) -> BoundingBox | None:
    return service.bounds(body.locations)


@router.post("/current", response_model=Location)
async def current_location(
    report: PositionReport,
    service: LocationService = Depends(get_location_service),
) -> Location:
    """Resolve a position fix reported by the browser."""
    if report.coords is not None:
        provider = ReportedPositionProvider(
            position=DevicePosition(
                latitude=report.coords.latitude,
                longitude=report.coords.longitude,
                accuracy=report.coords.accuracy,
            )
        )
    elif report.error is not None:
        provider = ReportedPositionProvider(error_code=report.error.code)
    else:
        provider = None
    return await service.get_current_location(provider)


@router.get("/default", response_model=Location)
async def default_location(
    service: LocationService = Depends(get_location_service),
) -> Location:
    return service.get_default_location()


@router.get("/popular", response_model=list[Location])
async def popular_locations(
    service: LocationService = Depends(get_location_service),
) -> list[Location]:
    return service.get_popular_locations()


@router.get("/validate/coordinates", response_model=ValidationResponse)
async def validate_coordinates(
    lat: float = Query(...),
    lng: float = Query(...),
    service: LocationService = Depends(get_location_service),
) -> ValidationResponse:
    valid = service.is_valid_coordinates(lat, lng)
    return ValidationResponse(
        valid=valid, within_uk=service.is_within_uk(lat, lng) if valid else None
    )


@router.get("/validate/postcode/{postcode}", response_model=ValidationResponse)
async def validate_postcode(
    postcode: str,
    service: LocationService = Depends(get_location_service),
) -> ValidationResponse:
    return ValidationResponse(valid=service.is_valid_postcode(postcode))


@router.get("/cache", response_model=CacheInfo)
async def cache_info(
    service: LocationService = Depends(get_location_service),
) -> CacheInfo:
    return service.get_cache_info()


@router.delete("/cache", response_model=CacheInfo)
async def clear_cache(
    service: LocationService = Depends(get_location_service),
) -> CacheInfo:
    service.clear_cache()
    return service.get_cache_info()
