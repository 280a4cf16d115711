"""Location resolution and caching.

This package provides:
- Forward and reverse geocoding through a Nominatim-compatible provider
- A TTL cache in front of both
- Distance and bounding box calculations
- Autocomplete merging popular locations with live results
- A device geolocation adapter
"""

from locator.core.location.cache import LocationCache
from locator.core.location.client import NominatimClient
from locator.core.location.exceptions import (
    GeocoderUnavailableError,
    GeolocationError,
    GeolocationUnsupportedError,
    InvalidCoordinatesError,
    InvalidPostcodeError,
    InvalidQueryError,
    LocationError,
    LocationNotFoundError,
)
from locator.core.location.models import (
    BoundingBox,
    Distance,
    Location,
    LocationSource,
)
from locator.core.location.service import LocationService, create_location_service

__all__ = [
    "LocationCache",
    "NominatimClient",
    "LocationService",
    "create_location_service",
    "BoundingBox",
    "Distance",
    "Location",
    "LocationSource",
    "LocationError",
    "InvalidCoordinatesError",
    "InvalidQueryError",
    "InvalidPostcodeError",
    "LocationNotFoundError",
    "GeocoderUnavailableError",
    "GeolocationError",
    "GeolocationUnsupportedError",
]
