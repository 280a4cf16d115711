"""Location domain models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LocationSource(str, Enum):
    """Provenance of a location record."""

    GEOLOCATION = "geolocation"
    GEOCODE = "geocode"
    DEFAULT = "default"
    POPULAR = "popular"


class Coordinate(BaseModel):
    """A validated point."""

    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(..., ge=-180, le=180, allow_inf_nan=False)

    model_config = ConfigDict(frozen=True)


class Address(BaseModel):
    """Structured address parts as returned by the provider."""

    city: str | None = Field(None, description="City, town or village")
    county: str | None = None
    state: str | None = None
    postcode: str | None = None
    country: str | None = None

    model_config = ConfigDict(frozen=True)


class BoundingBox(BaseModel):
    """Geographic bounding box."""

    north: float = Field(..., description="Northern latitude boundary")
    south: float = Field(..., description="Southern latitude boundary")
    east: float = Field(..., description="Eastern longitude boundary")
    west: float = Field(..., description="Western longitude boundary")

    model_config = ConfigDict(frozen=True)

    def contains(self, lat: float, lng: float) -> bool:
        """Whether the point lies inside the box, edges included."""
        return self.south <= lat <= self.north and self.west <= lng <= self.east


class Location(BaseModel):
    """A resolved place."""

    display: str = Field(..., description="Human-readable label")
    lat: float = Field(..., description="Latitude in decimal degrees")
    lng: float = Field(..., description="Longitude in decimal degrees")
    source: LocationSource
    accuracy: float | None = Field(
        None, description="Fix accuracy in meters, device locations only"
    )
    address: Address | None = None
    bounding_box: BoundingBox | None = None
    importance: float | None = None
    type: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> tuple[float, float]:
        """Identity used when de-duplicating search results."""
        return (self.lat, self.lng)


class Distance(BaseModel):
    """Great-circle distance between two points."""

    meters: int
    kilometers: float
    miles: float

    model_config = ConfigDict(frozen=True)


class RegionInfo(BaseModel):
    """Coarse region for a reverse-geocoded point."""

    city: str | None = None
    county: str | None = None
    country: str | None = None


class ReverseGeocodeResult(BaseModel):
    """Label and region resolved for one coordinate pair."""

    display: str
    region: RegionInfo

    model_config = ConfigDict(frozen=True)


class CacheInfo(BaseModel):
    """Diagnostic view of the location cache."""

    size: int
    ttl: int = Field(..., description="Entry lifetime in milliseconds")
    keys: list[str]
