"""Request and response bodies for the locations API."""

from pydantic import BaseModel, ConfigDict, Field

from locator.core.location.models import Distance


class Point(BaseModel):
    """A point as sent by the UI; either coordinate may be missing."""

    lat: float | None = None
    lng: float | None = None


class DistanceRequest(BaseModel):
    origin: Point = Field(..., alias="from")
    destination: Point = Field(..., alias="to")

    model_config = ConfigDict(populate_by_name=True)


class DistanceResponse(BaseModel):
    distance: Distance | None
    formatted: str


class BoundsRequest(BaseModel):
    locations: list[Point] = Field(default_factory=list)


class ReverseGeocodeResponse(BaseModel):
    lat: float
    lng: float
    display: str | None


class ReportedCoordinates(BaseModel):
    latitude: float
    longitude: float
    accuracy: float | None = Field(None, ge=0)


class ReportedError(BaseModel):
    code: int


class PositionReport(BaseModel):
    """What the browser's getCurrentPosition call produced."""

    coords: ReportedCoordinates | None = None
    error: ReportedError | None = None


class ValidationResponse(BaseModel):
    valid: bool
    within_uk: bool | None = None
