"""Distance and bounds calculations.

Both operations are pure: nothing here is cached and results depend only on
the inputs.
"""

import math
from collections.abc import Iterable
from math import asin, cos, radians, sin, sqrt
from typing import Any

from locator.core.location.models import BoundingBox, Distance
from locator.core.location.validators import is_number

EARTH_RADIUS_METERS = 6371000
METERS_PER_MILE = 1609.34
SINGLE_POINT_OFFSET = 0.01  # degrees
BOUNDS_PADDING_RATIO = 0.1


def round_half_up(value: float, places: int = 0) -> float:
    """Round with halves going up, unlike the built-in banker's rounding."""
    factor = 10**places
    return math.floor(value * factor + 0.5) / factor


def _coordinates(point: Any) -> tuple[float, float] | None:
    """Pull (lat, lng) from a model, an object or a mapping."""
    if point is None:
        return None
    if isinstance(point, dict):
        lat, lng = point.get("lat"), point.get("lng")
    else:
        lat, lng = getattr(point, "lat", None), getattr(point, "lng", None)
    if not (is_number(lat) and is_number(lng)):
        return None
    return float(lat), float(lng)


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the great circle distance between two points in meters."""
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # a can drift just past 1.0 for antipodal points
    c = 2 * asin(sqrt(min(1.0, a)))

    return EARTH_RADIUS_METERS * c


def calculate_distance(point_a: Any, point_b: Any) -> Distance | None:
    """Distance between two points, or None if either lacks coordinates."""
    a = _coordinates(point_a)
    b = _coordinates(point_b)
    if a is None or b is None:
        return None

    meters = haversine_distance(a[0], a[1], b[0], b[1])
    return Distance(
        meters=int(round_half_up(meters)),
        kilometers=round_half_up(meters / 1000, 2),
        miles=round_half_up(meters / METERS_PER_MILE, 2),
    )


def calculate_bounds(locations: Iterable[Any] | None) -> BoundingBox | None:
    """Bounding box enclosing every point that has coordinates.

    A single point gets a fixed +/-0.01 degree square. Two or more points get
    their tight box padded by 10% of its span on each axis.
    """
    if not locations:
        return None

    points = [c for c in (_coordinates(loc) for loc in locations) if c is not None]
    if not points:
        return None

    if len(points) == 1:
        lat, lng = points[0]
        return BoundingBox(
            north=lat + SINGLE_POINT_OFFSET,
            south=lat - SINGLE_POINT_OFFSET,
            east=lng + SINGLE_POINT_OFFSET,
            west=lng - SINGLE_POINT_OFFSET,
        )

    lats = [lat for lat, _ in points]
    lngs = [lng for _, lng in points]
    north, south = max(lats), min(lats)
    east, west = max(lngs), min(lngs)

    lat_padding = (north - south) * BOUNDS_PADDING_RATIO
    lng_padding = (east - west) * BOUNDS_PADDING_RATIO

    return BoundingBox(
        north=north + lat_padding,
        south=south - lat_padding,
        east=east + lng_padding,
        west=west - lng_padding,
    )
