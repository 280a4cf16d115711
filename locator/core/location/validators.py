"""Coordinate and postcode validation."""

import math
import re
from numbers import Real
from typing import Any

from locator.core.location.models import BoundingBox

# Approximate extent of the United Kingdom
UK_BOUNDS = BoundingBox(north=60.9, south=49.9, east=1.8, west=-8.6)

UK_POSTCODE_PATTERN = re.compile(
    r"^[A-Z]{1,2}[0-9][A-Z0-9]?\s?[0-9][A-Z]{2}$", re.IGNORECASE
)


def is_number(value: Any) -> bool:
    """True for finite real numbers; bools are not coordinates."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def is_valid_coordinates(lat: Any, lng: Any) -> bool:
    """Check if coordinates are valid lat/long values."""
    if not (is_number(lat) and is_number(lng)):
        return False
    return -90 <= lat <= 90 and -180 <= lng <= 180


def is_valid_uk_postcode(postcode: Any) -> bool:
    if not isinstance(postcode, str):
        return False
    return bool(UK_POSTCODE_PATTERN.match(postcode.strip()))


def is_within_uk(lat: float, lng: float) -> bool:
    """Check if coordinates fall inside the approximate UK bounds."""
    if not is_valid_coordinates(lat, lng):
        return False
    return UK_BOUNDS.contains(lat, lng)
