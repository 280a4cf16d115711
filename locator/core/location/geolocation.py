"""Device geolocation adapter.

Wraps a host "current position" capability, enriches the fix through reverse
geocoding and normalises platform failures into :class:`GeolocationError`.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol

from locator.core.location.exceptions import (
    GeolocationError,
    GeolocationUnsupportedError,
)
from locator.core.location.formatting import format_coordinates
from locator.core.location.models import Location, LocationSource
from locator.core.logging import get_logger

logger = get_logger(__name__)

ReverseGeocoder = Callable[[float, float], Awaitable[str | None]]


class PositionErrorCode(IntEnum):
    """Standard platform failure codes."""

    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


ERROR_MESSAGES: dict[int, str] = {
    PositionErrorCode.PERMISSION_DENIED: "Location access denied by user",
    PositionErrorCode.POSITION_UNAVAILABLE: "Location information is unavailable",
    PositionErrorCode.TIMEOUT: "Location request timed out",
}
GENERIC_ERROR_MESSAGE = "Failed to get your location"


class PositionError(Exception):
    """Raised by a position provider that could not produce a fix."""

    def __init__(self, code: int, message: str = "") -> None:
        super().__init__(message or f"Position error {code}")
        self.code = code


@dataclass(frozen=True)
class PositionOptions:
    enable_high_accuracy: bool = True
    timeout: float = 10.0  # seconds
    maximum_age: float = 300.0  # seconds a cached fix may be reused


@dataclass(frozen=True)
class DevicePosition:
    latitude: float
    longitude: float
    accuracy: float | None = None


class PositionProvider(Protocol):
    """The host's current-position capability."""

    async def get_current_position(self, options: PositionOptions) -> DevicePosition: ...


@dataclass(frozen=True)
class EnrichmentSkipped:
    """Reverse geocoding produced no label; the fix is still usable."""

    reason: str


def error_message(code: int | None) -> str:
    if code is None:
        return GENERIC_ERROR_MESSAGE
    return ERROR_MESSAGES.get(code, GENERIC_ERROR_MESSAGE)


class DeviceGeolocationAdapter:
    """Single-attempt device location lookup."""

    def __init__(
        self,
        provider: PositionProvider | None,
        reverse_geocode: ReverseGeocoder,
        options: PositionOptions | None = None,
    ) -> None:
        self.provider = provider
        self.reverse_geocode = reverse_geocode
        self.options = options or PositionOptions()

    async def get_current_location(self) -> Location:
        """Resolve the device position into a ``geolocation`` Location.

        Raises:
            GeolocationUnsupportedError: No provider is available
            GeolocationError: The provider failed or timed out
        """
        if self.provider is None:
            raise GeolocationUnsupportedError()

        position = await self._get_position(self.provider)
        lat, lng = position.latitude, position.longitude

        label = await self._describe(lat, lng)
        if isinstance(label, EnrichmentSkipped):
            logger.info("geolocation_enrichment_skipped", reason=label.reason)
            display = format_coordinates(lat, lng)
        else:
            display = label

        return Location(
            display=display,
            lat=lat,
            lng=lng,
            accuracy=position.accuracy,
            source=LocationSource.GEOLOCATION,
        )

    async def _get_position(self, provider: PositionProvider) -> DevicePosition:
        try:
            return await asyncio.wait_for(
                provider.get_current_position(self.options),
                timeout=self.options.timeout,
            )
        except PositionError as e:
            logger.warning("geolocation_failed", code=e.code)
            raise GeolocationError(error_message(e.code), code=e.code) from e
        except asyncio.TimeoutError as e:
            logger.warning("geolocation_timed_out", timeout=self.options.timeout)
            raise GeolocationError(
                error_message(PositionErrorCode.TIMEOUT),
                code=int(PositionErrorCode.TIMEOUT),
            ) from e

    async def _describe(self, lat: float, lng: float) -> str | EnrichmentSkipped:
        try:
            label = await self.reverse_geocode(lat, lng)
        except Exception as e:
            return EnrichmentSkipped(reason=f"{type(e).__name__}: {e}")
        if not label:
            return EnrichmentSkipped(reason="no address for coordinates")
        return label


class ReportedPositionProvider:
    """Replays a fix (or failure) reported by a browser client."""

    def __init__(
        self,
        position: DevicePosition | None = None,
        error_code: int | None = None,
    ) -> None:
        if position is None and error_code is None:
            raise ValueError("Either a position or an error code is required")
        self.position = position
        self.error_code = error_code

    async def get_current_position(self, options: PositionOptions) -> DevicePosition:
        if self.position is None:
            raise PositionError(self.error_code or 0)
        return self.position
