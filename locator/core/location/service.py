"""Location resolution service.

This module provides the location service used by the UI layer. It:
- Forward geocodes free text into ranked candidates
- Reverse geocodes coordinates into short display labels
- Caches both for a fixed TTL to deduplicate repeated lookups
- Merges live results with a curated popular-locations list for autocomplete
- Resolves device positions, degrading to numeric labels when enrichment fails
"""

from collections.abc import Iterable
from typing import Any

from locator.core.config import Settings, settings as default_settings
from locator.core.events import CACHE_LOOKUPS
from locator.core.location.cache import LocationCache
from locator.core.location.client import NominatimClient
from locator.core.location.exceptions import (
    GeocoderUnavailableError,
    InvalidCoordinatesError,
    InvalidPostcodeError,
    InvalidQueryError,
    LocationNotFoundError,
    ProviderStatusError,
    ProviderTransportError,
)
from locator.core.location.formatting import (
    format_address,
    format_distance,
    region_from_address,
)
from locator.core.location.geolocation import (
    DeviceGeolocationAdapter,
    PositionOptions,
    PositionProvider,
)
from locator.core.location.geometry import calculate_bounds, calculate_distance
from locator.core.location.models import (
    Address,
    BoundingBox,
    CacheInfo,
    Distance,
    Location,
    LocationSource,
    RegionInfo,
    ReverseGeocodeResult,
)
from locator.core.location.popular import (
    DEFAULT_LOCATION,
    filter_popular,
    get_popular_locations,
)
from locator.core.location.validators import (
    is_valid_coordinates,
    is_valid_uk_postcode,
    is_within_uk,
)
from locator.core.logging import get_logger

logger = get_logger(__name__)

SHORT_QUERY_LENGTH = 2
MERGE_POPULAR_BELOW = 4


def _to_float(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def parse_search_result(result: Any) -> Location | None:
    """Turn one provider candidate into a Location.

    Optional provider fields that are missing stay None. Candidates without
    usable coordinates, and entries that are not objects, are dropped.
    """
    if not isinstance(result, dict):
        return None
    lat = _to_float(result.get("lat"))
    lng = _to_float(result.get("lon"))
    if lat is None or lng is None or not is_valid_coordinates(lat, lng):
        return None

    raw_address = result.get("address")
    address = None
    if isinstance(raw_address, dict):
        address = Address(
            city=_text(raw_address.get("city"))
            or _text(raw_address.get("town"))
            or _text(raw_address.get("village")),
            county=_text(raw_address.get("county")),
            state=_text(raw_address.get("state")),
            postcode=_text(raw_address.get("postcode")),
            country=_text(raw_address.get("country")),
        )

    bounding_box = None
    raw_box = result.get("boundingbox")
    if isinstance(raw_box, list) and len(raw_box) == 4:
        # Provider order is [south, north, west, east]
        south, north, west, east = (_to_float(v) for v in raw_box)
        if None not in (south, north, west, east):
            bounding_box = BoundingBox(north=north, south=south, east=east, west=west)

    return Location(
        display=_text(result.get("display_name")) or f"{lat}, {lng}",
        lat=lat,
        lng=lng,
        source=LocationSource.GEOCODE,
        address=address,
        bounding_box=bounding_box,
        importance=_to_float(result.get("importance")),
        type=_text(result.get("type")),
    )


class LocationService:
    """Resolution and caching layer in front of the geocoding provider."""

    def __init__(
        self,
        client: NominatimClient,
        cache: LocationCache[Any] | None = None,
        settings: Settings | None = None,
        position_provider: PositionProvider | None = None,
    ) -> None:
        """
        Args:
            client: Provider client
            cache: Shared cache for forward and reverse results
            settings: Service configuration
            position_provider: Host geolocation capability, None if unavailable
        """
        self.settings = settings or default_settings
        self.client = client
        if cache is None:
            cache = LocationCache(ttl_ms=self.settings.cache_ttl_ms)
        self.cache: LocationCache[Any] = cache
        self.position_provider = position_provider
        self.position_options = PositionOptions(
            enable_high_accuracy=True,
            timeout=self.settings.GEOLOCATION_TIMEOUT_SECONDS,
            maximum_age=self.settings.GEOLOCATION_MAXIMUM_AGE_SECONDS,
        )

    # Forward geocoding

    async def geocode(self, query: str) -> list[Location]:
        """Resolve free text into candidates, in provider order.

        Raises:
            InvalidQueryError: Query is empty or not a string
            LocationNotFoundError: Provider answered non-2xx or with no results
            GeocoderUnavailableError: Provider could not be reached
        """
        if not isinstance(query, str) or not query.strip():
            raise InvalidQueryError()

        cache_key = f"geocode_{query.lower().strip()}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            CACHE_LOOKUPS.labels(kind="geocode", outcome="hit").inc()
            logger.debug("geocode_cache_hit", query=query)
            return list(cached)
        CACHE_LOOKUPS.labels(kind="geocode", outcome="miss").inc()

        try:
            results = await self.client.search(query)
        except ProviderStatusError as e:
            logger.warning("geocode_failed", query=query, status=e.status_code)
            raise LocationNotFoundError(
                f'No location found for "{query}"'
            ) from e
        except ProviderTransportError as e:
            logger.error("geocode_failed", query=query, error=str(e))
            raise GeocoderUnavailableError(
                f'Failed to find location "{query}". '
                "Please try a different search term."
            ) from e

        locations = [
            loc for loc in (parse_search_result(r) for r in results) if loc is not None
        ]
        if not locations:
            logger.info("geocode_no_results", query=query)
            raise LocationNotFoundError(f'No location found for "{query}"')

        self.cache.set(cache_key, locations)
        logger.debug("geocode_cached", query=query, count=len(locations))
        return list(locations)

    async def geocode_postcode(self, postcode: str) -> Location:
        """Resolve a UK postcode to its best candidate."""
        if not isinstance(postcode, str) or not postcode.strip():
            raise InvalidPostcodeError("Invalid postcode")
        if not is_valid_uk_postcode(postcode):
            raise InvalidPostcodeError("Invalid UK postcode format")

        results = await self.geocode(postcode.strip())
        if not results:
            raise LocationNotFoundError("Postcode not found")
        return results[0]

    # Reverse geocoding

    def _reverse_cache_key(self, lat: float, lng: float) -> str:
        precision = self.settings.REVERSE_CACHE_PRECISION
        if precision is None:
            return f"reverse_{lat}_{lng}"
        return f"reverse_{lat:.{precision}f}_{lng:.{precision}f}"

    async def _reverse_lookup(
        self, lat: float, lng: float
    ) -> ReverseGeocodeResult | None:
        if not is_valid_coordinates(lat, lng):
            raise InvalidCoordinatesError()

        cache_key = self._reverse_cache_key(lat, lng)
        cached = self.cache.get(cache_key)
        if cached is not None:
            CACHE_LOOKUPS.labels(kind="reverse", outcome="hit").inc()
            return cached
        CACHE_LOOKUPS.labels(kind="reverse", outcome="miss").inc()

        try:
            result = await self.client.reverse(lat, lng)
        except (ProviderStatusError, ProviderTransportError) as e:
            logger.warning("reverse_geocode_failed", lat=lat, lng=lng, error=str(e))
            return None

        if not result or result.get("error"):
            logger.info(
                "reverse_geocode_no_address", lat=lat, lng=lng, error=result.get("error")
            )
            return None

        address = result.get("address")
        display = format_address(
            address,
            home_country=self.settings.HOME_COUNTRY,
            fallback=_text(result.get("display_name")),
        )
        lookup = ReverseGeocodeResult(
            display=display,
            region=region_from_address(
                address, home_country=self.settings.HOME_COUNTRY, fallback=display
            ),
        )
        self.cache.set(cache_key, lookup)
        return lookup

    async def reverse_geocode(self, lat: float, lng: float) -> str | None:
        """Short label for a coordinate pair, or None if the provider fails.

        Raises:
            InvalidCoordinatesError: Coordinates are not finite and in range
        """
        lookup = await self._reverse_lookup(lat, lng)
        return lookup.display if lookup is not None else None

    async def get_region_info(self, lat: float, lng: float) -> RegionInfo | None:
        """City, county and country for a coordinate pair.

        Built from the provider's structured address; the home country is
        reported by its short name.
        """
        try:
            lookup = await self._reverse_lookup(lat, lng)
        except InvalidCoordinatesError:
            return None
        if lookup is None or not lookup.display:
            return None
        return lookup.region

    # Search / autocomplete

    async def search(self, query: str | None, include_popular: bool = True) -> list[Location]:
        """Autocomplete results; never raises on provider failure."""
        query = query or ""
        max_results = self.settings.SEARCH_MAX_RESULTS
        popular_limit = self.settings.POPULAR_RESULT_LIMIT

        if len(query) < SHORT_QUERY_LENGTH:
            return get_popular_locations()[:popular_limit] if include_popular else []

        try:
            results = await self.geocode(query)
        except Exception as e:
            logger.warning(
                "location_search_fallback",
                query=query,
                error_type=type(e).__name__,
                error=str(e),
            )
            return filter_popular(query)[:popular_limit] if include_popular else []

        if include_popular and len(query) < MERGE_POPULAR_BELOW:
            return self._merge(filter_popular(query), results)[:max_results]
        return results[:max_results]

    @staticmethod
    def _merge(*groups: Iterable[Location]) -> list[Location]:
        """Concatenate, keeping the first location seen at each coordinate."""
        seen: set[tuple[float, float]] = set()
        merged: list[Location] = []
        for group in groups:
            for location in group:
                if location.key in seen:
                    continue
                seen.add(location.key)
                merged.append(location)
        return merged

    # Device geolocation

    async def get_current_location(
        self, provider: PositionProvider | None = None
    ) -> Location:
        """Resolve the device position, falling back to a numeric label."""
        adapter = DeviceGeolocationAdapter(
            provider or self.position_provider,
            self.reverse_geocode,
            self.position_options,
        )
        return await adapter.get_current_location()

    # Pure helpers exposed to the UI layer

    @staticmethod
    def distance(point_a: Any, point_b: Any) -> Distance | None:
        return calculate_distance(point_a, point_b)

    @staticmethod
    def bounds(locations: Iterable[Any] | None) -> BoundingBox | None:
        return calculate_bounds(locations)

    @staticmethod
    def format_distance(distance: Distance | None) -> str:
        return format_distance(distance)

    @staticmethod
    def is_valid_coordinates(lat: Any, lng: Any) -> bool:
        return is_valid_coordinates(lat, lng)

    @staticmethod
    def is_valid_postcode(postcode: Any) -> bool:
        return is_valid_uk_postcode(postcode)

    @staticmethod
    def is_within_uk(lat: float, lng: float) -> bool:
        return is_within_uk(lat, lng)

    @staticmethod
    def get_default_location() -> Location:
        return DEFAULT_LOCATION

    @staticmethod
    def get_popular_locations() -> list[Location]:
        return get_popular_locations()

    # Cache management

    def clear_cache(self) -> None:
        self.cache.clear()

    def get_cache_info(self) -> CacheInfo:
        return self.cache.info()

    async def aclose(self) -> None:
        await self.client.aclose()


def create_location_service(
    settings: Settings | None = None,
    position_provider: PositionProvider | None = None,
) -> LocationService:
    """Build a service with its own client and an empty cache."""
    settings = settings or default_settings
    return LocationService(
        client=NominatimClient(settings),
        cache=LocationCache(ttl_ms=settings.cache_ttl_ms),
        settings=settings,
        position_provider=position_provider,
    )
