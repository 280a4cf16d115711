"""Display helpers for addresses and distances."""

from collections.abc import Mapping
from typing import Any

from locator.core.location.geometry import round_half_up
from locator.core.location.models import Distance, RegionInfo

HOME_COUNTRY_SHORT = "UK"


def _address_parts(address: Any) -> Mapping[str, Any]:
    """The provider's address object; anything that is not a mapping is absent."""
    return address if isinstance(address, Mapping) else {}


def _part(address: Mapping[str, Any], key: str) -> str | None:
    value = address.get(key)
    return value if isinstance(value, str) and value else None


def _locality(address: Mapping[str, Any]) -> str | None:
    return _part(address, "city") or _part(address, "town") or _part(address, "village")


def format_address(
    address: Mapping[str, Any] | None,
    home_country: str = "United Kingdom",
    fallback: str | None = None,
) -> str:
    """Reduce provider address parts to a short label.

    Locality first (city, town or village), then the county unless it repeats
    the locality, then the country unless it is ``home_country``. When nothing
    qualifies, ``fallback`` (the provider's full display name) is used.

    Args:
        address: Raw ``address`` object from the provider
        home_country: Country name left off domestic results
        fallback: Full formatted address to use when no parts qualify

    Returns:
        The label, or an empty string
    """
    parts: list[str] = []
    address = _address_parts(address)

    locality = _locality(address)
    if locality:
        parts.append(locality)

    county = _part(address, "county")
    if county and county not in parts:
        parts.append(county)

    country = _part(address, "country")
    if country and country != home_country:
        parts.append(country)

    if parts:
        return ", ".join(parts)
    return fallback or _part(address, "display_name") or ""


def region_from_address(
    address: Mapping[str, Any] | None,
    home_country: str = "United Kingdom",
    fallback: str | None = None,
) -> RegionInfo:
    """City, county and country from provider address parts.

    The home country, or a missing one, is reported as ``UK``. Without a
    usable address the label in ``fallback`` is split instead, taking the
    country from its last part.
    """
    address = _address_parts(address)
    locality = _locality(address)
    county = _part(address, "county")
    country = _part(address, "country")

    if not (locality or county or country):
        parts = [p for p in (fallback or "").split(", ") if p]
        locality = parts[0] if parts else None
        country = parts[-1] if len(parts) > 1 else None

    if not country or country == home_country:
        country = HOME_COUNTRY_SHORT
    return RegionInfo(city=locality, county=county, country=country)


def format_coordinates(lat: float, lng: float) -> str:
    """Numeric label used when no address is available."""
    return f"{lat:.4f}, {lng:.4f}"


def format_distance(distance: Distance | None) -> str:
    if distance is None:
        return ""
    if distance.miles < 1:
        return "Less than 1 mile"
    if distance.miles < 10:
        return f"{distance.miles:g} miles"
    return f"{int(round_half_up(distance.miles))} miles"
