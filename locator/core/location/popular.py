"""Curated list of popular UK locations used for autocomplete."""

from locator.core.location.models import Location, LocationSource

# (display, lat, lng)
_POPULAR_UK_CITIES: tuple[tuple[str, float, float], ...] = (
    ("London", 51.5074, -0.1278),
    ("Manchester", 53.4808, -2.2426),
    ("Birmingham", 52.4862, -1.8904),
    ("Leeds", 53.8008, -1.5491),
    ("Glasgow", 55.8642, -4.2518),
    ("Liverpool", 53.4084, -2.9916),
    ("Edinburgh", 55.9533, -3.1883),
    ("Sheffield", 53.3811, -1.4701),
    ("Bristol", 51.4545, -2.5879),
    ("Newcastle", 54.9783, -1.6178),
    ("Cardiff", 51.4816, -3.1791),
    ("Nottingham", 52.9548, -1.1581),
    ("Cambridge", 52.2053, 0.1218),
    ("Oxford", 51.7520, -1.2577),
    ("Brighton", 50.8225, -0.1372),
)

POPULAR_LOCATIONS: tuple[Location, ...] = tuple(
    Location(display=name, lat=lat, lng=lng, source=LocationSource.POPULAR)
    for name, lat, lng in _POPULAR_UK_CITIES
)

DEFAULT_LOCATION = Location(
    display="Leeds, UK",
    lat=53.8008,
    lng=-1.5491,
    source=LocationSource.DEFAULT,
)


def get_popular_locations() -> list[Location]:
    return list(POPULAR_LOCATIONS)


def filter_popular(query: str) -> list[Location]:
    """Popular locations whose name contains ``query``, ignoring case."""
    needle = (query or "").lower()
    return [loc for loc in POPULAR_LOCATIONS if needle in loc.display.lower()]
