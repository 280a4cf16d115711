"""Shared fakes and provider payloads for the test suite."""

from typing import Any

import httpx

LONDON_SEARCH: list[dict[str, Any]] = [
    {
        "place_id": 1,
        "display_name": "London, Greater London, England, United Kingdom",
        "lat": "51.5073219",
        "lon": "-0.1276474",
        "importance": 0.9307827616237295,
        "type": "city",
        "boundingbox": ["51.2867601", "51.6918741", "-0.5103751", "0.3340155"],
        "address": {
            "city": "London",
            "state_district": "Greater London",
            "state": "England",
            "country": "United Kingdom",
        },
    },
    {
        "place_id": 2,
        "display_name": "London, Middlesex County, Ontario, Canada",
        "lat": "42.9832406",
        "lon": "-81.243372",
        "importance": 0.62,
        "type": "city",
        "boundingbox": ["42.824", "43.073", "-81.391", "-81.102"],
        "address": {
            "city": "London",
            "county": "Middlesex County",
            "state": "Ontario",
            "country": "Canada",
        },
    },
]

WHITEHALL_REVERSE: dict[str, Any] = {
    "place_id": 3,
    "display_name": "Whitehall, Westminster, London, Greater London, England, "
    "SW1A 2DX, United Kingdom",
    "lat": "51.5074",
    "lon": "-0.1278",
    "address": {
        "road": "Whitehall",
        "city": "London",
        "state": "England",
        "postcode": "SW1A 2DX",
        "country": "United Kingdom",
    },
}


class FakeClock:
    """Epoch-millisecond clock the tests move by hand."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class ProviderStub:
    """Stands in for the Nominatim endpoints behind an httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.search_status = 200
        self.search_body: Any = LONDON_SEARCH
        self.reverse_status = 200
        self.reverse_body: Any = WHITEHALL_REVERSE
        self.fail_with: type[httpx.TransportError] | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with("provider unreachable", request=request)
        if request.url.path.endswith("/search"):
            return httpx.Response(self.search_status, json=self.search_body)
        if request.url.path.endswith("/reverse"):
            return httpx.Response(self.reverse_status, json=self.reverse_body)
        return httpx.Response(404, json={"error": "unknown endpoint"})

    def calls(self, endpoint: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(f"/{endpoint}")]
