"""Async client for a Nominatim-compatible geocoding provider."""

from typing import Any

import httpx

from locator.core.config import Settings
from locator.core.events import PROVIDER_REQUESTS
from locator.core.location.exceptions import (
    ProviderStatusError,
    ProviderTransportError,
)
from locator.core.logging import get_logger

logger = get_logger(__name__)


class NominatimClient:
    """Thin wrapper over the provider's ``/search`` and ``/reverse`` endpoints.

    Every request carries the configured User-Agent; Nominatim treats
    anonymous requests as malformed. Non-2xx answers raise
    :class:`ProviderStatusError`, network failures and undecodable bodies raise
    :class:`ProviderTransportError`.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            settings: Provider URL, identity and query defaults
            http_client: Client to reuse; one is created when omitted
        """
        self.base_url = settings.GEOCODER_BASE_URL
        self.country_codes = settings.GEOCODER_COUNTRY_CODES
        self.language = settings.GEOCODER_LANGUAGE
        self.limit = settings.GEOCODER_RESULT_LIMIT
        self.headers = {"User-Agent": settings.GEOCODER_USER_AGENT}
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.GEOCODER_TIMEOUT)
        )

    async def search(self, query: str) -> list[dict[str, Any]]:
        """Free-text search, results in provider relevance order."""
        params = {
            "q": query,
            "format": "json",
            "addressdetails": "1",
            "limit": str(self.limit),
            "countrycodes": self.country_codes,
            "accept-language": self.language,
        }
        data = await self._get("search", params)
        if not isinstance(data, list):
            return []
        return data

    async def reverse(self, lat: float, lng: float) -> dict[str, Any]:
        """Address lookup for a coordinate pair.

        The provider answers 200 with ``{"error": ...}`` when nothing is there;
        that body is returned as-is for the caller to inspect.
        """
        params = {
            "lat": str(lat),
            "lon": str(lng),
            "format": "json",
            "addressdetails": "1",
            "accept-language": self.language,
        }
        data = await self._get("reverse", params)
        if not isinstance(data, dict):
            return {"error": "Unexpected response shape"}
        return data

    async def _get(self, endpoint: str, params: dict[str, str]) -> Any:
        url = f"{self.base_url}/{endpoint}"
        try:
            response = await self._client.get(url, params=params, headers=self.headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            PROVIDER_REQUESTS.labels(endpoint=endpoint, outcome="status_error").inc()
            status = e.response.status_code
            logger.warning("provider_status_error", endpoint=endpoint, status=status)
            raise ProviderStatusError(
                status, f"Geocoding {endpoint} failed: {status}"
            ) from e
        except httpx.HTTPError as e:
            PROVIDER_REQUESTS.labels(endpoint=endpoint, outcome="transport_error").inc()
            logger.warning(
                "provider_transport_error",
                endpoint=endpoint,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise ProviderTransportError(f"Geocoding {endpoint} failed: {e}") from e
        except ValueError as e:
            PROVIDER_REQUESTS.labels(endpoint=endpoint, outcome="transport_error").inc()
            logger.warning("provider_invalid_json", endpoint=endpoint, error=str(e))
            raise ProviderTransportError(
                f"Geocoding {endpoint} returned invalid JSON"
            ) from e

        PROVIDER_REQUESTS.labels(endpoint=endpoint, outcome="success").inc()
        return data

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
