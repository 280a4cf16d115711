"""Tests for metrics middleware."""

import pytest
from httpx import AsyncClient
from prometheus_client import REGISTRY

from locator.core.config import Settings

settings = Settings(_env_file=None)


def _sample(name: str, labels: dict[str, str]) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


@pytest.mark.asyncio
async def test_request_and_response_counters(test_app_async_client: AsyncClient) -> None:
    """Test each request increments the request and response counters."""
    path = f"{settings.api_prefix}/locations/default"
    before_requests = _sample("app_http_requests_total", {"method": "GET", "path": path})
    before_responses = _sample("app_http_responses_total", {"status_code": "200"})

    response = await test_app_async_client.get(path)
    assert response.status_code == 200

    assert _sample("app_http_requests_total", {"method": "GET", "path": path}) == (
        before_requests + 1
    )
    assert _sample("app_http_responses_total", {"status_code": "200"}) >= (
        before_responses + 1
    )


@pytest.mark.asyncio
async def test_cache_lookup_counters(test_app_async_client: AsyncClient) -> None:
    """Test geocode cache hits and misses are counted."""
    labels_miss = {"kind": "geocode", "outcome": "miss"}
    labels_hit = {"kind": "geocode", "outcome": "hit"}
    before_miss = _sample("locator_cache_lookups_total", labels_miss)
    before_hit = _sample("locator_cache_lookups_total", labels_hit)

    for _ in range(2):
        await test_app_async_client.get(
            f"{settings.api_prefix}/locations/geocode", params={"q": "London"}
        )

    assert _sample("locator_cache_lookups_total", labels_miss) == before_miss + 1
    assert _sample("locator_cache_lookups_total", labels_hit) == before_hit + 1


@pytest.mark.asyncio
async def test_provider_request_counter(test_app_async_client: AsyncClient) -> None:
    """Test provider calls are counted by endpoint and outcome."""
    labels = {"endpoint": "reverse", "outcome": "success"}
    before = _sample("locator_provider_requests_total", labels)

    await test_app_async_client.get(
        f"{settings.api_prefix}/locations/reverse", params={"lat": 52.2053, "lng": 0.1218}
    )

    assert _sample("locator_provider_requests_total", labels) == before + 1


@pytest.mark.asyncio
async def test_metrics_endpoint(test_app_async_client: AsyncClient) -> None:
    """Test Prometheus exposition is served."""
    response = await test_app_async_client.get("/metrics")

    assert response.status_code == 200
    assert "app_http_requests_total" in response.text
