"""Test configuration."""

from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from locator.core.config import Settings
from locator.core.location.cache import LocationCache
from locator.core.location.client import NominatimClient
from locator.core.location.service import LocationService
from locator.core.logging import configure_logging
from locator.main import create_app
from tests.helpers import FakeClock, ProviderStub

configure_logging(testing=True)


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def provider() -> ProviderStub:
    return ProviderStub()


@pytest_asyncio.fixture
async def http_client(provider: ProviderStub) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(provider.handler)) as client:
        yield client


@pytest.fixture
def nominatim(settings: Settings, http_client: httpx.AsyncClient) -> NominatimClient:
    return NominatimClient(settings, http_client=http_client)


@pytest.fixture
def service(
    settings: Settings, nominatim: NominatimClient, clock: FakeClock
) -> LocationService:
    cache: LocationCache[Any] = LocationCache(ttl_ms=settings.cache_ttl_ms, clock=clock)
    return LocationService(client=nominatim, cache=cache, settings=settings)


@pytest.fixture
def test_app(settings: Settings, service: LocationService) -> FastAPI:
    """Application wired to the stubbed location service.

    The ASGI transport does not run the lifespan, so the service is put on the
    state directly.
    """
    app = create_app(settings)
    app.state.location_service = service
    return app


@pytest_asyncio.fixture
async def test_app_async_client(test_app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
