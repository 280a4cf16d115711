"""Main FastAPI application tests."""

import pytest
from fastapi import status
from httpx import AsyncClient
from prometheus_client import CONTENT_TYPE_LATEST

from locator.core.config import Settings
from locator.core.location.service import LocationService
from locator.main import create_app

settings = Settings(_env_file=None)


@pytest.mark.asyncio
async def test_app_initialization(test_app_async_client: AsyncClient) -> None:
    """Test FastAPI app initialization and configuration."""
    # Test app metadata
    response = await test_app_async_client.get("/openapi.json")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["info"]["title"] == settings.app_name
    assert data["info"]["version"] == settings.version
    assert "/api/v1/locations/geocode" in data["paths"]

    # Test docs endpoints
    for endpoint in ["/docs", "/redoc"]:
        response = await test_app_async_client.get(endpoint)
        assert response.status_code == status.HTTP_200_OK


@pytest.mark.asyncio
async def test_root_redirect(test_app_async_client: AsyncClient) -> None:
    """Test root endpoint redirects to docs."""
    response = await test_app_async_client.get("/", follow_redirects=False)
    assert response.status_code == status.HTTP_307_TEMPORARY_REDIRECT
    assert response.headers["location"] == "/docs"


@pytest.mark.asyncio
async def test_metrics_endpoint(test_app_async_client: AsyncClient) -> None:
    """Test metrics endpoint returns Prometheus metrics."""
    response = await test_app_async_client.get("/metrics")
    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"] == CONTENT_TYPE_LATEST
    assert len(response.text) > 0


@pytest.mark.asyncio
async def test_cors_middleware(test_app_async_client: AsyncClient) -> None:
    """Test CORS middleware configuration."""
    headers = {
        "Origin": "http://localhost:8000",
        "Access-Control-Request-Method": "GET",
    }
    response = await test_app_async_client.options(
        "/api/v1/locations/search", headers=headers
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.headers["access-control-allow-origin"] == "http://localhost:8000"
    assert "GET" in response.headers["access-control-allow-methods"]


@pytest.mark.asyncio
async def test_lifespan_manages_location_service() -> None:
    """Test the service is created on startup and closed on shutdown."""
    app = create_app(settings)

    async with app.router.lifespan_context(app):
        service = app.state.location_service
        assert isinstance(service, LocationService)
        assert service.settings is settings

    assert app.state.location_service is None
    assert service.client._client.is_closed
