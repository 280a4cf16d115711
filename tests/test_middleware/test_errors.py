"""Tests for error handling middleware."""

import importlib
import warnings

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from httpx import AsyncClient
from pytest_mock import MockerFixture
from starlette.status import (
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from locator.core.location.exceptions import (
    GeolocationError,
    LocationNotFoundError,
)
from locator.middleware import errors
from locator.middleware.errors import create_error_response, get_error_detail


@pytest.fixture(autouse=True)
def setup_test_routes(test_app: FastAPI) -> None:
    """Setup test routes for error handling tests.

    Args:
        test_app: FastAPI application for testing
    """

    @test_app.get("/api/test-error")
    async def _error_endpoint() -> None:
        raise HTTPException(status_code=400, detail="Test error")

    @test_app.get("/api/test-value-error")
    async def _value_error_endpoint() -> None:
        raise ValueError("Invalid value")

    @test_app.get("/api/test-location-error")
    async def _location_error_endpoint() -> None:
        raise LocationNotFoundError("Nowhere")

    @test_app.get("/api/test-custom-error")
    async def _custom_error_endpoint() -> None:
        # This will result in a 500 since it's an unknown exception
        raise RuntimeError("Custom error")


@pytest.mark.asyncio
async def test_http_exception_handling(test_app_async_client: AsyncClient) -> None:
    """Test handling of HTTPException."""
    response = await test_app_async_client.get("/api/test-error")
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "HTTPException"
    assert data["message"] == "Test error"
    assert data["status_code"] == 400
    assert data["correlation_id"] == response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_value_error_handling(test_app_async_client: AsyncClient) -> None:
    """Test handling of ValueError."""
    response = await test_app_async_client.get("/api/test-value-error")
    assert response.status_code == 422
    data = response.json()
    assert data["error"] == "ValueError"
    assert data["message"] == "Invalid value"


@pytest.mark.asyncio
async def test_location_error_handling(test_app_async_client: AsyncClient) -> None:
    """Test location errors carry their own status code."""
    response = await test_app_async_client.get("/api/test-location-error")
    assert response.status_code == HTTP_404_NOT_FOUND
    data = response.json()
    assert data["error"] == "LocationNotFoundError"
    assert data["message"] == "Nowhere"


@pytest.mark.asyncio
async def test_unknown_error_handling(test_app_async_client: AsyncClient) -> None:
    """Test handling of unknown errors."""
    response = await test_app_async_client.get("/api/test-custom-error")
    assert response.status_code == HTTP_500_INTERNAL_SERVER_ERROR
    data = response.json()
    assert data["error"] == "RuntimeError"
    assert data["message"] == "Custom error"
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_unknown_route(test_app_async_client: AsyncClient) -> None:
    """Test 404s use the same error body."""
    response = await test_app_async_client.get("/api/does-not-exist")
    assert response.status_code == HTTP_404_NOT_FOUND
    assert response.json()["error"] == "HTTPException"


def test_get_error_detail_for_key_error() -> None:
    detail, status_code = get_error_detail(KeyError("location"))
    assert detail == "'location'"
    assert status_code == HTTP_404_NOT_FOUND


def test_get_error_detail_for_validation_error() -> None:
    exc = RequestValidationError([{"loc": ("query", "q"), "msg": "Field required"}])
    detail, status_code = get_error_detail(exc)
    assert "Field required" in detail
    assert status_code == 422


def test_error_response_includes_geolocation_code() -> None:
    exc = GeolocationError("Location request timed out", code=3)
    response = create_error_response(exc, exc.message, 400, "test-1")

    assert response.headers["X-Request-ID"] == "test-1"
    assert b'"code":3' in response.body


def test_error_response_without_correlation_id(mocker: MockerFixture) -> None:
    response = create_error_response(mocker.MagicMock(), "boom", 500, None)

    assert b'"correlation_id":"unknown"' in response.body
    assert "X-Request-ID" not in response.headers


def test_value_error_maps_to_422() -> None:
    detail, status_code = get_error_detail(ValueError("Invalid value"))
    assert detail == "Invalid value"
    assert status_code == 422


def test_module_imports_without_deprecation_warnings() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        importlib.reload(errors)
