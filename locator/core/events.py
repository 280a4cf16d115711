"""Application startup and shutdown events."""

from collections.abc import Awaitable, Callable

from fastapi import FastAPI
from prometheus_client import Counter

from locator.core.config import Settings
from locator.core.logging import configure_logging, get_logger

logger = get_logger(__name__)

# HTTP metrics
REQUESTS_TOTAL = Counter(
    "app_http_requests_total",
    "Total number of HTTP requests",
    labelnames=["method", "path"],
)

RESPONSES_TOTAL = Counter(
    "app_http_responses_total",
    "Total number of HTTP responses",
    labelnames=["status_code"],
)

# Location service metrics
CACHE_LOOKUPS = Counter(
    "locator_cache_lookups_total",
    "Location cache lookups",
    labelnames=["kind", "outcome"],  # geocode/reverse, hit/miss
)

PROVIDER_REQUESTS = Counter(
    "locator_provider_requests_total",
    "Requests issued to the geocoding provider",
    labelnames=["endpoint", "outcome"],
)


def create_start_app_handler(
    app: FastAPI, settings: Settings
) -> Callable[[], Awaitable[None]]:
    """Create startup event handler.

    Args:
        app: FastAPI application instance
        settings: Settings the location service is built from

    Returns:
        Callable that handles startup
    """

    async def start_app() -> None:
        # Imported here so the metrics above exist before the service module loads
        from locator.core.location.service import create_location_service

        configure_logging(level=settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
        app.state.location_service = create_location_service(settings)
        logger.info(
            "location_service_started",
            provider=settings.GEOCODER_BASE_URL,
            cache_ttl_seconds=settings.LOCATION_CACHE_TTL_SECONDS,
        )

    return start_app


def create_stop_app_handler(app: FastAPI) -> Callable[[], Awaitable[None]]:
    """Create shutdown event handler.

    Args:
        app: FastAPI application instance

    Returns:
        Callable that handles shutdown
    """

    async def stop_app() -> None:
        service = getattr(app.state, "location_service", None)
        if service is not None:
            await service.aclose()
            app.state.location_service = None
        logger.info("location_service_stopped")

    return stop_app
