"""Main FastAPI application module."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette import status

from locator.api.v1.router import router as v1_router
from locator.core.config import Settings
from locator.core.events import create_start_app_handler, create_stop_app_handler
from locator.middleware.correlation import CorrelationMiddleware
from locator.middleware.errors import ErrorHandlingMiddleware, register_exception_handlers
from locator.middleware.metrics import MetricsMiddleware


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with middleware, routes and lifecycle hooks."""
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await create_start_app_handler(app, settings)()
        try:
            yield
        finally:
            await create_stop_app_handler(app)()

    app = FastAPI(
        title=settings.app_name,
        description="Location resolution and caching service",
        version=settings.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        default_response_class=JSONResponse,
        lifespan=lifespan,
    )

    # Add middleware in order (inside -> out):
    # 1. CORS (outermost)
    # 2. Correlation (adds request ID)
    # 3. Metrics (tracks all requests)
    # 4. Error handling (innermost - handles all errors)
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
        max_age=600,
    )
    register_exception_handlers(app)

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        """Expose Prometheus metrics."""
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.get("/", include_in_schema=False)
    async def root_redirect() -> Response:
        """Redirect root path to docs."""
        return RedirectResponse(
            url="/docs", status_code=status.HTTP_307_TEMPORARY_REDIRECT
        )

    app.include_router(v1_router, prefix=settings.api_prefix)
    return app


app = create_app()
