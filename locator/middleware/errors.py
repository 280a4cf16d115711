"""Error handling middleware."""

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.status import (
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from locator.core.location.exceptions import GeolocationError, LocationError
from locator.core.logging import get_logger

logger = get_logger(__name__)

HTTP_422_UNPROCESSABLE = 422

# Map exception types to status codes
ERROR_MAPPING: dict[type[Exception], int] = {
    KeyError: HTTP_404_NOT_FOUND,
    ValueError: HTTP_422_UNPROCESSABLE,
}


def get_error_detail(exc: Exception) -> tuple[str, int]:
    """Get error detail and status code from exception."""
    if isinstance(exc, LocationError):
        return exc.message, exc.status_code
    if isinstance(exc, HTTPException):
        return str(exc.detail), exc.status_code
    if isinstance(exc, RequestValidationError):
        return str(exc.errors()), HTTP_422_UNPROCESSABLE
    if isinstance(exc, KeyError):
        return f"'{exc.args[0]}'" if exc.args else str(exc), HTTP_404_NOT_FOUND

    status_code = ERROR_MAPPING.get(type(exc), HTTP_500_INTERNAL_SERVER_ERROR)
    detail = str(exc.args[0] if exc.args else str(exc))
    return detail, status_code


def create_error_response(
    exc: Exception,
    detail: str,
    status_code: int,
    correlation_id: str | None,
) -> JSONResponse:
    """Create JSON error response with optional correlation ID."""
    content: dict[str, object] = {
        "error": exc.__class__.__name__,
        "message": detail,
        "status_code": status_code,
        "correlation_id": correlation_id if correlation_id else "unknown",
    }
    if isinstance(exc, GeolocationError) and exc.code is not None:
        content["code"] = exc.code

    response = JSONResponse(status_code=status_code, content=content)
    if correlation_id:
        response.headers["X-Request-ID"] = correlation_id
    return response


async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle any exception and return a JSON response.

    Args:
    ----
        request: The request that caused the exception
        exc: The exception to handle

    Returns:
    -------
        A JSON response with error details
    """
    correlation_id = getattr(request.state, "correlation_id", None)
    detail, status_code = get_error_detail(exc)

    log = logger.error if status_code >= HTTP_500_INTERNAL_SERVER_ERROR else logger.warning
    log(
        "request_error",
        error_type=exc.__class__.__name__,
        error_message=detail,
        status_code=status_code,
        path=request.url.path,
        method=request.method,
        correlation_id=correlation_id,
    )
    return create_error_response(exc, detail, status_code, correlation_id)


def register_exception_handlers(app: FastAPI) -> None:
    """Route framework and location errors through :func:`handle_exception`."""
    app.add_exception_handler(HTTPException, handle_exception)
    app.add_exception_handler(RequestValidationError, handle_exception)
    app.add_exception_handler(LocationError, handle_exception)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Catches anything the exception handlers did not and renders it as JSON."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """
        Process the request/response cycle and handle errors.

        Args:
        ----
            request: The incoming request
            call_next: The next handler in the middleware chain

        Returns:
        -------
            The response from downstream handlers or error response
        """
        try:
            return await call_next(request)
        except Exception as exc:
            return await handle_exception(request, exc)
