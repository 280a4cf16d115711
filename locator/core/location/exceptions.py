"""Errors raised by the location service.

Every public error derives from :class:`LocationError` and carries the HTTP
status the API layer should answer with. Provider errors are internal: the
service translates them into the user-facing errors below.
"""


class LocationError(Exception):
    """Base class for user-facing location errors."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidCoordinatesError(LocationError):
    """Latitude/longitude missing, non-finite or out of range."""

    status_code = 422

    def __init__(self, message: str = "Invalid coordinates") -> None:
        super().__init__(message)


class InvalidQueryError(LocationError):
    """Empty or non-string free-text query."""

    status_code = 422

    def __init__(self, message: str = "Invalid location query") -> None:
        super().__init__(message)


class InvalidPostcodeError(LocationError):
    status_code = 422


class LocationNotFoundError(LocationError):
    """The provider answered but had nothing for the query."""

    status_code = 404


class GeocoderUnavailableError(LocationError):
    """The provider could not be reached or returned garbage."""

    status_code = 502


class GeolocationUnsupportedError(LocationError):
    status_code = 501

    def __init__(self, message: str = "Geolocation is not supported") -> None:
        super().__init__(message)


class GeolocationError(LocationError):
    """The device could not produce a position fix."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class ProviderError(Exception):
    """Raised by the provider client; never leaves the service."""


class ProviderStatusError(ProviderError):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProviderTransportError(ProviderError):
    pass
