"""Application configuration."""

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Environment variables will be loaded and validated using Pydantic.
    """

    app_name: str = "Job Tracker Locator"
    version: str = "0.1.0"
    api_prefix: str = "/api/v1"

    # CORS Settings
    cors_origins: list[str] = ["*"]  # Default to allow all in development
    cors_allow_credentials: bool = False

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    # Geocoding provider (Nominatim compatible)
    GEOCODER_BASE_URL: str = "https://nominatim.openstreetmap.org"
    GEOCODER_USER_AGENT: str = "JobTracker/1.0 (job-application-tracker)"
    GEOCODER_COUNTRY_CODES: str = "gb"
    GEOCODER_LANGUAGE: str = "en"
    GEOCODER_RESULT_LIMIT: int = Field(default=5, ge=1, le=50)
    GEOCODER_TIMEOUT: float = Field(default=10.0, gt=0)

    # Location cache
    LOCATION_CACHE_TTL_SECONDS: int = Field(default=1800, ge=0)  # 30 minutes
    REVERSE_CACHE_PRECISION: int | None = Field(default=None, ge=0, le=10)

    # Search and display
    HOME_COUNTRY: str = "United Kingdom"
    SEARCH_MAX_RESULTS: int = Field(default=10, ge=1)
    POPULAR_RESULT_LIMIT: int = Field(default=5, ge=0)

    # Device geolocation
    GEOLOCATION_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)
    GEOLOCATION_MAXIMUM_AGE_SECONDS: float = Field(default=300.0, ge=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",  # Allow extra fields in environment
    )

    @field_validator("GEOCODER_USER_AGENT")
    @classmethod
    def require_user_agent(cls, value: str) -> str:
        """Nominatim rejects anonymous clients."""
        value = value.strip()
        if not value:
            raise ValueError("GEOCODER_USER_AGENT must not be empty")
        return value

    @field_validator("GEOCODER_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="after")
    def validate_origins(self) -> "Settings":
        """Validate CORS origins."""
        if self.cors_origins == ["*"]:
            self.cors_origins = [
                "http://localhost",
                "http://localhost:3000",
                "http://localhost:8000",
            ]
        return self

    @property
    def cache_ttl_ms(self) -> int:
        """Cache TTL in milliseconds, the unit cache entries are stamped in."""
        return self.LOCATION_CACHE_TTL_SECONDS * 1000


# Create settings instance
settings = Settings()
