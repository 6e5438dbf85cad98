"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables (or a ``.env`` file).
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Geocoding — OpenCage
    opencage_api_key: str = Field(
        default="",
        description="OpenCage Geocoding API key",
    )
    opencage_api_url: str = Field(
        default="https://api.opencagedata.com/geocode/v1/json",
        description="OpenCage forward geocoding endpoint",
    )
    opencage_timeout: float = Field(
        default=10.0,
        description="OpenCage request timeout in seconds",
        gt=0,
    )

    @field_validator("opencage_api_url")
    @classmethod
    def validate_opencage_api_url(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            msg = "opencage_api_url must be an http(s) URL"
            raise ValueError(msg)
        return v

    # Geocoding — query policy
    geocoder_default_limit: int = Field(
        default=15,
        description="Maximum candidates for unrestricted and country-restricted queries",
        gt=0,
        le=100,
    )
    geocoder_italian_limit: int = Field(
        default=5,
        description="Maximum candidates for queries biased towards Italy",
        gt=0,
        le=100,
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
