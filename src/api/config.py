"""
Configuration settings for FastAPI application.
"""
from typing import Optional, Annotated
from pydantic_settings import BaseSettings, NoDecode
from pydantic import Field, field_validator
from config.settings import app_config

DEFAULT_CORS_ORIGINS = ["http://localhost:5173", "http://127.0.0.1:5173", "http://localhost:3000"]


class FastAPISettings(BaseSettings):
    """FastAPI application settings with environment variable loading."""

    # Application settings
    app_name: str = Field(default="Guest Registration API", description="Application name")
    app_description: str = Field(
        default="Booking management and guest self-registration for short-term rentals",
        description="Application description"
    )
    app_version: str = Field(default="1.0.0", description="Application version")

    # Server settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    environment: str = Field(default="development", description="Environment (development, staging, production)")

    # API settings
    api_version: str = Field(default="v1", description="API version")
    api_prefix: str = Field(default="/api", description="API prefix")

    # Security settings
    cors_origins: Annotated[Optional[list[str]], NoDecode] = Field(
        default=None,
        validate_default=True,
        description="Allowed CORS origins",
        validation_alias="CORS_ORIGINS"
    )

    # Logging
    log_level: str = Field(default_factory=lambda: app_config.log_level, description="Logging level")

    model_config = {"extra": "ignore"}  # Allow extra fields from existing .env

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from a comma-separated string or return the default."""
        if v is None or v == "":
            return list(DEFAULT_CORS_ORIGINS)
        if isinstance(v, str):
            origins = [origin.strip() for origin in v.split(',') if origin.strip()]
            return origins or list(DEFAULT_CORS_ORIGINS)
        return v

    @property
    def versioned_prefix(self) -> str:
        return f"{self.api_prefix}/{self.api_version}"


# Global settings instance
settings = FastAPISettings()
