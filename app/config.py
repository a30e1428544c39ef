"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

from domain.enums import FoodCategory


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="BestEats", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Local favorites store
    database_url: str = Field(
        default="sqlite:///./best_eats.db",
        description="SQLAlchemy URL of the favorites store",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=3, ge=1, description="Store open retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=1.0, ge=0, description="Delay between store open attempts"
    )

    # Kakao Local keyword search
    kakao_rest_api_key: Optional[str] = Field(
        default=None, description="Kakao REST API key"
    )
    kakao_local_base_url: str = Field(
        default="https://dapi.kakao.com", description="Kakao Local API base URL"
    )
    search_radius_m: int = Field(
        default=1000, ge=0, le=20000, description="Nearby search radius in meters"
    )
    search_page_size: int = Field(
        default=15, ge=1, le=15, description="Places returned per search"
    )
    search_timeout_sec: float = Field(
        default=5.0, gt=0, description="Timeout for a single place search"
    )

    # Location session
    location_timeout_sec: float = Field(
        default=10.0, gt=0, description="Timeout waiting for a location fix"
    )
    default_category: FoodCategory = Field(
        default=FoodCategory.CAFE, description="Category searched on the first fix"
    )
    default_latitude: Optional[float] = Field(
        default=None, ge=-90, le=90, description="Seed latitude for the location provider"
    )
    default_longitude: Optional[float] = Field(
        default=None, ge=-180, le=180, description="Seed longitude for the location provider"
    )

    # Map display
    map_span_delta: float = Field(
        default=0.01, gt=0, description="Viewport latitude/longitude span"
    )
    no_data_label: str = Field(
        default="정보없음", description="Shown for place fields with no data"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="", description="API route prefix")
    api_title: str = Field(
        default="BestEats API", description="API documentation title"
    )
    api_description: str = Field(
        default="Favorite restaurants and nearby eateries on a map",
        description="API documentation description",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING


# Global settings instance
settings = Settings()
