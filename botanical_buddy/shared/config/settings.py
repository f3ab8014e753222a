# 📄 File: botanical_buddy/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# The main configuration center that reads all settings from environment variables
# and hands them to the rest of the app in one organized place.
#
# 🧪 Purpose (Technical Summary):
# Pydantic-based settings management with environment variable loading,
# validation, and type safety for all application configuration parameters.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - python-dotenv for .env file loading
#
# 🔄 Connected Modules / Calls From:
# - botanical_buddy.main (application startup)
# - Database connection manager
# - Token issuer, external API clients, caches

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Settings are loaded from environment variables with fallback to a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="Botanical Buddy API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    DEBUG: bool = Field(default=False, description="Debug mode flag")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="text", description="Log output format: json or text")

    # =========================================================================
    # DATABASE CONFIGURATION
    # =========================================================================

    DATABASE_URL: Optional[str] = Field(None, description="Async SQLAlchemy connection URL")
    DB_HOST: str = Field(default="localhost", description="Database host")
    DB_PORT: int = Field(default=5432, description="Database port")
    DB_NAME: str = Field(default="botanical_buddy", description="Database name")
    DB_USER: str = Field(default="postgres", description="Database user")
    DB_PASSWORD: str = Field(default="", description="Database password")

    DB_POOL_SIZE: int = Field(default=10, description="Database pool size")
    DB_MAX_OVERFLOW: int = Field(default=20, description="Database pool overflow")
    DB_POOL_TIMEOUT: int = Field(default=30, description="Database pool timeout")
    DB_POOL_RECYCLE: int = Field(default=3600, description="Database pool recycle time")
    DB_CREATE_TABLES: bool = Field(
        default=False,
        description="Create missing tables at startup instead of relying on Alembic"
    )

    # =========================================================================
    # SECURITY SETTINGS
    # =========================================================================

    JWT_SECRET_KEY: str = Field(..., description="Secret used to sign access tokens")
    JWT_ALGORITHM: str = Field(default="HS256", description="JWT signing algorithm")
    JWT_ISSUER: str = Field(default="BotanicalBuddy", description="JWT issuer claim")
    JWT_AUDIENCE: str = Field(default="BotanicalBuddyUsers", description="JWT audience claim")
    JWT_ACCESS_TOKEN_EXPIRE_HOURS: int = Field(default=24, description="Access token lifetime")
    BCRYPT_ROUNDS: int = Field(default=12, description="bcrypt cost factor")
    AUTH_DEMO_API_KEY: str = Field(
        default="demo-api-key",
        description="Shared key required by the demo token endpoint"
    )

    # =========================================================================
    # RATE LIMITING
    # =========================================================================

    RATE_LIMIT_ENABLED: bool = Field(default=True, description="Enable auth rate limits")
    AUTH_RATE_LIMIT: str = Field(default="10/minute", description="Limit for auth endpoints")

    # =========================================================================
    # CORS CONFIGURATION
    # =========================================================================

    CORS_ORIGINS: str = Field(
        default="http://localhost:3000,http://localhost:8080",
        description="Comma-separated allowed origins"
    )

    # =========================================================================
    # EXTERNAL APIS
    # =========================================================================

    TREFLE_API_URL: str = Field(default="https://trefle.io/api/v1", description="Trefle API URL")
    TREFLE_API_TOKEN: Optional[str] = Field(None, description="Trefle API token")
    OPENWEATHER_API_URL: str = Field(
        default="https://api.openweathermap.org/data/2.5",
        description="OpenWeatherMap API URL"
    )
    OPENWEATHER_API_KEY: Optional[str] = Field(None, description="OpenWeatherMap API key")
    EXTERNAL_API_TIMEOUT: int = Field(default=30, description="Outbound request timeout in seconds")

    # =========================================================================
    # CACHE SETTINGS
    # =========================================================================

    CACHE_PLANT_LIBRARY_TTL: int = Field(default=86400, description="Taxonomy cache TTL (24h)")
    CACHE_WEATHER_TTL: int = Field(default=3600, description="Weather cache TTL (1h)")

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed_environments = ["development", "staging", "production", "test"]
        if v.lower() not in allowed_environments:
            raise ValueError(f"Environment must be one of {allowed_environments}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"Log level must be one of {allowed_levels}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        """Only symmetric algorithms are supported since the key is a shared secret."""
        allowed_algorithms = ["HS256", "HS384", "HS512"]
        if v not in allowed_algorithms:
            raise ValueError(f"JWT algorithm must be one of {allowed_algorithms}")
        return v

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v: str) -> str:
        """Validate CORS origins format."""
        origins = [origin.strip() for origin in v.split(",")]
        for origin in origins:
            if not origin.startswith(("http://", "https://", "*")):
                raise ValueError(f"Invalid CORS origin format: {origin}")
        return v

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def database_url(self) -> str:
        """Get the database URL, preferring explicit DATABASE_URL."""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_testing(self) -> bool:
        return self.ENVIRONMENT == "test"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
