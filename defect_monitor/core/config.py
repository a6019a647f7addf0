"""Application configuration management using Pydantic Settings."""

import os
from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError


class StoreConfigurationError(RuntimeError):
    """Raised when the record store endpoint or credential is missing or unusable."""


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic Settings for type validation and automatic loading
    from .env files and environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Record store settings: endpoint and access credential
    database_url: Optional[str] = Field(
        default=None,
        description="Record store URL, e.g. postgresql+asyncpg://app@db:5432/defects"
    )
    database_password: Optional[SecretStr] = Field(
        default=None,
        description="Record store password, merged into DATABASE_URL when the URL carries none"
    )

    # API server settings
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="API server port")

    # CORS settings (using string for environment variable compatibility)
    cors_origins_str: str = Field(
        default="http://localhost:5173,http://localhost:3000",
        description="Comma-separated CORS origins",
        alias="CORS_ORIGINS"
    )

    # Logging settings
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format (json or text)")

    # Development settings
    debug: bool = Field(default=False, description="Enable debug mode")
    reload: bool = Field(default=False, description="Enable auto-reload (development)")
    environment: str = Field(default="production", description="Application environment")

    # Database connection pool settings
    database_echo: bool = Field(default=False, description="Enable SQLAlchemy SQL logging")
    database_pool_size: int = Field(default=5, ge=1, description="Database connection pool size")
    database_pool_recycle: int = Field(default=3600, ge=300, description="Database pool recycle time in seconds")

    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from the string configuration."""
        if not self.cors_origins_str.strip():
            return ["http://localhost:5173", "http://localhost:3000"]
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.debug or self.reload or os.getenv("DEV_MODE", "false").lower() == "true"

    def store_url(self) -> URL:
        """
        Build the record store URL from the endpoint and credential.

        SQLite URLs need no credential. Server databases must carry a
        password, either embedded in DATABASE_URL or via DATABASE_PASSWORD.

        Raises:
            StoreConfigurationError: endpoint or credential missing, or URL unparsable
        """
        if not self.database_url or not self.database_url.strip():
            raise StoreConfigurationError("DATABASE_URL is not configured")

        try:
            url = make_url(self.database_url.strip())
        except ArgumentError as exc:
            raise StoreConfigurationError(f"DATABASE_URL is not a valid URL: {exc}") from exc

        if url.get_backend_name() == "sqlite":
            return url

        if url.password is None:
            if self.database_password is None:
                raise StoreConfigurationError(
                    "Record store credential is not configured (set DATABASE_PASSWORD)"
                )
            url = url.set(password=self.database_password.get_secret_value())
        return url


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are loaded only once
    and cached for subsequent calls.
    """
    return Settings()
