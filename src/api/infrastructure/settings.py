"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        WAYFINDER_DB_HOST: Database host (default: localhost)
        WAYFINDER_DB_PORT: Database port (default: 5432)
        WAYFINDER_DB_DATABASE: Database name (default: wayfinder)
        WAYFINDER_DB_USERNAME: Database user (default: wayfinder)
        WAYFINDER_DB_PASSWORD: Database password (required in production)
        WAYFINDER_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        WAYFINDER_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        WAYFINDER_DB_ECHO: Log emitted SQL (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="WAYFINDER_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="wayfinder", description="Database name")
    username: str = Field(default="wayfinder", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    echo: bool = Field(default=False, description="Log emitted SQL statements")

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class NavigationSettings(BaseSettings):
    """Menu resolution and route guard settings.

    Environment variables:
        WAYFINDER_NAV_PERMISSION_MATCH_POLICY: "any" or "all" (default: any)
        WAYFINDER_NAV_LOGIN_PATH: Redirect target without tenant (default: /login)
        WAYFINDER_NAV_LANDING_SEGMENT: Default landing page segment (default: dashboard)
        WAYFINDER_NAV_GUARD_LOCATION: Menu location the guard checks (default: SIDEBAR)
        WAYFINDER_NAV_DURABLE_STORE_PATH: JSON file backing the durable client
            record; unset keeps the record in memory
    """

    model_config = SettingsConfigDict(
        env_prefix="WAYFINDER_NAV_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    permission_match_policy: Literal["any", "all"] = Field(
        default="any",
        description="Whether a menu needs any or all of its permissions",
    )
    login_path: str = Field(default="/login", description="Login entry point")
    landing_segment: str = Field(
        default="dashboard",
        description="Path segment of the default authenticated landing page",
    )
    guard_location: Literal["HEADER", "SIDEBAR", "FOOTER", "CUSTOM"] = Field(
        default="SIDEBAR",
        description="Menu location whose entries authorize routes",
    )
    durable_store_path: str | None = Field(
        default=None,
        description="Path of the JSON file backing the durable client record",
    )

    @field_validator("login_path")
    @classmethod
    def validate_login_path(cls, value: str) -> str:
        """Login path must be absolute."""
        if not value.startswith("/"):
            raise ValueError("login_path must start with '/'")
        return value

    @field_validator("landing_segment")
    @classmethod
    def validate_landing_segment(cls, value: str) -> str:
        """Landing segment is a single path segment."""
        value = value.strip("/")
        if not value or "/" in value:
            raise ValueError("landing_segment must be a single path segment")
        return value


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Wayfinder API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def navigation(self) -> NavigationSettings:
        """Get navigation settings."""
        return get_navigation_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_navigation_settings() -> NavigationSettings:
    """Get cached navigation settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return NavigationSettings()
