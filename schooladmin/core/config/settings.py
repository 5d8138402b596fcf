# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for the school
admin backend. Settings are loaded from environment variables with sensible
defaults.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from schooladmin.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Relational database configuration.

    The database stores every school record: people (teachers, students,
    parents) keyed by their identity-account id, and the single-table
    entities (classes, subjects, lessons, exams, ...).

    Attributes:
        user: PostgreSQL username.
        password: PostgreSQL password.
        host: Database host address.
        port: Database port number.
        database: Database name.
        pool_size: Connection pool size.
        max_overflow: Maximum overflow connections.
        echo: Log every SQL statement.
    """

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        extra="ignore",
    )

    user: str = "schooladmin"
    password: SecretStr = SecretStr("schooladmin_password")
    host: str = "localhost"
    port: int = 5432
    database: str = "schooladmin"
    pool_size: int = 10
    max_overflow: int = 20
    echo: bool = False

    @property
    def url(self) -> str:
        """Build the async database URL from components."""
        pwd = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{pwd}@{self.host}:{self.port}/{self.database}"


class IdentityProviderSettings(BaseSettings):
    """Hosted identity provider configuration.

    Login accounts for teachers, students and parents are provisioned in
    a Clerk-compatible user directory through its backend API.

    Attributes:
        api_url: Base URL of the backend API.
        secret_key: Secret key sent as a Bearer token.
        timeout: Request timeout in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="IDENTITY_",
        extra="ignore",
    )

    api_url: str = "https://api.clerk.com/v1"
    secret_key: SecretStr = SecretStr("")
    timeout: float = 15.0

    @property
    def auth_headers(self) -> dict[str, str]:
        """Build authentication headers for API requests."""
        return {
            "Authorization": f"Bearer {self.secret_key.get_secret_value()}",
            "Content-Type": "application/json",
        }


class SchoolSettings(BaseSettings):
    """School domain behaviour.

    Attributes:
        exam_access_policy: Which exam access policy guards exam mutations.
            "open" lets every actor through, "teacher_scoped" limits
            teachers to exams of lessons they teach.
        password_hash_rounds: bcrypt rounds for locally stored password hashes.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCHOOL_",
        extra="ignore",
    )

    exam_access_policy: Literal["open", "teacher_scoped"] = "open"
    password_hash_rounds: int = 12


class CORSSettings(BaseSettings):
    """CORS configuration for API.

    Attributes:
        origins: Comma-separated list of allowed origins.
        allow_credentials: Whether to allow credentials.
        allow_methods: Allowed HTTP methods.
        allow_headers: Allowed HTTP headers.
    """

    model_config = SettingsConfigDict(
        env_prefix="CORS_",
        extra="ignore",
    )

    origins: str = "http://localhost:3000"
    allow_credentials: bool = True
    allow_methods: list[str] = ["*"]
    allow_headers: list[str] = ["*"]

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into a list."""
        return [origin.strip() for origin in self.origins.split(",") if origin.strip()]


class APISettings(BaseSettings):
    """API server configuration.

    Attributes:
        host: Host to bind to.
        port: Port to listen on.
        workers: Number of worker processes.
        reload: Whether to enable auto-reload.
    """

    model_config = SettingsConfigDict(
        env_prefix="API_",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 2
    reload: bool = False


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        db: Database settings.
        identity: Identity provider settings.
        school: School domain settings.
        cors: CORS settings.
        api: API server settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    # Subsettings - loaded with their own env prefixes
    db: DatabaseSettings = Field(default_factory=DatabaseSettings)
    identity: IdentityProviderSettings = Field(default_factory=IdentityProviderSettings)
    school: SchoolSettings = Field(default_factory=SchoolSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    api: APISettings = Field(default_factory=APISettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Validate that production settings are properly configured.

        Raises:
            ValueError: If running in production without an identity secret.
        """
        if self.environment == "production":
            if not self.identity.secret_key.get_secret_value():
                raise ValueError(
                    "Identity provider secret key must be set in production. "
                    "Set IDENTITY_SECRET_KEY environment variable."
                )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
