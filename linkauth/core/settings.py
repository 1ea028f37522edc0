"""Application settings using Pydantic Settings for typed configuration.

This module centralizes all configuration and provides type-safe access to settings.
Settings are loaded from environment variables with sensible defaults.
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application-wide settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    env_name: str = Field(default="development", alias="ENV_NAME")

    # CORS
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # Firebase / Identity Toolkit
    firebase_api_key: str | None = Field(default=None, alias="FIREBASE_API_KEY")
    identity_toolkit_base_url: str = Field(
        default="https://identitytoolkit.googleapis.com",
        alias="IDENTITY_TOOLKIT_URL",
    )
    identity_toolkit_retry_attempts: int = Field(
        default=2, alias="IDENTITY_TOOLKIT_RETRY_ATTEMPTS", ge=1, le=5
    )
    access_token_ttl_seconds: int = Field(
        default=3600, alias="ACCESS_TOKEN_TTL_SECONDS", gt=0
    )
    # Service account credentials (GOOGLE_APPLICATION_CREDENTIALS) are needed
    # for returnOobLink requests.
    firebase_admin_enabled: bool = Field(
        default=False, alias="FIREBASE_ADMIN_ENABLED"
    )

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        origins = []
        for o in self.cors_origins.split(","):
            trimmed = o.strip()
            if trimmed:
                origins.append(trimmed)
        return origins

    @computed_field
    @property
    def access_token_ttl(self) -> timedelta:
        """Get access token time-to-live as timedelta."""
        return timedelta(seconds=self.access_token_ttl_seconds)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
