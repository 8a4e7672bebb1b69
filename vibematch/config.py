"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import RedisDsn, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_env: Literal["development", "production", "test"] = "development"
    app_name: str = "VibeMatch"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None

    # Redis (optional response cache)
    redis_url: RedisDsn | None = None

    # External APIs
    tmdb_api_key: str = ""
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"

    # Recommendations
    default_region: str = "IN"

    @field_validator("default_region")
    @classmethod
    def validate_region(cls, v: str) -> str:
        """Region must be an ISO 3166-1 alpha-2 code."""
        v = v.strip().upper()
        if len(v) != 2 or not v.isalpha():
            raise ValueError("DEFAULT_REGION must be a two-letter country code")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def cache_enabled(self) -> bool:
        return self.redis_url is not None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
