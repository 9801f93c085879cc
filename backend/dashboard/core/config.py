"""Configuration settings for the Deadlock stats dashboard."""

from __future__ import annotations

from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Upstream Configuration
    deadlock_api_base_url: str = Field(default="https://api.deadlock-api.com")
    deadlock_assets_base_url: str = Field(default="https://assets.deadlock-api.com")
    deadlock_api_key: Optional[str] = Field(default=None)
    deadlock_api_timeout_ms: int = Field(default=8000, gt=0)

    # Raw "true"/"false" override; anything else defers to the environment default
    deadlock_allow_mock_fallback: Optional[str] = Field(default=None)

    # Cache windows
    assets_cache_ttl_seconds: int = Field(default=60 * 60)
    meta_cache_ttl_seconds: int = Field(default=60 * 5)
    leaderboard_cache_ttl_seconds: int = Field(default=60 * 5)

    # Application Configuration
    environment: str = Field(default="dev")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # CORS Configuration
    cors_origins: str = Field(default="http://localhost:3000,http://127.0.0.1:3000")

    @field_validator("deadlock_api_base_url", "deadlock_assets_base_url")
    @classmethod
    def strip_base_url(cls, v: str) -> str:
        """Drop surrounding whitespace and trailing slashes from base URLs."""
        return v.strip().rstrip("/")

    @field_validator("deadlock_api_key")
    @classmethod
    def blank_key_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty API key as not configured."""
        if v is None:
            return None
        return v.strip() or None

    @field_validator("environment")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        """Lower-case the runtime mode name."""
        return v.strip().lower()

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [
            origin.strip() for origin in self.cors_origins.split(",") if origin.strip()
        ]

    @property
    def api_timeout_seconds(self) -> float:
        """Upstream request timeout in seconds."""
        return self.deadlock_api_timeout_ms / 1000

    @property
    def is_production(self) -> bool:
        """Whether the service runs in the designated production mode."""
        return self.environment == "production"

    @property
    def allow_mock_fallback(self) -> bool:
        """Whether live failures may be masked with synthetic data.

        An explicit ``true``/``false`` override wins; otherwise fallback is
        enabled everywhere except production.
        """
        raw = (self.deadlock_allow_mock_fallback or "").strip().lower()
        if raw == "true":
            return True
        if raw == "false":
            return False
        return not self.is_production

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix for environment variables
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Create a global settings instance lazily
settings: Settings | None = None


def get_global_settings() -> Settings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
