"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # ===================
    # FIELD LOOKUP (ANTHROPIC)
    # ===================
    anthropic_api_key: Optional[str] = Field(
        None,
        description="Anthropic API key used for cigar auto-fill lookups"
    )
    lookup_model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Model used to suggest cigar details"
    )
    lookup_max_tokens: int = Field(
        default=1024,
        ge=128,
        le=8192,
        description="Maximum tokens for a lookup response"
    )

    # ===================
    # MAP VIEWPORT
    # ===================
    map_initial_zoom: float = Field(
        default=2.5,
        gt=0,
        description="Zoom applied when the map first opens"
    )
    map_min_zoom: float = Field(
        default=1.0,
        gt=0,
        description="Lowest zoom the map can reach"
    )
    map_max_zoom: float = Field(
        default=8.0,
        gt=0,
        description="Highest zoom the map can reach"
    )
    map_zoom_step: float = Field(
        default=0.5,
        gt=0,
        le=4,
        description="Zoom change per zoom-in / zoom-out step"
    )

    # ===================
    # DASHBOARD
    # ===================
    aging_well_limit: int = Field(
        default=3,
        ge=1,
        le=50,
        description="How many of the oldest cigars the aging panel shows"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def lookup_configured(self) -> bool:
        """Check if the auto-fill lookup can reach Anthropic."""
        return bool(self.anthropic_api_key)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
