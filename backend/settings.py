"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and validation.
Use get_settings() for dependency injection compatibility in FastAPI.

Usage:
    from backend.settings import get_settings, Settings

    # In FastAPI endpoints (dependency injection)
    @app.get("/")
    def read_root(settings: Settings = Depends(get_settings)):
        return {"environment": settings.environment}

    # Engine constants seeded from the environment
    config = get_settings().engine_config()
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.core.engine_config import (
    EngineConfig,
    ProgressionRule,
    RecommendationConfig,
    StrengthConfig,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production",
    )

    # -------------------------------------------------------------------------
    # Supabase Database
    # -------------------------------------------------------------------------
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL",
    )
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key (full access)",
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        description="Supabase anonymous key (limited access)",
    )

    @property
    def supabase_key(self) -> Optional[str]:
        """Get the best available Supabase key (service role preferred)."""
        return self.supabase_service_role_key or self.supabase_anon_key

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------
    api_keys: str = Field(
        default="",
        description="Comma-separated list of valid API keys (key or key:user_id)",
    )

    @property
    def api_keys_list(self) -> list[str]:
        """Parse API keys into a list."""
        return [k.strip() for k in self.api_keys.split(",") if k.strip()]

    # -------------------------------------------------------------------------
    # Observability - Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # Training Engine
    # -------------------------------------------------------------------------
    progression_load_increment: float = Field(
        default=0.025,
        ge=0,
        le=1,
        description="Fractional load increase when progressing (0.025 = +2.5%)",
    )
    progression_load_decrement: float = Field(
        default=0.05,
        ge=0,
        le=1,
        description="Fractional load decrease when backing off (0.05 = -5%)",
    )
    progression_weight_rounding: float = Field(
        default=0.5,
        gt=0,
        description="Target weights snap to multiples of this (plate increment)",
    )
    strength_trend_window_days: int = Field(
        default=30,
        ge=1,
        description="Days counted as 'recent' for the 1RM trend",
    )
    recommendation_duration_slack: float = Field(
        default=0.1,
        ge=0,
        description="Allowed overrun of available_minutes (0.1 = 10%)",
    )
    recommendation_novelty_window_days: int = Field(
        default=14,
        ge=1,
        description="Days over which a performed workout's novelty penalty decays",
    )

    def engine_config(self) -> EngineConfig:
        """Build the engine configuration from these settings."""
        return EngineConfig(
            strength=StrengthConfig(trend_window_days=self.strength_trend_window_days),
            progression=ProgressionRule(
                load_increment=self.progression_load_increment,
                load_decrement=self.progression_load_decrement,
                weight_rounding=self.progression_weight_rounding,
            ),
            recommendation=RecommendationConfig(
                duration_slack=self.recommendation_duration_slack,
                novelty_window_days=self.recommendation_novelty_window_days,
            ),
        )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()
