"""
Application factory for FastAPI.

This module provides a factory function for creating FastAPI application instances.
The factory pattern allows for:
- Easy testing with custom settings
- Multiple app instances with different configurations
- Clear separation of app creation from route definitions

Usage:
    from backend.main import create_app
    from backend.settings import Settings

    # Default app (uses get_settings())
    app = create_app()

    # Test app with custom settings
    test_settings = Settings(environment="test", _env_file=None)
    test_app = create_app(settings=test_settings)
"""

import logging
import os
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    # Initialize Sentry for error tracking
    _init_sentry(settings)

    app = FastAPI(
        title="Training Intelligence API",
        description="Strength estimation, personal records, progression and workout recommendations",
        version="1.0.0",
    )

    _configure_cors(app)
    _include_routers(app)
    _log_engine_config(settings)

    return app


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
            profiles_sample_rate=0.1,
        )
        logger.info("Sentry initialized for training-intelligence-api")


def _configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    trusted_origins = [
        "http://localhost:3000",
        "http://localhost:3001",
    ]
    # Add production domains from environment if configured
    production_origins = os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",")
    trusted_origins.extend([origin.strip() for origin in production_origins if origin.strip()])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=trusted_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import (
        health_router,
        strength_router,
        records_router,
        progression_router,
        recommendations_router,
        insights_router,
    )

    # Health router (no prefix - /health at root)
    app.include_router(health_router)

    # Engine routers (with prefixes defined in each router)
    app.include_router(strength_router)
    app.include_router(records_router)
    app.include_router(progression_router)
    app.include_router(recommendations_router)
    app.include_router(insights_router)


def _log_engine_config(settings: Settings) -> None:
    """Log the engine knobs that differ between deployments at startup."""
    logger.info(
        f"Engine config ({settings.environment}): "
        f"load +{settings.progression_load_increment:.1%}/"
        f"-{settings.progression_load_decrement:.1%}, "
        f"rounding {settings.progression_weight_rounding}, "
        f"trend window {settings.strength_trend_window_days}d, "
        f"novelty window {settings.recommendation_novelty_window_days}d"
    )
    if not settings.api_keys_list:
        logger.warning("API_KEYS is empty: every authenticated endpoint will return 401")


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()
