"""
FastAPI Dependency Providers for the training intelligence API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository providers create new instances per-request
- Every repository needs Supabase; without it endpoints return 503
- Auth providers wrap backend.auth

Usage in routers:
    from api.deps import get_training_service, get_current_user
    from backend.core.training_service import TrainingIntelligenceService

    @router.get("/records")
    def list_records(
        user_id: str = Depends(get_current_user),
        service: TrainingIntelligenceService = Depends(get_training_service),
    ):
        return service.get_personal_records(user_id)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_record_repo] = lambda: FakePersonalRecordRepository()
"""

from functools import lru_cache
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    PerformanceHistoryRepository,
    PersonalRecordRepository,
    TrainingProfileRepository,
    WorkoutCatalogRepository,
)

# Concrete implementations
from infrastructure import (
    SupabasePerformanceHistoryRepository,
    SupabasePersonalRecordRepository,
    SupabaseTrainingProfileRepository,
    SupabaseWorkoutCatalogRepository,
)

from backend.core.engine_config import EngineConfig
from backend.core.training_service import TrainingIntelligenceService
from backend.settings import Settings, get_settings as _get_settings

# Auth from existing module (wrap to maintain single source of truth)
from backend.auth import get_current_user as _get_current_user

logger = logging.getLogger(__name__)


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


def get_engine_config(settings: Settings = Depends(get_settings)) -> EngineConfig:
    """
    Get the engine configuration seeded from settings.

    Returns:
        EngineConfig: Engine constants
    """
    return settings.engine_config()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        if settings.is_production:
            logger.error("Supabase credentials are not configured in production")
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Use this dependency when the endpoint requires database access.
    Raises HTTPException 503 if database is not available.

    Returns:
        Client: Supabase client instance

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_history_repo(
    client: Client = Depends(get_supabase_client_required),
) -> PerformanceHistoryRepository:
    """
    Get PerformanceHistoryRepository implementation.

    Returns a SupabasePerformanceHistoryRepository instance with injected client.
    The return type is the Protocol to enable easy faking.

    Args:
        client: Supabase client (injected)

    Returns:
        PerformanceHistoryRepository: Repository for logged sets and sessions
    """
    return SupabasePerformanceHistoryRepository(client)


def get_profile_repo(
    client: Client = Depends(get_supabase_client_required),
) -> TrainingProfileRepository:
    """
    Get TrainingProfileRepository implementation.

    Args:
        client: Supabase client (injected)

    Returns:
        TrainingProfileRepository: Repository for training profiles
    """
    return SupabaseTrainingProfileRepository(client)


def get_catalog_repo(
    client: Client = Depends(get_supabase_client_required),
) -> WorkoutCatalogRepository:
    """
    Get WorkoutCatalogRepository implementation.

    Templates are cached on the instance for the duration of the request.

    Args:
        client: Supabase client (injected)

    Returns:
        WorkoutCatalogRepository: Repository for workout templates
    """
    return SupabaseWorkoutCatalogRepository(client)


def get_record_repo(
    client: Client = Depends(get_supabase_client_required),
) -> PersonalRecordRepository:
    """
    Get PersonalRecordRepository implementation.

    Writes go through the upsert_personal_record_if_better RPC.

    Args:
        client: Supabase client (injected)

    Returns:
        PersonalRecordRepository: Record store with atomic upsert
    """
    return SupabasePersonalRecordRepository(client)


# =============================================================================
# Service Providers
# =============================================================================


def get_training_service(
    history_repo: PerformanceHistoryRepository = Depends(get_history_repo),
    profile_repo: TrainingProfileRepository = Depends(get_profile_repo),
    catalog_repo: WorkoutCatalogRepository = Depends(get_catalog_repo),
    record_repo: PersonalRecordRepository = Depends(get_record_repo),
    config: EngineConfig = Depends(get_engine_config),
) -> TrainingIntelligenceService:
    """
    Get TrainingIntelligenceService with injected repositories.

    Returns:
        TrainingIntelligenceService: Service for training engine queries
    """
    return TrainingIntelligenceService(
        history_repo=history_repo,
        profile_repo=profile_repo,
        catalog_repo=catalog_repo,
        record_repo=record_repo,
        config=config,
    )


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Get the current authenticated user ID.

    Wraps backend.auth.get_current_user for dependency injection.

    Args:
        x_api_key: API key header ("key" or "key:user_id")
        settings: Application settings (configured API keys)

    Returns:
        str: User ID from authentication

    Raises:
        HTTPException: 401 if authentication fails
    """
    return await _get_current_user(x_api_key=x_api_key, settings=settings)


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    "get_engine_config",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_history_repo",
    "get_profile_repo",
    "get_catalog_repo",
    "get_record_repo",
    # Services
    "get_training_service",
    # Authentication
    "get_current_user",
]
