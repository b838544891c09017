"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository
interfaces defined in application.ports, plus an in-memory record store.
These implementations can be injected into services and routers for clean
separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabasePerformanceHistoryRepository,
        SupabaseTrainingProfileRepository,
        SupabaseWorkoutCatalogRepository,
        SupabasePersonalRecordRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    history_repo = SupabasePerformanceHistoryRepository(client)
    profile_repo = SupabaseTrainingProfileRepository(client)
    catalog_repo = SupabaseWorkoutCatalogRepository(client)
    record_repo = SupabasePersonalRecordRepository(client)
"""

from infrastructure.db.performance_repository import SupabasePerformanceHistoryRepository
from infrastructure.db.profile_repository import SupabaseTrainingProfileRepository
from infrastructure.db.catalog_repository import SupabaseWorkoutCatalogRepository
from infrastructure.db.record_repository import (
    SupabasePersonalRecordRepository,
    InMemoryPersonalRecordRepository,
)

__all__ = [
    # Performance history
    "SupabasePerformanceHistoryRepository",

    # Training profiles
    "SupabaseTrainingProfileRepository",

    # Workout catalog
    "SupabaseWorkoutCatalogRepository",

    # Personal records
    "SupabasePersonalRecordRepository",
    "InMemoryPersonalRecordRepository",
]
