"""
Infrastructure Layer for the training intelligence engine.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations and the in-memory record store
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabasePerformanceHistoryRepository,
    SupabaseTrainingProfileRepository,
    SupabaseWorkoutCatalogRepository,
    SupabasePersonalRecordRepository,
    InMemoryPersonalRecordRepository,
)

__all__ = [
    "SupabasePerformanceHistoryRepository",
    "SupabaseTrainingProfileRepository",
    "SupabaseWorkoutCatalogRepository",
    "SupabasePersonalRecordRepository",
    "InMemoryPersonalRecordRepository",
]
