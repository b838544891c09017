"""
Repository Interfaces (Ports) for the training intelligence engine.

This package defines abstract interfaces that decouple the engine from
infrastructure (database, external services). Implementations are provided
in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the engine needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import PerformanceHistoryRepository

    class TrainingIntelligenceService:
        def __init__(self, history_repo: PerformanceHistoryRepository):
            self._history_repo = history_repo

        def get_strength_summary(self, user_id, exercise_id):
            samples = self._history_repo.get_samples(user_id, exercise_id)
"""

# Logged sets and completed workouts
from application.ports.performance_repository import PerformanceHistoryRepository

# User training profiles
from application.ports.profile_repository import TrainingProfileRepository

# Workout templates
from application.ports.catalog_repository import WorkoutCatalogRepository

# Personal records (atomic compare-and-swap)
from application.ports.record_repository import PersonalRecordRepository

__all__ = [
    "PerformanceHistoryRepository",
    "TrainingProfileRepository",
    "WorkoutCatalogRepository",
    "PersonalRecordRepository",
]
