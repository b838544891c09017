"""
Domain models for the training intelligence engine.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the core business concepts:
- PerformanceSample: One logged set (weight/reps/duration/distance/RPE)
- ExerciseHistory: Time-ordered view of samples for one exercise
- PersonalRecord: Best-known value per (user, exercise, record type)
- UserTrainingProfile: Who the guidance is for
- WorkoutTemplate / WorkoutSession: Catalog entries and completed workouts
- ProgressionAdjustment: Next-session load/rep target
- RecommendationResult: Scored, explained workout recommendation
- AdaptiveWorkout: One-off workout assembled from catalog exercises

Usage:
    >>> from domain.models import PerformanceSample
    >>> sample = PerformanceSample.model_validate_json(
    ...     '{"exercise_id": "barbell-squat", "weight": 140, "reps": 5,'
    ...     ' "achieved_at": "2024-01-16T18:00:00Z"}'
    ... )
"""

from domain.models.performance import DEFAULT_RPE, ExerciseHistory, PerformanceSample, as_utc
from domain.models.profile import FitnessLevel, UserTrainingProfile
from domain.models.progression import ProgressionAdjustment, ProgressionRationale
from domain.models.recommendation import (
    AdaptiveExercise,
    AdaptiveWorkout,
    CatalogExclusion,
    RecommendationResult,
)
from domain.models.records import PersonalRecord, RecordKey, RecordType
from domain.models.workout_template import (
    BODYWEIGHT_EQUIPMENT,
    TemplateExercise,
    WorkoutSession,
    WorkoutTemplate,
)

__all__ = [
    # Samples
    "PerformanceSample",
    "ExerciseHistory",
    "DEFAULT_RPE",
    "as_utc",
    # Records
    "PersonalRecord",
    "RecordType",
    "RecordKey",
    # Profile
    "UserTrainingProfile",
    "FitnessLevel",
    # Catalog
    "WorkoutTemplate",
    "TemplateExercise",
    "WorkoutSession",
    "BODYWEIGHT_EQUIPMENT",
    # Outputs
    "ProgressionAdjustment",
    "ProgressionRationale",
    "RecommendationResult",
    "CatalogExclusion",
    "AdaptiveWorkout",
    "AdaptiveExercise",
]
