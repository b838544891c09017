"""
Domain layer for the training intelligence engine.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    ExerciseHistory,
    FitnessLevel,
    PerformanceSample,
    PersonalRecord,
    ProgressionAdjustment,
    ProgressionRationale,
    RecommendationResult,
    RecordType,
    TemplateExercise,
    UserTrainingProfile,
    WorkoutSession,
    WorkoutTemplate,
)

__all__ = [
    "ExerciseHistory",
    "FitnessLevel",
    "PerformanceSample",
    "PersonalRecord",
    "ProgressionAdjustment",
    "ProgressionRationale",
    "RecommendationResult",
    "RecordType",
    "TemplateExercise",
    "UserTrainingProfile",
    "WorkoutSession",
    "WorkoutTemplate",
]
