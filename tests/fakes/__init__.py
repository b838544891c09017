"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakePerformanceHistoryRepository, make_sample

    repo = FakePerformanceHistoryRepository()
    repo.seed_samples("user1", [make_sample("barbell-squat", 100, 5)])
"""
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from domain.models import (
    FitnessLevel,
    PerformanceSample,
    PersonalRecord,
    RecordType,
    TemplateExercise,
    UserTrainingProfile,
    WorkoutSession,
    WorkoutTemplate,
)

# Import all fake implementations
from tests.fakes.performance_repository import FakePerformanceHistoryRepository
from tests.fakes.profile_repository import FakeTrainingProfileRepository
from tests.fakes.catalog_repository import FakeWorkoutCatalogRepository
from tests.fakes.record_repository import FakePersonalRecordRepository


# Fixed reference time for deterministic tests
NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Factory Functions
# =============================================================================


def make_sample(
    exercise_id: str = "barbell-bench-press",
    weight: float = 100.0,
    reps: int = 5,
    *,
    rpe: Optional[float] = None,
    days_ago: float = 0,
    duration_seconds: Optional[float] = None,
    distance_meters: Optional[float] = None,
    now: datetime = NOW,
) -> PerformanceSample:
    """Create a PerformanceSample achieved `days_ago` before `now`."""
    return PerformanceSample(
        exercise_id=exercise_id,
        weight=weight,
        reps=reps,
        rpe=rpe,
        duration_seconds=duration_seconds,
        distance_meters=distance_meters,
        achieved_at=now - timedelta(days=days_ago),
    )


def make_record(
    record_type: RecordType,
    value: float,
    *,
    user_id: str = "user-1",
    exercise_id: str = "barbell-bench-press",
    supporting_reps: Optional[int] = None,
    days_ago: float = 7,
    previous_value: Optional[float] = None,
) -> PersonalRecord:
    """Create a PersonalRecord."""
    return PersonalRecord(
        user_id=user_id,
        exercise_id=exercise_id,
        record_type=record_type,
        value=value,
        supporting_reps=supporting_reps,
        achieved_at=NOW - timedelta(days=days_ago),
        previous_value=previous_value,
    )


def make_profile(
    fitness_level: FitnessLevel = FitnessLevel.INTERMEDIATE,
    *,
    goals: Optional[List[str]] = None,
    available_minutes: int = 60,
    frequency_per_week: int = 3,
    equipment: Optional[List[str]] = None,
    injuries: Optional[List[str]] = None,
    preferences: Optional[List[str]] = None,
    age: Optional[int] = None,
) -> UserTrainingProfile:
    """Create a UserTrainingProfile."""
    return UserTrainingProfile(
        fitness_level=fitness_level,
        goals=goals or [],
        available_minutes=available_minutes,
        frequency_per_week=frequency_per_week,
        equipment=equipment or [],
        injuries=injuries or [],
        preferences=preferences or [],
        age=age,
    )


def make_template(
    template_id: str,
    category: str = "strength",
    duration_minutes: int = 45,
    *,
    equipment: Optional[List[str]] = None,
    difficulty: Optional[FitnessLevel] = FitnessLevel.INTERMEDIATE,
    exercises: Optional[List[TemplateExercise]] = None,
) -> WorkoutTemplate:
    """Create a WorkoutTemplate with one exercise per equipment tag."""
    if exercises is None:
        exercises = [
            TemplateExercise(exercise_id=f"{template_id}-{i}", equipment=[tag])
            for i, tag in enumerate(equipment or ["bodyweight"])
        ]
    return WorkoutTemplate(
        id=template_id,
        name=template_id.replace("-", " ").title(),
        category=category,
        duration_minutes=duration_minutes,
        exercises=exercises,
        difficulty=difficulty,
    )


def make_session(workout_id: str, *, days_ago: float = 1, category: Optional[str] = None) -> WorkoutSession:
    """Create a WorkoutSession completed `days_ago` before NOW."""
    return WorkoutSession(
        workout_id=workout_id,
        completed_at=NOW - timedelta(days=days_ago),
        category=category,
    )


__all__ = [
    # Fakes
    "FakePerformanceHistoryRepository",
    "FakeTrainingProfileRepository",
    "FakeWorkoutCatalogRepository",
    "FakePersonalRecordRepository",
    # Factories
    "NOW",
    "make_sample",
    "make_record",
    "make_profile",
    "make_template",
    "make_session",
]
