"""
Training analytics helpers.

Small, deterministic metrics shared by the recommendation generator and the
service layer:
- Adherence from completed vs planned sessions
- Consistency score (frequency + regularity of sessions)
- Workout intensity (0-10) and the difficulty it implies
- Rest recommendations from intensity
"""
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional

from application.exceptions import InvalidInputError
from domain.models import FitnessLevel, WorkoutTemplate


IDEAL_SESSIONS_PER_WEEK = 3
# Interval standard deviation (days) at which regularity bottoms out
MAX_REGULARITY_STDDEV_DAYS = 7.0


# =============================================================================
# Adherence & Consistency
# =============================================================================


def calculate_adherence(completed_sessions: int, planned_sessions: int) -> float:
    """
    Fraction of planned sessions actually completed, clamped to [0, 1].

    With nothing planned there is nothing to miss: adherence is 1.0.
    """
    if completed_sessions < 0 or planned_sessions < 0:
        raise InvalidInputError("session counts must be >= 0")
    if planned_sessions == 0:
        return 1.0
    return min(1.0, completed_sessions / planned_sessions)


def regularity_score(session_times: Iterable[datetime]) -> float:
    """
    How evenly spaced sessions are (0-1).

    1.0 for fewer than two sessions; otherwise 1 - stddev(interval days) / 7,
    floored at 0.
    """
    times = sorted(session_times)
    if len(times) < 2:
        return 1.0

    intervals = [
        (later - earlier).total_seconds() / 86400.0
        for earlier, later in zip(times, times[1:])
    ]
    mean = sum(intervals) / len(intervals)
    variance = sum((i - mean) ** 2 for i in intervals) / len(intervals)
    return max(0.0, 1.0 - math.sqrt(variance) / MAX_REGULARITY_STDDEV_DAYS)


def consistency_score(session_times: Iterable[datetime], window_days: int) -> int:
    """
    Consistency over a window, 0-100.

    70% frequency (sessions per week vs an ideal of 3), 30% regularity.
    """
    if window_days <= 0:
        raise InvalidInputError(f"window_days must be > 0 (got {window_days})")
    times = list(session_times)
    if not times:
        return 0

    per_week = len(times) / (window_days / 7.0)
    frequency = min(1.0, per_week / IDEAL_SESSIONS_PER_WEEK)
    return round((frequency * 0.7 + regularity_score(times) * 0.3) * 100)


# =============================================================================
# Intensity & Difficulty
# =============================================================================


def workout_intensity(template: WorkoutTemplate) -> float:
    """
    Average per-exercise intensity on a 0-10 scale.

    Each exercise scores sets*reps/10, plus up to 3 for load (weight/50),
    plus a short-rest bonus of (120 - rest)/60; capped at 10.
    """
    if not template.exercises:
        return 0.0

    total = 0.0
    for exercise in template.exercises:
        intensity = (exercise.sets * exercise.reps) / 10.0
        if exercise.weight:
            intensity += min(exercise.weight / 50.0, 3.0)
        intensity += max(0.0, (120 - exercise.rest_seconds) / 60.0)
        total += min(intensity, 10.0)
    return min(total / len(template.exercises), 10.0)


def implied_difficulty(template: WorkoutTemplate) -> FitnessLevel:
    """Explicit template difficulty, else derived from workout intensity."""
    if template.difficulty is not None:
        return template.difficulty
    intensity = workout_intensity(template)
    if intensity < 4.0:
        return FitnessLevel.BEGINNER
    if intensity < 7.0:
        return FitnessLevel.INTERMEDIATE
    return FitnessLevel.ADVANCED


# =============================================================================
# Recovery
# =============================================================================


@dataclass
class RestRecommendation:
    """Recovery guidance after a workout."""

    minimum_hours: int
    active_recovery: bool
    nutrition_focus: List[str] = field(default_factory=lambda: ["hydration"])


def rest_recommendation(intensity: float, workout_type: Optional[str] = "strength") -> RestRecommendation:
    """
    Rest guidance from workout intensity (0-10).

    - >= 8: 48h, active recovery, protein + carbohydrates + hydration
    - >= 6: 36h, active recovery, protein + hydration
    - <= 4: 12h
    - otherwise 24h
    Cardio below intensity 7 needs 12h less (minimum 12h).
    """
    if intensity >= 8:
        rec = RestRecommendation(48, True, ["protein", "carbohydrates", "hydration"])
    elif intensity >= 6:
        rec = RestRecommendation(36, True, ["protein", "hydration"])
    elif intensity <= 4:
        rec = RestRecommendation(12, False, ["hydration"])
    else:
        rec = RestRecommendation(24, False, ["hydration"])

    if (workout_type or "").lower() == "cardio" and intensity < 7:
        rec.minimum_hours = max(12, rec.minimum_hours - 12)
    return rec
