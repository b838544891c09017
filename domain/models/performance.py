"""
Performance sample value object and the exercise history view.

A PerformanceSample is one logged set. Samples are immutable once created
and owned by the session that logged them; the engine only reads them.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field, field_validator


DEFAULT_RPE = 7.0


def as_utc(value: datetime) -> datetime:
    """Normalize a timestamp to UTC; naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class PerformanceSample(BaseModel):
    """
    Value object representing a single logged set.

    Weight-based sets carry `weight` and `reps`; timed or distance sets
    carry `duration_seconds` and/or `distance_meters`. RPE is optional and
    treated as 7 when absent.

    Examples:
        >>> sample = PerformanceSample(
        ...     exercise_id="barbell-bench-press",
        ...     weight=100,
        ...     reps=5,
        ...     achieved_at=datetime(2024, 1, 15, 18, 0),
        ... )
        >>> sample.volume
        500.0
        >>> sample.effective_rpe
        7.0
    """

    exercise_id: str = Field(..., min_length=1, description="Canonical exercise ID")
    weight: float = Field(default=0.0, ge=0, description="Load lifted (0 for bodyweight)")
    reps: int = Field(default=0, ge=0, description="Repetitions completed")
    duration_seconds: Optional[float] = Field(
        default=None, ge=0, description="Set duration in seconds (timed work)"
    )
    distance_meters: Optional[float] = Field(
        default=None, ge=0, description="Distance covered in meters"
    )
    rpe: Optional[float] = Field(
        default=None, ge=1, le=10, description="Rate of perceived exertion (1-10)"
    )
    achieved_at: datetime = Field(..., description="When the set was completed (stored as UTC)")

    @field_validator("achieved_at")
    @classmethod
    def normalize_achieved_at(cls, v: datetime) -> datetime:
        """Store timestamps as UTC."""
        return as_utc(v)

    @property
    def effective_rpe(self) -> float:
        """RPE used by the progression rules (defaults to 7 when not logged)."""
        return float(self.rpe) if self.rpe is not None else DEFAULT_RPE

    @property
    def volume(self) -> float:
        """Volume of the set: weight x reps."""
        return float(self.weight) * self.reps

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "exercise_id": "barbell-bench-press",
                    "weight": 100,
                    "reps": 5,
                    "rpe": 8,
                    "achieved_at": "2024-01-15T18:00:00Z",
                },
                {
                    "exercise_id": "rowing-2k",
                    "duration_seconds": 452.5,
                    "distance_meters": 2000,
                    "achieved_at": "2024-01-16T07:30:00Z",
                },
            ]
        },
    }


class ExerciseHistory(BaseModel):
    """
    Read-only, time-ordered view of samples for one (user, exercise) pair.

    Built on demand from stored samples; never persisted.
    """

    user_id: str
    exercise_id: str
    samples: List[PerformanceSample] = Field(default_factory=list)

    @classmethod
    def from_samples(
        cls,
        user_id: str,
        exercise_id: str,
        samples: Iterable[PerformanceSample],
    ) -> "ExerciseHistory":
        """Build a history for one exercise, oldest sample first."""
        ordered = sorted(
            (s for s in samples if s.exercise_id == exercise_id),
            key=lambda s: s.achieved_at,
        )
        return cls(user_id=user_id, exercise_id=exercise_id, samples=ordered)

    def __len__(self) -> int:
        return len(self.samples)

    model_config = {"frozen": True}
