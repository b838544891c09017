"""
Workout catalog entries and completed-session records.

WorkoutTemplate is a read-only candidate supplied by the caller's catalog.
WorkoutSession is one completed workout from the user's recent history and
feeds novelty scoring and consistency analytics.
"""

from datetime import datetime
from typing import List, Optional, Set

from pydantic import BaseModel, Field, computed_field, field_validator

from domain.models.performance import as_utc
from domain.models.profile import FitnessLevel


# Equipment tags that never restrict a template
BODYWEIGHT_EQUIPMENT = frozenset({"bodyweight", "body_weight", "none", ""})


class TemplateExercise(BaseModel):
    """An exercise reference inside a template with its default prescription."""

    exercise_id: str = Field(..., min_length=1)
    name: Optional[str] = None
    sets: int = Field(default=3, ge=1)
    reps: int = Field(default=10, ge=1)
    rest_seconds: int = Field(default=60, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    equipment: List[str] = Field(default_factory=list)
    muscle_groups: List[str] = Field(default_factory=list)

    @field_validator("equipment", "muscle_groups", mode="before")
    @classmethod
    def lowercase_tags(cls, v):
        """Normalize tags to lowercase."""
        if not v:
            return []
        return [str(tag).strip().lower() for tag in v]

    model_config = {"frozen": True}


class WorkoutTemplate(BaseModel):
    """
    Candidate workout from the catalog.

    `required_equipment` is derived from the exercises; bodyweight-only
    exercises add nothing to it.
    """

    id: str = Field(..., min_length=1)
    name: str = ""
    category: str = Field(default="general", description="e.g. strength, cardio, hiit, yoga")
    duration_minutes: int = Field(..., ge=1)
    exercises: List[TemplateExercise] = Field(default_factory=list)
    difficulty: Optional[FitnessLevel] = Field(
        default=None,
        description="Explicit difficulty; derived from workout intensity when absent",
    )

    @field_validator("category", mode="before")
    @classmethod
    def lowercase_category(cls, v):
        """Categories are matched case-insensitively ('HIIT' == 'hiit')."""
        return str(v or "general").strip().lower()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def required_equipment(self) -> Set[str]:
        """Union of exercise equipment, minus bodyweight tags."""
        required: Set[str] = set()
        for exercise in self.exercises:
            required.update(e for e in exercise.equipment if e not in BODYWEIGHT_EQUIPMENT)
        return required

    @property
    def muscle_groups(self) -> Set[str]:
        """All muscle groups trained by the template."""
        groups: Set[str] = set()
        for exercise in self.exercises:
            groups.update(exercise.muscle_groups)
        return groups

    model_config = {"frozen": True}


class WorkoutSession(BaseModel):
    """A completed workout in the user's recent history."""

    workout_id: str = Field(..., min_length=1)
    completed_at: datetime
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    category: Optional[str] = None

    @field_validator("completed_at")
    @classmethod
    def normalize_completed_at(cls, v: datetime) -> datetime:
        return as_utc(v)

    model_config = {"frozen": True}
