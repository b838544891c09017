"""
Recommendation result models.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models.progression import ProgressionRationale


class RecommendationResult(BaseModel):
    """A ranked workout recommendation with its explanation."""

    workout_id: str
    confidence_score: float = Field(ge=0, le=100)
    reasons: List[str] = Field(default_factory=list)
    adaptations: List[str] = Field(default_factory=list)
    estimated_calories: float = Field(ge=0)
    novelty_decay: float = Field(
        default=0.0,
        ge=0,
        le=1,
        description="1.0 = performed just now, 0.0 = not within the novelty window",
    )

    model_config = {"frozen": True}


class CatalogExclusion(BaseModel):
    """A catalog template removed by the eligibility filters."""

    workout_id: str
    reason: str

    model_config = {"frozen": True}


class AdaptiveExercise(BaseModel):
    """One prescribed exercise in a generated workout."""

    exercise_id: str
    name: Optional[str] = None
    sets: int = Field(ge=1)
    reps: int = Field(ge=1)
    weight: Optional[float] = Field(default=None, ge=0)
    rest_seconds: int = Field(ge=0)
    muscle_groups: List[str] = Field(default_factory=list)
    estimated_minutes: float = Field(ge=0)
    rationale: Optional[ProgressionRationale] = Field(
        default=None,
        description="Progression decision behind the load, when one exists",
    )
    note: str = ""

    model_config = {"frozen": True}


class AdaptiveWorkout(BaseModel):
    """A one-off workout assembled from catalog exercises."""

    name: str
    category: str
    target_minutes: int = Field(ge=1)
    estimated_minutes: float = Field(ge=0)
    estimated_calories: float = Field(ge=0)
    focus_areas: List[str] = Field(default_factory=list)
    exercises: List[AdaptiveExercise] = Field(default_factory=list)
    insights: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}
