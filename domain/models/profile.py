"""
User training profile.

Supplied by the caller per request; the engine holds no profile state.
"""

from enum import Enum
from typing import Any, Optional, Set

from pydantic import BaseModel, Field, field_validator


class FitnessLevel(str, Enum):
    """User experience levels, ordered from least to most experienced."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def rank(self) -> int:
        """Ordinal position (0 = beginner)."""
        return _LEVEL_ORDER.index(self)


_LEVEL_ORDER = [FitnessLevel.BEGINNER, FitnessLevel.INTERMEDIATE, FitnessLevel.ADVANCED]


def _normalize_tags(v: Any) -> Set[str]:
    if not v:
        return set()
    return {str(tag).strip().lower() for tag in v if str(tag).strip()}


class UserTrainingProfile(BaseModel):
    """Inputs describing who the recommendations are for."""

    fitness_level: FitnessLevel = Field(description="User's training experience level")
    goals: Set[str] = Field(
        default_factory=set,
        description="Goal tags (e.g., 'weight_loss', 'muscle_gain', 'strength')",
    )
    available_minutes: int = Field(
        ge=1, le=600, description="Time available for a single session"
    )
    frequency_per_week: int = Field(
        default=3, ge=1, le=14, description="Planned sessions per week"
    )
    equipment: Set[str] = Field(
        default_factory=set,
        description="Equipment the user has access to (e.g., 'barbell', 'dumbbell')",
    )
    injuries: Set[str] = Field(
        default_factory=set,
        description="Injured areas or muscle groups to avoid (e.g., 'knee', 'lower_back')",
    )
    preferences: Set[str] = Field(
        default_factory=set,
        description="Preferred workout categories (e.g., 'yoga', 'hiit')",
    )
    age: Optional[int] = Field(default=None, ge=13, le=100)

    @field_validator("goals", "equipment", "injuries", "preferences", mode="before")
    @classmethod
    def normalize_tags(cls, v: Any) -> Set[str]:
        """Lowercase and strip tag collections; drop empty entries."""
        return _normalize_tags(v)

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "fitness_level": "intermediate",
                    "goals": ["muscle_gain"],
                    "available_minutes": 60,
                    "frequency_per_week": 4,
                    "equipment": ["barbell", "dumbbell", "bench"],
                    "age": 28,
                }
            ]
        },
    }
