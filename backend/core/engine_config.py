"""
Configuration objects for the training engine.

Formula constants (RPE thresholds, load increments, calorie rates, scoring
weights, windows) live here instead of inside the algorithms so the engine
can be exercised against alternative periodization rules. Every engine
function accepts an optional config and falls back to these defaults.

Settings (backend/settings.py) can override a subset of these from the
environment via Settings.engine_config().
"""

from typing import Dict, FrozenSet

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# Strength Estimation
# =============================================================================


class StrengthConfig(BaseModel):
    """Sample eligibility and windows for 1RM estimation."""

    min_reps: int = Field(default=1, ge=1)
    max_reps: int = Field(
        default=15,
        ge=1,
        le=36,
        description="Sets above this rep count are not strength sets",
    )
    trend_window_days: int = Field(default=30, ge=1)
    history_size: int = Field(default=10, ge=1, description="Estimates kept in summaries")

    model_config = {"frozen": True}


# =============================================================================
# Progression
# =============================================================================


class ProgressionRule(BaseModel):
    """
    Periodization rule governing load changes between cycles.

    Defaults:
    - increase when adherence >= 0.8 and average RPE <= 7
    - decrease when average RPE > 8.5 or adherence < 0.5
    - otherwise hold
    """

    increase_min_adherence: float = Field(default=0.8, ge=0, le=1)
    increase_max_rpe: float = Field(default=7.0, ge=1, le=10)
    decrease_rpe_above: float = Field(default=8.5, ge=1, le=10)
    decrease_adherence_below: float = Field(default=0.5, ge=0, le=1)
    load_increment: float = Field(default=0.025, ge=0, le=1)
    load_decrement: float = Field(default=0.05, ge=0, le=1)
    rep_decrement: int = Field(default=1, ge=0)
    min_reps: int = Field(default=1, ge=1)
    weight_rounding: float = Field(
        default=0.5, gt=0, description="Targets snap to the nearest multiple"
    )
    rpe_window: int = Field(default=3, ge=1, description="Samples averaged for RPE")
    min_samples: int = Field(default=2, ge=1)

    @model_validator(mode="after")
    def validate_thresholds(self) -> "ProgressionRule":
        """Increase and decrease bands must not overlap."""
        if self.increase_max_rpe > self.decrease_rpe_above:
            raise ValueError("increase_max_rpe must not exceed decrease_rpe_above")
        if self.decrease_adherence_below > self.increase_min_adherence:
            raise ValueError(
                "decrease_adherence_below must not exceed increase_min_adherence"
            )
        return self

    model_config = {"frozen": True}


# =============================================================================
# Recommendations
# =============================================================================


DEFAULT_CALORIE_RATES: Dict[str, float] = {
    "hiit": 400.0,
    "cardio": 350.0,
    "strength": 250.0,
    "pilates": 200.0,
    "yoga": 180.0,
}

DEFAULT_GOAL_CATEGORIES: Dict[str, FrozenSet[str]] = {
    "weight_loss": frozenset({"cardio", "hiit"}),
    "fat_loss": frozenset({"cardio", "hiit"}),
    "endurance": frozenset({"cardio", "hiit"}),
    "muscle_gain": frozenset({"strength"}),
    "hypertrophy": frozenset({"strength"}),
    "strength": frozenset({"strength", "functional"}),
    "flexibility": frozenset({"yoga", "pilates", "stretching"}),
    "mobility": frozenset({"yoga", "pilates", "stretching"}),
    "general_fitness": frozenset({"functional", "strength", "cardio", "hiit"}),
}


class RecommendationWeights(BaseModel):
    """Maximum points contributed by each scoring factor (sum <= 100)."""

    goal_alignment: float = Field(default=45.0, ge=0)
    difficulty_fit: float = Field(default=25.0, ge=0)
    novelty: float = Field(default=20.0, ge=0)
    preference: float = Field(default=10.0, ge=0)

    @model_validator(mode="after")
    def validate_total(self) -> "RecommendationWeights":
        """Confidence scores are capped at 100."""
        total = self.goal_alignment + self.difficulty_fit + self.novelty + self.preference
        if total > 100:
            raise ValueError(f"Scoring weights sum to {total}, maximum is 100")
        return self

    model_config = {"frozen": True}


class RecommendationConfig(BaseModel):
    """Filtering, scoring and calorie constants for recommendations."""

    duration_slack: float = Field(default=0.1, ge=0, description="10% over available time")
    novelty_window_days: int = Field(default=14, ge=1)
    preferred_category_min_sessions: int = Field(
        default=2,
        ge=1,
        description="Recent sessions in a category before it counts as preferred",
    )
    weights: RecommendationWeights = Field(default_factory=RecommendationWeights)
    calorie_rates: Dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_CALORIE_RATES))
    default_calorie_rate: float = Field(default=300.0, gt=0)
    goal_categories: Dict[str, FrozenSet[str]] = Field(
        default_factory=lambda: dict(DEFAULT_GOAL_CATEGORIES)
    )

    model_config = {"frozen": True}


# =============================================================================
# Adaptive Workouts
# =============================================================================


class AdaptiveWorkoutConfig(BaseModel):
    """Selection and timing constants for generated workouts."""

    min_exercises: int = Field(default=3, ge=1)
    max_exercises: int = Field(default=6, ge=1)
    min_target_minutes: int = Field(default=10, ge=1)
    max_target_minutes: int = Field(default=180, ge=1)
    seconds_per_rep: float = Field(
        default=4.0, gt=0, description="Time under tension used to estimate set length"
    )
    default_category: str = "functional"

    @model_validator(mode="after")
    def validate_bounds(self) -> "AdaptiveWorkoutConfig":
        """Minimums must not exceed maximums."""
        if self.min_exercises > self.max_exercises:
            raise ValueError("min_exercises must not exceed max_exercises")
        if self.min_target_minutes > self.max_target_minutes:
            raise ValueError("min_target_minutes must not exceed max_target_minutes")
        return self

    model_config = {"frozen": True}


# =============================================================================
# Aggregate
# =============================================================================


class EngineConfig(BaseModel):
    """All engine constants in one object."""

    strength: StrengthConfig = Field(default_factory=StrengthConfig)
    progression: ProgressionRule = Field(default_factory=ProgressionRule)
    recommendation: RecommendationConfig = Field(default_factory=RecommendationConfig)
    adaptive: AdaptiveWorkoutConfig = Field(default_factory=AdaptiveWorkoutConfig)

    model_config = {"frozen": True}


DEFAULT_ENGINE_CONFIG = EngineConfig()
