"""
Progression adjustment model.

One adjustment per exercise per training cycle, produced by the progression
calculator from recent effort (RPE) and plan adherence.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ProgressionRationale(str, Enum):
    """Why the target changed (or did not)."""

    INCREASE_LOAD = "increase_load"
    HOLD_LOAD = "hold_load"
    DECREASE_LOAD = "decrease_load"
    INSUFFICIENT_DATA = "insufficient_data"


class ProgressionAdjustment(BaseModel):
    """
    Target load/reps for the next session of one exercise.

    For INSUFFICIENT_DATA there is no numeric target: `target_weight` and
    `target_reps` are None and the baseline is echoed back.
    """

    exercise_id: str
    target_weight: Optional[float] = None
    target_reps: Optional[int] = None
    rationale: ProgressionRationale
    baseline_weight: float = Field(ge=0)
    baseline_reps: int = Field(ge=0)
    average_rpe: Optional[float] = None
    sample_count: int = Field(default=0, ge=0)
    exceeds_record: bool = Field(
        default=False,
        description="Target weight is above the current MAX_WEIGHT record",
    )

    @property
    def weight_change(self) -> Optional[float]:
        """Target minus baseline weight, or None without a target."""
        if self.target_weight is None:
            return None
        return round(self.target_weight - self.baseline_weight, 2)

    model_config = {"frozen": True}
