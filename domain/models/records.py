"""
Personal record model.

At most one record exists per (user_id, exercise_id, record_type). A new
value may only replace it when strictly better: higher for the MAX_* types,
lower for BEST_TIME.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from domain.models.performance import as_utc


class RecordType(str, Enum):
    """Kinds of personal record tracked per exercise."""

    MAX_WEIGHT = "MAX_WEIGHT"
    MAX_REPS = "MAX_REPS"
    MAX_VOLUME = "MAX_VOLUME"
    BEST_TIME = "BEST_TIME"
    MAX_DISTANCE = "MAX_DISTANCE"

    @property
    def lower_is_better(self) -> bool:
        """BEST_TIME improves downwards; every other type improves upwards."""
        return self is RecordType.BEST_TIME

    @property
    def is_weight_type(self) -> bool:
        """Records whose value depends on the load lifted."""
        return self in (RecordType.MAX_WEIGHT, RecordType.MAX_VOLUME)


RecordKey = Tuple[str, str, RecordType]


class PersonalRecord(BaseModel):
    """A best-known value for one (user, exercise, record type)."""

    user_id: str = Field(..., min_length=1)
    exercise_id: str = Field(..., min_length=1)
    record_type: RecordType
    value: float = Field(..., ge=0)
    supporting_reps: Optional[int] = Field(
        default=None,
        ge=0,
        description="Reps of the set that produced a weight-type record",
    )
    achieved_at: datetime
    previous_value: Optional[float] = Field(
        default=None, description="Value this record superseded (for delta display)"
    )

    @field_validator("achieved_at")
    @classmethod
    def normalize_achieved_at(cls, v: datetime) -> datetime:
        return as_utc(v)

    @property
    def key(self) -> RecordKey:
        """Upsert key: (user_id, exercise_id, record_type)."""
        return (self.user_id, self.exercise_id, self.record_type)

    @property
    def improvement(self) -> Optional[float]:
        """Absolute improvement over the previous value, if there was one."""
        if self.previous_value is None:
            return None
        if self.record_type.lower_is_better:
            return round(self.previous_value - self.value, 2)
        return round(self.value - self.previous_value, 2)

    def is_better_than(self, other: Optional["PersonalRecord"]) -> bool:
        """Strict improvement check against an existing record for the same key."""
        if other is None:
            return True
        if self.record_type.lower_is_better:
            return self.value < other.value
        return self.value > other.value

    model_config = {"frozen": True}
