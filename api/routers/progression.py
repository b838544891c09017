"""
Progression router for next-session targets.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_training_service
from api.errors import engine_errors
from backend.core.training_service import TrainingIntelligenceService
from domain.models import ProgressionAdjustment

router = APIRouter(
    prefix="/progression",
    tags=["Progression"],
)


class ProgressionTargetsResponse(BaseModel):
    """Response model for progression targets."""
    adherence: float
    adherence_derived: bool
    sessions_completed: int
    sessions_planned: int
    adjustments: List[ProgressionAdjustment] = Field(default_factory=list)


@router.get("/targets", response_model=ProgressionTargetsResponse)
def get_progression_targets(
    adherence: Optional[float] = Query(
        None,
        description="Fraction of planned sessions completed (0-1); derived from history if omitted",
    ),
    days: int = Query(28, ge=1, le=365, description="Lookback window in days"),
    user_id: str = Depends(get_current_user),
    service: TrainingIntelligenceService = Depends(get_training_service),
) -> ProgressionTargetsResponse:
    """
    Get the load/rep target for the next session of each recent exercise.

    - increase_load: adherence >= 0.8 and average RPE <= 7
    - decrease_load: average RPE > 8.5 or adherence < 0.5
    - hold_load: otherwise
    - insufficient_data: fewer than 2 samples (no numeric target)
    """
    with engine_errors():
        targets = service.get_progression_targets(user_id, adherence=adherence, days=days)

    return ProgressionTargetsResponse(
        adherence=targets.adherence,
        adherence_derived=targets.adherence_derived,
        sessions_completed=targets.sessions_completed,
        sessions_planned=targets.sessions_planned,
        adjustments=targets.adjustments,
    )
