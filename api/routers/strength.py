"""
Strength router for one-rep-max estimation.

This router provides endpoints for:
- Estimating 1RM from a single (weight, reps) set
- Strength summary for an exercise: best estimate, trend, recent estimates
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_training_service
from api.errors import engine_errors
from backend.core.strength_estimator import brzycki, epley, estimate_one_rep_max, lander
from backend.core.training_service import TrainingIntelligenceService
from domain.models import PerformanceSample

router = APIRouter(
    prefix="/strength",
    tags=["Strength"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class EstimateRequest(BaseModel):
    """A single set to estimate from."""
    weight: float = Field(..., description="Weight lifted (> 0)")
    reps: int = Field(..., description="Reps completed (>= 1)")


class EstimateResponse(BaseModel):
    """Estimated 1RM and the individual formula results."""
    weight: float
    reps: int
    one_rep_max: float
    epley: float
    brzycki: float
    lander: float


class EstimatePoint(BaseModel):
    """One historical estimate."""
    one_rep_max: float
    weight: float
    reps: int
    achieved_at: datetime


class StrengthSummaryResponse(BaseModel):
    """Response model for the one-rep-max summary endpoint."""
    exercise_id: str
    days: int
    current_one_rep_max: Optional[float] = None
    best_sample: Optional[PerformanceSample] = None
    trend_percent: float = 0.0
    eligible_sets: int = 0
    history: List[EstimatePoint] = Field(default_factory=list)


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/estimate", response_model=EstimateResponse)
def estimate(
    request: EstimateRequest,
    user_id: str = Depends(get_current_user),
) -> EstimateResponse:
    """
    Estimate 1RM as the mean of the Epley, Brzycki and Lander formulas.
    """
    with engine_errors():
        return EstimateResponse(
            weight=request.weight,
            reps=request.reps,
            one_rep_max=round(estimate_one_rep_max(request.weight, request.reps), 1),
            epley=round(epley(request.weight, request.reps), 1),
            brzycki=round(brzycki(request.weight, request.reps), 1),
            lander=round(lander(request.weight, request.reps), 1),
        )


@router.get("/exercises/{exercise_id}/one-rep-max", response_model=StrengthSummaryResponse)
def get_one_rep_max(
    exercise_id: str = Path(..., description="Canonical exercise ID"),
    days: int = Query(90, ge=1, le=3650, description="Lookback window in days"),
    user_id: str = Depends(get_current_user),
    service: TrainingIntelligenceService = Depends(get_training_service),
) -> StrengthSummaryResponse:
    """
    Get the current estimated 1RM for an exercise.

    Only strength sets (weight > 0, 1-15 reps) count. The trend compares the
    average estimate over the last 30 days with everything older.
    """
    with engine_errors():
        summary = service.get_strength_summary(user_id, exercise_id, days=days)

    return StrengthSummaryResponse(
        exercise_id=summary.exercise_id,
        days=summary.days,
        current_one_rep_max=summary.current_one_rep_max,
        best_sample=summary.best_sample,
        trend_percent=summary.trend_percent,
        eligible_sets=summary.eligible_sets,
        history=[
            EstimatePoint(
                one_rep_max=round(e.value, 1),
                weight=e.supporting_sample.weight,
                reps=e.supporting_sample.reps,
                achieved_at=e.supporting_sample.achieved_at,
            )
            for e in summary.history
        ],
    )
