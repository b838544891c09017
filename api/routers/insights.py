"""
Insights router for consistency and recovery guidance.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_training_service
from api.errors import engine_errors
from backend.core.training_service import TrainingIntelligenceService

router = APIRouter(
    prefix="/insights",
    tags=["Insights"],
)


class RestResponse(BaseModel):
    """Recovery guidance after the latest workout."""
    minimum_hours: int
    active_recovery: bool
    nutrition_focus: List[str] = Field(default_factory=list)


class InsightsResponse(BaseModel):
    """Response model for training insights."""
    days: int
    sessions_completed: int
    sessions_planned: int
    adherence: float
    consistency_score: int
    last_workout_id: Optional[str] = None
    last_workout_intensity: Optional[float] = None
    rest: Optional[RestResponse] = None


@router.get("", response_model=InsightsResponse)
def get_insights(
    days: int = Query(30, ge=1, le=365, description="Window in days"),
    user_id: str = Depends(get_current_user),
    service: TrainingIntelligenceService = Depends(get_training_service),
) -> InsightsResponse:
    """
    Get a consistency score (0-100), adherence, and rest guidance based on
    the intensity of the most recent workout.
    """
    with engine_errors():
        insights = service.get_training_insights(user_id, days=days)

    rest = None
    if insights.rest is not None:
        rest = RestResponse(
            minimum_hours=insights.rest.minimum_hours,
            active_recovery=insights.rest.active_recovery,
            nutrition_focus=insights.rest.nutrition_focus,
        )

    return InsightsResponse(
        days=insights.days,
        sessions_completed=insights.sessions_completed,
        sessions_planned=insights.sessions_planned,
        adherence=insights.adherence,
        consistency_score=insights.consistency_score,
        last_workout_id=insights.last_workout_id,
        last_workout_intensity=insights.last_workout_intensity,
        rest=rest,
    )
