"""
Recommendations router for ranked workout suggestions and adaptive workouts.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_training_service
from api.errors import engine_errors
from backend.core.training_service import TrainingIntelligenceService
from domain.models import (
    AdaptiveWorkout,
    CatalogExclusion,
    ProgressionAdjustment,
    RecommendationResult,
    UserTrainingProfile,
)

router = APIRouter(
    prefix="/recommendations",
    tags=["Recommendations"],
)


class RecommendationRequest(BaseModel):
    """Request body for recommendations."""
    limit: int = Field(default=3, description="Maximum results (1-10)")
    profile: Optional[UserTrainingProfile] = Field(
        default=None,
        description="Profile to use instead of the stored one",
    )


class RecommendationsResponse(BaseModel):
    """Ranked recommendations and the filtered-out catalog entries."""
    recommendations: List[RecommendationResult]
    excluded: List[CatalogExclusion] = Field(default_factory=list)
    catalog_size: int = 0


# Upper bound on results per request
MAX_LIMIT = 10


@router.post("", response_model=RecommendationsResponse)
def get_recommendations(
    request: RecommendationRequest,
    user_id: str = Depends(get_current_user),
    service: TrainingIntelligenceService = Depends(get_training_service),
) -> RecommendationsResponse:
    """
    Get workouts ranked by goal alignment, difficulty fit, novelty and
    preference, each with reasons and adaptations.
    """
    if request.limit > MAX_LIMIT:
        raise HTTPException(status_code=422, detail=f"limit must be <= {MAX_LIMIT}")

    with engine_errors():
        report = service.get_recommendations(
            user_id, limit=request.limit, profile=request.profile
        )

    if report is None:
        raise HTTPException(
            status_code=404,
            detail="No training profile found. Provide one in the request body.",
        )

    return RecommendationsResponse(
        recommendations=report.recommendations,
        excluded=report.excluded,
        catalog_size=report.catalog_size,
    )


class AdaptiveWorkoutRequest(BaseModel):
    """Request body for an adaptive workout."""
    target_minutes: int = Field(default=45, ge=10, le=180, description="Session length to fill")
    focus_areas: List[str] = Field(
        default_factory=list,
        description="Muscle groups to focus on (e.g. 'chest', 'back')",
    )
    profile: Optional[UserTrainingProfile] = Field(
        default=None,
        description="Profile to use instead of the stored one",
    )


class AdaptiveWorkoutResponse(BaseModel):
    """Generated workout and the progression targets behind it."""
    workout: AdaptiveWorkout
    progression_targets: List[ProgressionAdjustment] = Field(default_factory=list)


@router.post("/adaptive", response_model=AdaptiveWorkoutResponse)
def get_adaptive_workout(
    request: AdaptiveWorkoutRequest,
    user_id: str = Depends(get_current_user),
    service: TrainingIntelligenceService = Depends(get_training_service),
) -> AdaptiveWorkoutResponse:
    """
    Build a one-off workout from catalog exercises, filtered by focus areas
    and sized to the target duration, with loads from progression targets.
    """
    with engine_errors():
        report = service.get_adaptive_workout(
            user_id,
            target_minutes=request.target_minutes,
            focus_areas=request.focus_areas,
            profile=request.profile,
        )

    if report.workout is None:
        raise HTTPException(
            status_code=400,
            detail="Could not build an adaptive workout. Try different focus areas or a longer duration.",
        )

    return AdaptiveWorkoutResponse(
        workout=report.workout,
        progression_targets=report.progression_targets,
    )
