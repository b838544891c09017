"""
Router package for the training intelligence API.

This package contains all API routers organized by domain:
- health: Health check endpoint
- strength: One-rep-max estimation and strength summaries
- records: Personal records, set logging and record backfill
- progression: Next-session load/rep targets
- recommendations: Ranked workout recommendations
- insights: Consistency score and rest guidance
"""

from api.routers.health import router as health_router
from api.routers.strength import router as strength_router
from api.routers.records import router as records_router
from api.routers.progression import router as progression_router
from api.routers.recommendations import router as recommendations_router
from api.routers.insights import router as insights_router

__all__ = [
    "health_router",
    "strength_router",
    "records_router",
    "progression_router",
    "recommendations_router",
    "insights_router",
]
