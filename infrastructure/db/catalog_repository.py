"""
Supabase Workout Catalog Repository Implementation.

Templates live in the workout_templates table. The exercises column is a
JSONB array of {exercise_id, name, sets, reps, rest_seconds, weight,
equipment, muscle_groups} objects.

The catalog changes rarely and is shared by every user, so it is cached on
first load (same approach as SupabaseExercisesRepository's exercise cache).
"""
from typing import Dict, List, Optional
import logging

from pydantic import ValidationError
from supabase import Client

from domain.models import WorkoutTemplate

logger = logging.getLogger(__name__)


class SupabaseWorkoutCatalogRepository:
    """
    Supabase implementation of WorkoutCatalogRepository.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client
        self._cache: Optional[Dict[str, WorkoutTemplate]] = None

    def _load(self) -> Dict[str, WorkoutTemplate]:
        if self._cache is not None:
            return self._cache

        try:
            result = self._client.table("workout_templates") \
                .select("id, name, category, duration_minutes, difficulty, exercises") \
                .order("id") \
                .execute()
        except Exception as e:
            logger.exception(f"Error loading workout catalog: {e}")
            return {}

        templates: Dict[str, WorkoutTemplate] = {}
        for row in result.data or []:
            row = {k: v for k, v in row.items() if v is not None}
            try:
                template = WorkoutTemplate.model_validate(row)
            except ValidationError as e:
                logger.warning(f"Skipping invalid workout template {row.get('id')}: {e}")
                continue
            templates[template.id] = template

        self._cache = templates
        logger.info(f"Loaded {len(templates)} workout templates into cache")
        return templates

    def list_templates(self) -> List[WorkoutTemplate]:
        """Get every template in the catalog."""
        return list(self._load().values())

    def get_template(self, template_id: str) -> Optional[WorkoutTemplate]:
        """Get a single template by ID."""
        return self._load().get(template_id)

    def refresh(self) -> None:
        """Drop the cache so the next read reloads the catalog."""
        self._cache = None
