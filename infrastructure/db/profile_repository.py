"""
Supabase Training Profile Repository Implementation.

Profiles live in the training_profiles table, one row per user. Tag columns
(goals, equipment, injuries, preferences) are Postgres text arrays.
"""
from typing import Optional
import logging

from pydantic import ValidationError
from supabase import Client

from domain.models import UserTrainingProfile

logger = logging.getLogger(__name__)


class SupabaseTrainingProfileRepository:
    """
    Supabase implementation of TrainingProfileRepository.
    """

    def __init__(self, client: Client):
        self._client = client

    def get_profile(self, user_id: str) -> Optional[UserTrainingProfile]:
        """Get the training profile for a user, or None."""
        try:
            result = self._client.table("training_profiles") \
                .select("*") \
                .eq("user_id", user_id) \
                .limit(1) \
                .execute()
        except Exception as e:
            logger.exception(f"Error fetching training profile for {user_id}: {e}")
            return None

        if not result.data:
            return None

        row = {k: v for k, v in result.data[0].items() if v is not None}
        try:
            return UserTrainingProfile.model_validate(row)
        except ValidationError as e:
            logger.warning(f"Invalid training profile for {user_id}: {e}")
            return None
