"""
Training Profile Repository Interface (Port).
"""
from typing import Optional, Protocol

from domain.models import UserTrainingProfile


class TrainingProfileRepository(Protocol):
    """Abstract interface for user training profile access."""

    def get_profile(self, user_id: str) -> Optional[UserTrainingProfile]:
        """
        Get the training profile for a user.

        Args:
            user_id: User ID

        Returns:
            UserTrainingProfile, or None if the user has not set one up
        """
        ...
