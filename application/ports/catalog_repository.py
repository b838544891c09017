"""
Workout Catalog Repository Interface (Port).

The catalog is the set of workout templates recommendations are drawn from.
"""
from typing import List, Optional, Protocol

from domain.models import WorkoutTemplate


class WorkoutCatalogRepository(Protocol):
    """Abstract interface for workout template access."""

    def list_templates(self) -> List[WorkoutTemplate]:
        """
        Get every template in the catalog.

        Returns:
            List of WorkoutTemplate (empty if the catalog is empty)
        """
        ...

    def get_template(self, template_id: str) -> Optional[WorkoutTemplate]:
        """
        Get a single template by ID.

        Returns:
            WorkoutTemplate, or None if not found
        """
        ...
