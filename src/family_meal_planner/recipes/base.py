"""Recipe collaborator interface."""

from abc import ABC, abstractmethod

from family_meal_planner.models import RecipeSummary


class RecipeCatalog(ABC):
    """Resolves recipe ids to the summary fields a meal plan displays."""

    @abstractmethod
    def get(self, recipe_id: str) -> RecipeSummary | None:
        """Return the recipe summary, or None when the recipe does not exist."""
        ...
