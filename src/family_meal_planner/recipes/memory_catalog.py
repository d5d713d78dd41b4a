"""In-process recipe catalog, used when no recipe service is configured."""

from family_meal_planner.models import RecipeSummary
from family_meal_planner.recipes.base import RecipeCatalog


class InMemoryRecipeCatalog(RecipeCatalog):
    def __init__(self, recipes: list[RecipeSummary] | None = None) -> None:
        self._recipes: dict[str, RecipeSummary] = {r.id: r for r in recipes or []}

    def get(self, recipe_id: str) -> RecipeSummary | None:
        return self._recipes.get(recipe_id)

    def add(self, recipe: RecipeSummary) -> None:
        self._recipes[recipe.id] = recipe

    def remove(self, recipe_id: str) -> None:
        self._recipes.pop(recipe_id, None)
