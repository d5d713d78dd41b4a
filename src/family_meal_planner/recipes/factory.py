"""Recipe catalog factory - HTTP when a recipe service is configured."""

from family_meal_planner.config import get_settings
from family_meal_planner.recipes.base import RecipeCatalog
from family_meal_planner.recipes.http_catalog import HttpRecipeCatalog
from family_meal_planner.recipes.memory_catalog import InMemoryRecipeCatalog


def create_recipe_catalog() -> RecipeCatalog:
    settings = get_settings()
    if settings.recipe_service_url:
        return HttpRecipeCatalog(
            base_url=settings.recipe_service_url,
            timeout=settings.recipe_service_timeout,
        )
    return InMemoryRecipeCatalog()
