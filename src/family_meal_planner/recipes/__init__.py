"""Recipe lookup collaborators."""

from family_meal_planner.recipes.base import RecipeCatalog
from family_meal_planner.recipes.factory import create_recipe_catalog
from family_meal_planner.recipes.http_catalog import HttpRecipeCatalog
from family_meal_planner.recipes.memory_catalog import InMemoryRecipeCatalog

__all__ = [
    "HttpRecipeCatalog",
    "InMemoryRecipeCatalog",
    "RecipeCatalog",
    "create_recipe_catalog",
]
