"""A single populated cell of a meal plan grid."""

from datetime import date

from pydantic import BaseModel, Field

from family_meal_planner.models.recipe import RecipeSummary
from family_meal_planner.planning.assignment_key import encode_assignment_key


class MealAssignment(BaseModel):
    """Recipe assigned to one (date, slot) of a plan, with resolved recipe data."""

    meal_plan_id: str = Field(...)
    day: date = Field(...)
    slot: str = Field(...)
    recipe_id: str = Field(...)
    recipe: RecipeSummary | None = Field(default=None)

    @property
    def assignment_key(self) -> str:
        return encode_assignment_key(self.day, self.slot)

    @property
    def recipe_available(self) -> bool:
        return self.recipe is not None and self.recipe.available
