"""Recipe summary as seen by the meal planner."""

from pydantic import BaseModel, Field


class RecipeSummary(BaseModel):
    """The recipe fields a plan grid needs. Recipes themselves live elsewhere."""

    id: str = Field(...)
    title: str = Field(...)
    prep_time_minutes: int | None = Field(default=None)
    servings: int | None = Field(default=None)
    available: bool = Field(default=True, description="False for placeholders of missing recipes")

    @classmethod
    def unavailable(cls, recipe_id: str, title: str = "Recipe unavailable") -> "RecipeSummary":
        """Placeholder for a recipe that could not be resolved."""
        return cls(id=recipe_id, title=title, available=False)
