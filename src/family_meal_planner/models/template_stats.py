"""Template fill statistics."""

from pydantic import BaseModel, Field


class TemplateStats(BaseModel):
    total_slots: int = Field(..., description="Slot count x 28 days")
    assigned_slots: int = Field(...)
    empty_slots: int = Field(...)
    unique_recipes: int = Field(...)
    meal_slots_count: int = Field(...)
    completion_percentage: int = Field(..., description="Assigned share, rounded half-up")


def percentage_half_up(part: int, whole: int) -> int:
    """``round(part / whole * 100)`` with .5 rounded up, in integer arithmetic."""
    if whole <= 0:
        return 0
    return (part * 200 + whole) // (whole * 2)
