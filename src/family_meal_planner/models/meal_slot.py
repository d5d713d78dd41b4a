"""Meal slot data model."""

from typing import Any

from pydantic import BaseModel, Field

MAX_SLOT_NAME_LENGTH = 30


class MealSlot(BaseModel):
    """A named meal category within a day, configurable per family."""

    id: str = Field(..., description="Value stored in assignment keys, e.g. breakfast")
    name: str = Field(..., description="Display name, e.g. Breakfast")
    order: int = Field(..., description="Position in the day, starting at 1")
    is_default: bool = Field(default=False)

    def validation_error(self) -> str | None:
        """First problem with this slot, or None."""
        if not self.id.strip():
            return "Meal slot id cannot be empty"
        if not self.name.strip():
            return "Meal slot name cannot be empty"
        if len(self.name) > MAX_SLOT_NAME_LENGTH:
            return f"Meal slot name cannot exceed {MAX_SLOT_NAME_LENGTH} characters"
        if self.order < 1:
            return "Meal slot order must be at least 1"
        return None

    @property
    def is_valid(self) -> bool:
        return self.validation_error() is None


def default_meal_slots(rules: dict[str, Any]) -> list[MealSlot]:
    """Family-level default slot set from planner rules."""
    return [
        MealSlot(is_default=True, **slot)
        for slot in rules.get("default_meal_slots", [])
    ]
