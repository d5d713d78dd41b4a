"""Repository interfaces the services depend on."""

from abc import ABC, abstractmethod

from family_meal_planner.models import MealPlan, MealSlot


class MealPlanRepository(ABC):
    """Meal plan persistence. Must round-trip assignment mappings exactly."""

    @abstractmethod
    def save(self, plan: MealPlan) -> None:
        """Insert or replace a plan. A plan is written as a whole or not at all."""
        ...

    @abstractmethod
    def load_all(self, family_id: str | None = None) -> list[MealPlan]:
        """All stored plans, optionally limited to one family.

        Raises when the store cannot be listed; unreadable single records are skipped.
        """
        ...

    @abstractmethod
    def load_by_id(self, plan_id: str) -> MealPlan | None:
        ...

    @abstractmethod
    def delete(self, plan_id: str) -> bool:
        """Remove a plan. Returns False when it did not exist."""
        ...


class MealSlotRepository(ABC):
    """Per-family meal slot configuration."""

    @abstractmethod
    def load(self, family_id: str) -> list[MealSlot]:
        """Configured slots, or an empty list when the family uses defaults."""
        ...

    @abstractmethod
    def save(self, family_id: str, slots: list[MealSlot]) -> None:
        ...

    @abstractmethod
    def clear(self, family_id: str) -> None:
        ...
