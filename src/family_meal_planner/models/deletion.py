"""Recipe deletion check results.

Deleting a recipe is always allowed; meal plans that still reference it are
reported as advisory warnings, most severe first.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field

from family_meal_planner.models.meal_plan import MealPlan


class DeletionWarningType(str, Enum):
    """Kind of deletion warning, ordered by :attr:`severity`."""

    ACTIVE_MEAL_PLAN = "activeMealPlan"
    INACTIVE_MEAL_PLAN = "inactiveMealPlan"
    GENERIC = "generic"

    @property
    def severity(self) -> int:
        """Higher is more severe."""
        return _SEVERITY[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_SEVERITY = {
    DeletionWarningType.ACTIVE_MEAL_PLAN: 3,
    DeletionWarningType.INACTIVE_MEAL_PLAN: 2,
    DeletionWarningType.GENERIC: 1,
}

_DESCRIPTIONS = {
    DeletionWarningType.ACTIVE_MEAL_PLAN: "Active Meal Plan Usage",
    DeletionWarningType.INACTIVE_MEAL_PLAN: "Meal Plan Usage",
    DeletionWarningType.GENERIC: "Warning",
}


class DeletionWarning(BaseModel):
    type: DeletionWarningType = Field(...)
    message: str = Field(...)
    meal_plan_id: str | None = Field(default=None)
    meal_plan_name: str | None = Field(default=None)

    @property
    def severity(self) -> int:
        return self.type.severity

    @classmethod
    def active_meal_plan(cls, plan: MealPlan) -> "DeletionWarning":
        return cls(
            type=DeletionWarningType.ACTIVE_MEAL_PLAN,
            message=f'Recipe is used in active meal plan "{plan.name}" ({plan.date_range})',
            meal_plan_id=plan.id,
            meal_plan_name=plan.name,
        )

    @classmethod
    def inactive_meal_plan(cls, plan: MealPlan) -> "DeletionWarning":
        return cls(
            type=DeletionWarningType.INACTIVE_MEAL_PLAN,
            message=f'Recipe is used in meal plan "{plan.name}" ({plan.date_range})',
            meal_plan_id=plan.id,
            meal_plan_name=plan.name,
        )

    @classmethod
    def generic(cls, message: str) -> "DeletionWarning":
        return cls(type=DeletionWarningType.GENERIC, message=message)


def sort_by_severity(warnings: list[DeletionWarning]) -> list[DeletionWarning]:
    """Most severe first; ties keep their original order."""
    return sorted(warnings, key=lambda w: w.severity, reverse=True)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


class DeletionValidationResult(BaseModel):
    """Outcome of checking whether a recipe can be deleted."""

    can_delete: bool = Field(...)
    warnings: list[DeletionWarning] = Field(default_factory=list)
    affected_meal_plans: list[MealPlan] = Field(default_factory=list)
    as_of: date = Field(default_factory=date.today, description="Date used for the active check")

    @classmethod
    def allowed(cls) -> "DeletionValidationResult":
        return cls(can_delete=True)

    @classmethod
    def with_warnings(
        cls,
        warnings: list[DeletionWarning],
        affected_meal_plans: list[MealPlan],
        as_of: date | None = None,
    ) -> "DeletionValidationResult":
        return cls(
            can_delete=True,
            warnings=sort_by_severity(warnings),
            affected_meal_plans=affected_meal_plans,
            as_of=as_of or date.today(),
        )

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def active_meal_plans(self) -> list[MealPlan]:
        return [p for p in self.affected_meal_plans if p.is_currently_active(self.as_of)]

    @property
    def has_active_meal_plan_conflicts(self) -> bool:
        return bool(self.active_meal_plans)

    def sorted_warnings(self) -> list[DeletionWarning]:
        return sort_by_severity(self.warnings)

    @property
    def summary_message(self) -> str:
        if self.has_warnings:
            active_count = len(self.active_meal_plans)
            total_count = len(self.affected_meal_plans)
            if active_count > 0:
                return f"Recipe is used in {_plural(active_count, 'active meal plan')}"
            if total_count > 0:
                return f"Recipe is used in {_plural(total_count, 'meal plan')}"
        return "Recipe can be safely deleted"
