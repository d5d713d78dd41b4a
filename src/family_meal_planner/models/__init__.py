"""Data models."""

from family_meal_planner.models.deletion import (
    DeletionValidationResult,
    DeletionWarning,
    DeletionWarningType,
)
from family_meal_planner.models.meal_assignment import MealAssignment
from family_meal_planner.models.meal_plan import MealPlan, MealPlanRecord, TemplateInfo
from family_meal_planner.models.meal_slot import MealSlot
from family_meal_planner.models.recipe import RecipeSummary
from family_meal_planner.models.template_stats import TemplateStats

__all__ = [
    "DeletionValidationResult",
    "DeletionWarning",
    "DeletionWarningType",
    "MealAssignment",
    "MealPlan",
    "MealPlanRecord",
    "MealSlot",
    "RecipeSummary",
    "TemplateInfo",
    "TemplateStats",
]
