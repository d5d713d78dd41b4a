"""Business logic services."""

from family_meal_planner.services.meal_plan_service import (
    TEMPLATE_REFERENCE_DATE,
    MealPlanService,
)
from family_meal_planner.services.meal_slot_service import MealSlotService

__all__ = ["MealPlanService", "MealSlotService", "TEMPLATE_REFERENCE_DATE"]
