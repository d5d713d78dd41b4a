"""Persistence layer."""

from family_meal_planner.persistence.base import MealPlanRepository, MealSlotRepository
from family_meal_planner.persistence.factory import Stores, create_stores
from family_meal_planner.persistence.meal_plan_store import MealPlanStore
from family_meal_planner.persistence.meal_slot_store import MealSlotStore
from family_meal_planner.persistence.redis_store import (
    RedisMealPlanStore,
    RedisMealSlotStore,
)

__all__ = [
    "MealPlanRepository",
    "MealPlanStore",
    "MealSlotRepository",
    "MealSlotStore",
    "RedisMealPlanStore",
    "RedisMealSlotStore",
    "Stores",
    "create_stores",
]
