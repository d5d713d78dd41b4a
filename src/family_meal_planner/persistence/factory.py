"""Picks the storage backend for plans and family slot settings."""

import logging
from pathlib import Path
from typing import NamedTuple

from family_meal_planner.config import Settings, get_settings
from family_meal_planner.persistence.base import MealPlanRepository, MealSlotRepository
from family_meal_planner.persistence.meal_plan_store import MealPlanStore
from family_meal_planner.persistence.meal_slot_store import MealSlotStore
from family_meal_planner.persistence.redis_store import (
    RedisMealPlanStore,
    RedisMealSlotStore,
)

logger = logging.getLogger(__name__)


class Stores(NamedTuple):
    meal_plans: MealPlanRepository
    meal_slots: MealSlotRepository


def create_stores(settings: Settings | None = None) -> Stores:
    """Redis-backed stores when ``redis_url`` is configured, JSON files under ``data_dir`` otherwise."""
    settings = settings or get_settings()
    if settings.redis_url:
        logger.info("Using Redis persistence")
        return Stores(
            meal_plans=RedisMealPlanStore(settings.redis_url),
            meal_slots=RedisMealSlotStore(settings.redis_url),
        )
    data_dir = Path(settings.data_dir)
    logger.info("Using file persistence under %s", data_dir)
    return Stores(
        meal_plans=MealPlanStore(data_dir),
        meal_slots=MealSlotStore(data_dir),
    )
