"""Meal slot service - per-family slot configuration."""

import logging
from typing import Any

from family_meal_planner.exceptions import MealSlotException
from family_meal_planner.models import MealSlot
from family_meal_planner.models.meal_plan import MAX_MEAL_SLOTS
from family_meal_planner.models.meal_slot import default_meal_slots
from family_meal_planner.persistence import MealSlotRepository

logger = logging.getLogger(__name__)


class MealSlotService:
    """Reads and updates a family's slot set, falling back to the configured defaults."""

    def __init__(self, slot_store: MealSlotRepository, rules: dict[str, Any]) -> None:
        self._store = slot_store
        self._rules = rules

    def get_default_meal_slots(self) -> list[MealSlot]:
        return default_meal_slots(self._rules)

    def get_family_meal_slots(self, family_id: str) -> list[MealSlot]:
        slots = self._store.load(family_id)
        if not slots:
            return self.get_default_meal_slots()
        return sorted(slots, key=lambda s: s.order)

    def get_family_slot_ids(self, family_id: str) -> list[str]:
        """Slot ids in display order, as stored in a plan's ``meal_slots``."""
        return [s.id for s in self.get_family_meal_slots(family_id)]

    def update_family_meal_slots(self, family_id: str, slots: list[MealSlot]) -> list[MealSlot]:
        self._validate(slots)
        ordered = sorted(slots, key=lambda s: s.order)
        self._store.save(family_id, ordered)
        logger.info("Updated meal slots for family %s: %s", family_id, [s.id for s in ordered])
        return ordered

    def reset_family_meal_slots(self, family_id: str) -> list[MealSlot]:
        self._store.clear(family_id)
        return self.get_default_meal_slots()

    def _validate(self, slots: list[MealSlot]) -> None:
        if not slots:
            raise MealSlotException("At least one meal slot is required", "INVALID_SLOTS")
        if len(slots) > MAX_MEAL_SLOTS:
            raise MealSlotException(
                f"Cannot have more than {MAX_MEAL_SLOTS} meal slots",
                "INVALID_SLOTS",
            )
        for slot in slots:
            error = slot.validation_error()
            if error:
                raise MealSlotException(error, "INVALID_SLOT")
        if len({s.id for s in slots}) != len(slots):
            raise MealSlotException("Duplicate meal slot ids are not allowed", "DUPLICATE_SLOT_IDS")
        if len({s.name.strip().lower() for s in slots}) != len(slots):
            raise MealSlotException(
                "Duplicate meal slot names are not allowed",
                "DUPLICATE_SLOT_NAMES",
            )
        if len({s.order for s in slots}) != len(slots):
            raise MealSlotException(
                "Duplicate meal slot orders are not allowed",
                "DUPLICATE_SLOT_ORDERS",
            )
