"""Tests for family meal slot configuration."""

import pytest

from family_meal_planner.exceptions import MealSlotException
from family_meal_planner.models import MealSlot


def _slots(*entries):
    return [MealSlot(id=slot_id, name=name, order=order) for slot_id, name, order in entries]


def test_defaults_come_from_config(slot_service):
    slots = slot_service.get_family_meal_slots("fam-1")

    assert [s.id for s in slots] == ["breakfast", "lunch", "dinner"]
    assert all(s.is_default for s in slots)


def test_update_stores_slots_in_order(slot_service):
    updated = slot_service.update_family_meal_slots(
        "fam-1",
        _slots(("dinner", "Dinner", 3), ("second_breakfast", "Second Breakfast", 1), ("snack", "Snack", 2)),
    )

    assert [s.id for s in updated] == ["second_breakfast", "snack", "dinner"]
    assert slot_service.get_family_slot_ids("fam-1") == ["second_breakfast", "snack", "dinner"]
    assert slot_service.get_family_slot_ids("fam-2") == ["breakfast", "lunch", "dinner"]


def test_reset_restores_defaults(slot_service):
    slot_service.update_family_meal_slots("fam-1", _slots(("brunch", "Brunch", 1)))

    slots = slot_service.reset_family_meal_slots("fam-1")

    assert [s.id for s in slots] == ["breakfast", "lunch", "dinner"]
    assert slot_service.get_family_slot_ids("fam-1") == ["breakfast", "lunch", "dinner"]


@pytest.mark.parametrize(
    "slots, code",
    [
        ([], "INVALID_SLOTS"),
        (_slots(*[(f"s{i}", f"Slot {i}", i) for i in range(1, 10)]), "INVALID_SLOTS"),
        (_slots(("lunch", "", 1)), "INVALID_SLOT"),
        (_slots(("lunch", "x" * 31, 1)), "INVALID_SLOT"),
        (_slots(("lunch", "Lunch", 0)), "INVALID_SLOT"),
        (_slots(("lunch", "Lunch", 1), ("lunch", "Late Lunch", 2)), "DUPLICATE_SLOT_IDS"),
        (_slots(("lunch", "Lunch", 1), ("late", " lunch", 2)), "DUPLICATE_SLOT_NAMES"),
        (_slots(("lunch", "Lunch", 1), ("dinner", "Dinner", 1)), "DUPLICATE_SLOT_ORDERS"),
    ],
)
def test_invalid_slot_sets_are_rejected(slot_service, slots, code):
    with pytest.raises(MealSlotException) as exc_info:
        slot_service.update_family_meal_slots("fam-1", slots)

    assert exc_info.value.code == code
    assert slot_service.get_family_slot_ids("fam-1") == ["breakfast", "lunch", "dinner"]
