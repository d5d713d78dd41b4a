"""
Pytest configuration and shared fixtures.

Fixtures are reusable test setup that can be injected into tests.
"""

from datetime import date

import pytest

from family_meal_planner.config import get_planner_rules
from family_meal_planner.models import MealPlan, RecipeSummary
from family_meal_planner.persistence import MealPlanStore, MealSlotStore
from family_meal_planner.recipes import InMemoryRecipeCatalog
from family_meal_planner.services import MealPlanService, MealSlotService

PLAN_START = date(2024, 3, 15)
TODAY = date(2024, 3, 20)


@pytest.fixture
def plan_store(tmp_path):
    """File-backed meal plan store in a fresh temporary directory."""
    return MealPlanStore(tmp_path)


@pytest.fixture
def slot_store(tmp_path):
    return MealSlotStore(tmp_path)


@pytest.fixture
def recipe_catalog():
    """Catalog with three known recipes: r1, r2, r3."""
    return InMemoryRecipeCatalog(
        [
            RecipeSummary(id="r1", title="Honey Ginger Chicken", prep_time_minutes=30, servings=4),
            RecipeSummary(id="r2", title="Lentil Soup", prep_time_minutes=45, servings=6),
            RecipeSummary(id="r3", title="Overnight Oats", prep_time_minutes=5, servings=2),
        ]
    )


@pytest.fixture
def service(plan_store, recipe_catalog):
    return MealPlanService(plan_store, recipe_catalog)


@pytest.fixture
def slot_service(slot_store):
    return MealSlotService(slot_store, get_planner_rules())


@pytest.fixture
def make_plan():
    """
    Factory for unsaved plans.

    Usage in tests:
        def test_something(make_plan):
            plan = make_plan(assignments={"2024-03-15_lunch": "r1"})
    """

    def _make(**overrides):
        fields = {
            "name": "March Dinners",
            "family_id": "fam-1",
            "start_date": PLAN_START,
            "meal_slots": ["breakfast", "lunch", "dinner"],
            "created_by": "user-1",
        }
        fields.update(overrides)
        return MealPlan.create(**fields)

    return _make


@pytest.fixture
def saved_plan(service):
    """A persisted 3-slot plan starting 2024-03-15 with no assignments."""
    return service.create_meal_plan(
        name="March Dinners",
        family_id="fam-1",
        start_date=PLAN_START,
        meal_slots=["breakfast", "lunch", "dinner"],
        created_by="user-1",
    )
