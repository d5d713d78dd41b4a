"""Tests for recipe deletion checks and warning ordering."""

from datetime import date

from family_meal_planner.models import DeletionValidationResult, DeletionWarning, DeletionWarningType
from family_meal_planner.models.deletion import sort_by_severity

from conftest import PLAN_START, TODAY


def test_severity_order():
    assert DeletionWarningType.ACTIVE_MEAL_PLAN.severity > DeletionWarningType.INACTIVE_MEAL_PLAN.severity
    assert DeletionWarningType.INACTIVE_MEAL_PLAN.severity > DeletionWarningType.GENERIC.severity


def test_sort_by_severity(make_plan):
    plan = make_plan()
    generic = DeletionWarning.generic("Heads up")
    inactive = DeletionWarning.inactive_meal_plan(plan)
    active = DeletionWarning.active_meal_plan(plan)

    ordered = sort_by_severity([generic, inactive, active])

    assert [w.type for w in ordered] == [
        DeletionWarningType.ACTIVE_MEAL_PLAN,
        DeletionWarningType.INACTIVE_MEAL_PLAN,
        DeletionWarningType.GENERIC,
    ]


def test_warning_messages_name_the_plan(make_plan):
    plan = make_plan()

    warning = DeletionWarning.active_meal_plan(plan)

    assert warning.meal_plan_id == plan.id
    assert warning.meal_plan_name == "March Dinners"
    assert warning.message == 'Recipe is used in active meal plan "March Dinners" (3/15 - 4/11)'


def test_unused_recipe_can_be_safely_deleted(service, saved_plan):
    result = service.validate_recipe_for_deletion("r1", today=TODAY)

    assert result.can_delete
    assert not result.has_warnings
    assert result.summary_message == "Recipe can be safely deleted"


def test_active_plan_usage_is_reported_first(service):
    current = service.create_meal_plan(
        name="Current",
        family_id="fam-1",
        start_date=PLAN_START,
        meal_slots=["lunch"],
        created_by="user-1",
        assignments={"2024-03-16_lunch": "r1"},
    )
    service.create_meal_plan(
        name="Old",
        family_id="fam-1",
        start_date=date(2024, 1, 1),
        meal_slots=["lunch"],
        created_by="user-1",
        assignments={"2024-01-05_lunch": "r1"},
    )

    result = service.validate_recipe_for_deletion("r1", today=TODAY)

    assert result.can_delete
    assert len(result.warnings) == 2
    assert result.warnings[0].type == DeletionWarningType.ACTIVE_MEAL_PLAN
    assert result.warnings[0].meal_plan_id == current.id
    assert result.has_active_meal_plan_conflicts
    assert result.summary_message == "Recipe is used in 1 active meal plan"


def test_inactive_plan_usage_summary(service):
    service.create_meal_plan(
        name="Old",
        family_id="fam-1",
        start_date=date(2024, 1, 1),
        meal_slots=["lunch"],
        created_by="user-1",
        assignments={"2024-01-05_lunch": "r1"},
    )

    result = service.validate_recipe_for_deletion("r1", today=TODAY)

    assert result.can_delete
    assert not result.has_active_meal_plan_conflicts
    assert result.warnings[0].type == DeletionWarningType.INACTIVE_MEAL_PLAN
    assert result.summary_message == "Recipe is used in 1 meal plan"


def test_summary_pluralizes(make_plan):
    plans = [make_plan(), make_plan()]
    warnings = [DeletionWarning.active_meal_plan(p) for p in plans]

    result = DeletionValidationResult.with_warnings(warnings, plans, as_of=TODAY)

    assert result.summary_message == "Recipe is used in 2 active meal plans"


def test_factories_always_allow_deletion(make_plan):
    plan = make_plan()
    generic = DeletionWarning.generic("Heads up")
    active = DeletionWarning.active_meal_plan(plan)

    result = DeletionValidationResult.with_warnings([generic, active], [plan], as_of=TODAY)

    assert DeletionValidationResult.allowed().can_delete
    assert result.can_delete
    assert [w.type for w in result.sorted_warnings()] == [
        DeletionWarningType.ACTIVE_MEAL_PLAN,
        DeletionWarningType.GENERIC,
    ]
