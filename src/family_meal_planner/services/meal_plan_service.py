"""Meal plan service - business logic layer."""

import logging
from datetime import date, datetime, timedelta

from family_meal_planner.exceptions import MealPlanException
from family_meal_planner.models import (
    DeletionValidationResult,
    DeletionWarning,
    MealAssignment,
    MealPlan,
    RecipeSummary,
    TemplateStats,
)
from family_meal_planner.models.meal_plan import MAX_NAME_LENGTH
from family_meal_planner.models.template_stats import percentage_half_up
from family_meal_planner.persistence import MealPlanRepository
from family_meal_planner.planning.assignment_key import (
    AssignmentKeyError,
    decode_assignment_key,
    encode_assignment_key,
    parse_assignment_key,
)
from family_meal_planner.planning.calendar import (
    PLAN_LENGTH_DAYS,
    day_offset,
    get_days_remaining,
    is_date_in_plan,
    to_calendar_date,
)
from family_meal_planner.recipes import RecipeCatalog

logger = logging.getLogger(__name__)

# Templates are anchored here instead of a real month. 2024-01-01 is a Monday.
TEMPLATE_REFERENCE_DATE = date(2024, 1, 1)


class MealPlanService:
    """Orchestrates meal plan edits, templates and recipe-reference queries.

    Holds no plan state: every call loads from and writes to the injected
    repository. Permission checks are the caller's job.
    """

    def __init__(
        self,
        meal_plan_store: MealPlanRepository,
        recipe_catalog: RecipeCatalog,
        *,
        unavailable_title: str = "Recipe unavailable",
    ) -> None:
        self._store = meal_plan_store
        self._recipes = recipe_catalog
        self._unavailable_title = unavailable_title

    # CRUD

    def _persist(self, plan: MealPlan, *, touch: bool = True) -> MealPlan:
        errors = plan.validation_errors()
        if errors:
            raise MealPlanException(
                "Meal plan is invalid: " + "; ".join(errors.values()),
                "INVALID_MEAL_PLAN",
                errors,
            )
        if touch:
            plan = plan.copy_with(updated_at=datetime.now())
        self._store.save(plan)
        return plan

    def create_meal_plan(
        self,
        *,
        name: str,
        family_id: str,
        start_date: date | datetime,
        meal_slots: list[str],
        created_by: str,
        assignments: dict[str, str] | None = None,
    ) -> MealPlan:
        plan = MealPlan.create(
            name=name,
            family_id=family_id,
            start_date=start_date,
            meal_slots=meal_slots,
            created_by=created_by,
            assignments=assignments,
        )
        plan = self._persist(plan, touch=False)
        logger.info("Created meal plan %s for family %s", plan.id, family_id)
        return plan

    def save_meal_plan(self, plan: MealPlan) -> MealPlan:
        """Validate and persist an edited plan, stamping ``updated_at``."""
        return self._persist(plan)

    def get_meal_plans(self, family_id: str | None = None) -> list[MealPlan]:
        return self._store.load_all(family_id)

    def get_meal_plan(self, plan_id: str) -> MealPlan | None:
        return self._store.load_by_id(plan_id)

    def require_meal_plan(self, plan_id: str) -> MealPlan:
        plan = self._store.load_by_id(plan_id)
        if plan is None:
            raise MealPlanException("Meal plan not found", "MEAL_PLAN_NOT_FOUND")
        return plan

    def delete_meal_plan(self, plan_id: str) -> None:
        if not self._store.delete(plan_id):
            raise MealPlanException("Meal plan not found", "MEAL_PLAN_NOT_FOUND")
        logger.info("Deleted meal plan %s", plan_id)

    # Assignments

    def _key_for(self, day: date | datetime, slot: str) -> str:
        try:
            return encode_assignment_key(day, slot)
        except AssignmentKeyError as e:
            raise MealPlanException(str(e), "INVALID_SLOT") from e

    def assign_recipe_to_slot(
        self,
        plan: MealPlan,
        day: date | datetime,
        slot: str,
        recipe_id: str,
    ) -> MealPlan:
        """Set the recipe for (day, slot), replacing any previous assignment."""
        if not recipe_id or not recipe_id.strip():
            raise MealPlanException("Recipe ID cannot be empty", "INVALID_RECIPE_ID")
        key = self._key_for(day, slot)
        if not is_date_in_plan(plan.start_date, day):
            raise MealPlanException(
                f"{to_calendar_date(day).isoformat()} is outside the plan window ({plan.date_range})",
                "INVALID_ASSIGNMENT_DATE",
            )
        assignments = dict(plan.assignments)
        assignments[key] = recipe_id
        updated = self._persist(plan.copy_with(assignments=assignments))
        logger.info("Assigned recipe %s to %s in plan %s", recipe_id, key, plan.id)
        return updated

    def remove_recipe_from_slot(
        self,
        plan: MealPlan,
        day: date | datetime,
        slot: str,
    ) -> MealPlan:
        """Clear (day, slot). Clearing an empty cell returns the plan unchanged."""
        key = self._key_for(day, slot)
        if key not in plan.assignments:
            return plan
        assignments = {k: v for k, v in plan.assignments.items() if k != key}
        updated = self._persist(plan.copy_with(assignments=assignments))
        logger.info("Removed assignment %s from plan %s", key, plan.id)
        return updated

    def get_meal_assignments(self, plan: MealPlan) -> list[MealAssignment]:
        """Assignments in grid order with recipe summaries resolved.

        Recipes the catalog cannot resolve get an unavailable placeholder.
        """
        resolved: dict[str, RecipeSummary] = {}
        slot_order = {slot: i for i, slot in enumerate(plan.meal_slots)}
        result: list[MealAssignment] = []
        for key, recipe_id in plan.assignments.items():
            decoded = decode_assignment_key(key)
            if decoded is None:
                logger.warning("Skipping malformed assignment key %s in plan %s", key, plan.id)
                continue
            if recipe_id not in resolved:
                recipe = self._recipes.get(recipe_id)
                if recipe is None:
                    logger.warning("Recipe %s in plan %s is unavailable", recipe_id, plan.id)
                    recipe = RecipeSummary.unavailable(recipe_id, self._unavailable_title)
                resolved[recipe_id] = recipe
            result.append(
                MealAssignment(
                    meal_plan_id=plan.id,
                    day=decoded.day,
                    slot=decoded.slot,
                    recipe_id=recipe_id,
                    recipe=resolved[recipe_id],
                )
            )
        result.sort(key=lambda a: (a.day, slot_order.get(a.slot, len(slot_order)), a.slot))
        return result

    def get_days_remaining(self, plan: MealPlan, today: date | None = None) -> int:
        return get_days_remaining(plan.start_date, today)

    # Templates

    def _reanchor(self, plan: MealPlan, new_start: date) -> dict[str, str]:
        """Move every assignment to the same (week, weekday, slot) relative to ``new_start``.

        Assignments outside the source window are dropped.
        """
        moved: dict[str, str] = {}
        for key, recipe_id in plan.assignments.items():
            try:
                decoded = parse_assignment_key(key)
            except AssignmentKeyError as e:
                raise MealPlanException(str(e), "INVALID_ASSIGNMENT") from e
            offset = day_offset(plan.start_date, decoded.day)
            if not 0 <= offset < PLAN_LENGTH_DAYS:
                logger.warning("Dropping out-of-window assignment %s from plan %s", key, plan.id)
                continue
            new_day = to_calendar_date(new_start) + timedelta(days=offset)
            moved[encode_assignment_key(new_day, decoded.slot)] = recipe_id
        return moved

    def get_templates(self, family_id: str | None = None) -> list[MealPlan]:
        return [p for p in self._store.load_all(family_id) if p.is_template]

    def is_template_name_available(self, template_name: str, family_id: str) -> bool:
        wanted = template_name.strip().lower()
        return not any(
            (t.template_name or "").strip().lower() == wanted
            for t in self.get_templates(family_id)
        )

    def save_as_template(
        self,
        plan: MealPlan,
        template_name: str,
        template_description: str | None = None,
    ) -> MealPlan:
        """Store a calendar-agnostic copy of ``plan`` as a new template."""
        name = (template_name or "").strip()
        if not name:
            raise MealPlanException("Template name cannot be empty", "INVALID_TEMPLATE_NAME")
        if len(name) > MAX_NAME_LENGTH:
            raise MealPlanException(
                f"Template name cannot exceed {MAX_NAME_LENGTH} characters",
                "INVALID_TEMPLATE_NAME",
            )
        if not self.is_template_name_available(name, plan.family_id):
            raise MealPlanException(
                "A template with this name already exists",
                "DUPLICATE_TEMPLATE_NAME",
            )
        template = MealPlan.create(
            name=name,
            family_id=plan.family_id,
            start_date=TEMPLATE_REFERENCE_DATE,
            meal_slots=list(plan.meal_slots),
            created_by=plan.created_by,
            assignments=self._reanchor(plan, TEMPLATE_REFERENCE_DATE),
            is_template=True,
            template_name=name,
            template_description=template_description,
        )
        template = self._persist(template, touch=False)
        logger.info("Saved plan %s as template %s (%s)", plan.id, template.id, name)
        return template

    def delete_template(self, template_id: str) -> None:
        template = self._store.load_by_id(template_id)
        if template is None:
            raise MealPlanException("Template not found", "TEMPLATE_NOT_FOUND")
        if not template.is_template:
            raise MealPlanException(
                "The specified meal plan is not a template",
                "NOT_A_TEMPLATE",
            )
        self.delete_meal_plan(template_id)

    def get_template_stats(self, plan: MealPlan) -> TemplateStats:
        if not plan.is_template:
            raise MealPlanException(
                "The specified meal plan is not a template",
                "NOT_A_TEMPLATE",
            )
        slot_count = len(plan.meal_slots)
        total = slot_count * PLAN_LENGTH_DAYS
        assigned = len(plan.assignments)
        return TemplateStats(
            total_slots=total,
            assigned_slots=assigned,
            empty_slots=total - assigned,
            unique_recipes=len(plan.recipe_ids),
            meal_slots_count=slot_count,
            completion_percentage=percentage_half_up(assigned, total),
        )

    def apply_template(
        self,
        template: MealPlan,
        target_start: date | datetime,
        *,
        name: str | None = None,
        created_by: str | None = None,
    ) -> MealPlan:
        """Create a regular plan starting at ``target_start`` from a template.

        Each assignment lands on ``target_start + 7*week + weekday``; the window
        is always 28 consecutive days whatever the month boundaries.
        """
        if not template.is_template:
            raise MealPlanException(
                "The specified meal plan is not a template",
                "NOT_A_TEMPLATE",
            )
        start = to_calendar_date(target_start)
        plan_name = name or f"Meal Plan from {template.template_name}"
        plan = MealPlan.create(
            name=plan_name[:MAX_NAME_LENGTH],
            family_id=template.family_id,
            start_date=start,
            meal_slots=list(template.meal_slots),
            created_by=created_by or template.created_by,
            assignments=self._reanchor(template, start),
        )
        plan = self._persist(plan, touch=False)
        logger.info("Applied template %s as plan %s starting %s", template.id, plan.id, start)
        return plan

    # Recipe references

    def get_meal_plans_containing_recipe(self, recipe_id: str) -> list[MealPlan]:
        return [p for p in self._store.load_all() if p.contains_recipe(recipe_id)]

    def get_active_meal_plans_containing_recipe(
        self,
        recipe_id: str,
        today: date | None = None,
    ) -> list[MealPlan]:
        return [
            p
            for p in self.get_meal_plans_containing_recipe(recipe_id)
            if p.is_currently_active(today)
        ]

    def remove_recipe_from_all_meal_plans(self, recipe_id: str) -> int:
        """Drop every assignment of ``recipe_id``. Returns the number of plans changed."""
        updated = 0
        for plan in self.get_meal_plans_containing_recipe(recipe_id):
            assignments = {k: v for k, v in plan.assignments.items() if v != recipe_id}
            self._store.save(plan.copy_with(assignments=assignments, updated_at=datetime.now()))
            updated += 1
        if updated:
            logger.info("Removed recipe %s from %d meal plan(s)", recipe_id, updated)
        return updated

    def validate_recipe_for_deletion(
        self,
        recipe_id: str,
        today: date | None = None,
    ) -> DeletionValidationResult:
        """Deletion is always allowed; plans still using the recipe become warnings."""
        as_of = today or date.today()
        plans = self.get_meal_plans_containing_recipe(recipe_id)
        if not plans:
            return DeletionValidationResult.allowed()
        warnings = [
            DeletionWarning.active_meal_plan(p)
            if p.is_currently_active(as_of)
            else DeletionWarning.inactive_meal_plan(p)
            for p in plans
        ]
        return DeletionValidationResult.with_warnings(warnings, plans, as_of=as_of)

