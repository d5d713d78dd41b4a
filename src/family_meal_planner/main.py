"""FastAPI application - meal plan, template and slot endpoints."""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import date
from typing import Any

from fastapi import FastAPI, Header, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from family_meal_planner.config import get_planner_rules, get_settings
from family_meal_planner.exceptions import MealPlanException, PlannerError
from family_meal_planner.models import MealPlan, MealSlot
from family_meal_planner.permissions import PermissionChecker, create_permission_checker
from family_meal_planner.persistence import create_stores
from family_meal_planner.recipes import create_recipe_catalog
from family_meal_planner.services import MealPlanService, MealSlotService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@dataclass
class AppServices:
    meal_plans: MealPlanService
    meal_slots: MealSlotService
    permissions: PermissionChecker


# Dependency injection - created at startup
_services: AppServices | None = None


def build_services() -> AppServices:
    settings = get_settings()
    rules = get_planner_rules(settings.config_dir)
    stores = create_stores(settings)
    return AppServices(
        meal_plans=MealPlanService(
            stores.meal_plans,
            create_recipe_catalog(),
            unavailable_title=rules["recipe_unavailable_title"],
        ),
        meal_slots=MealSlotService(stores.meal_slots, rules),
        permissions=create_permission_checker(rules),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup."""
    global _services
    _services = build_services()
    yield
    _services = None


app = FastAPI(
    title="Family Meal Planner",
    description="4-week family meal plans with reusable templates",
    version="0.1.0",
    lifespan=lifespan,
)


def _get_services() -> AppServices:
    if _services is None:
        raise HTTPException(status_code=503, detail="Service not ready")
    return _services


def _require_editor(user_id: str | None, family_id: str) -> None:
    if not _get_services().permissions.can_edit(user_id, family_id):
        logger.warning("User %s may not edit family %s", user_id, family_id)
        raise HTTPException(status_code=403, detail="Not allowed to edit this family's meal plans")


def _status_for(code: str) -> int:
    if code.endswith("NOT_FOUND"):
        return 404
    if code.startswith("DUPLICATE"):
        return 409
    return 400


@app.exception_handler(PlannerError)
async def planner_error_handler(request: Request, exc: PlannerError) -> JSONResponse:
    body: dict[str, Any] = {"error": exc.message, "code": exc.code}
    if isinstance(exc, MealPlanException) and exc.errors:
        body["errors"] = exc.errors
    return JSONResponse(status_code=_status_for(exc.code), content=body)


def _plan_payload(plan: MealPlan) -> dict[str, Any]:
    payload = plan.to_record().to_json_dict()
    payload["dateRange"] = plan.date_range
    payload["isCurrentlyActive"] = plan.is_currently_active()
    return payload


class CreateMealPlanRequest(BaseModel):
    name: str
    start_date: date
    meal_slots: list[str] | None = Field(default=None, description="Defaults to the family's slots")
    assignments: dict[str, str] = Field(default_factory=dict)


class AssignmentRequest(BaseModel):
    day: date = Field(..., alias="date")
    slot: str
    recipe_id: str


class SaveTemplateRequest(BaseModel):
    template_name: str
    template_description: str | None = None


class ApplyTemplateRequest(BaseModel):
    start_date: date
    name: str | None = None


class UpdateMealSlotsRequest(BaseModel):
    slots: list[MealSlot]


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check for load balancers."""
    return {"status": "ok"}


# Meal plans


@app.get("/families/{family_id}/meal-plans")
def list_meal_plans(family_id: str) -> list[dict[str, Any]]:
    plans = _get_services().meal_plans.get_meal_plans(family_id)
    return [_plan_payload(p) for p in plans if not p.is_template]


@app.post("/families/{family_id}/meal-plans", status_code=201)
def create_meal_plan(
    family_id: str,
    body: CreateMealPlanRequest,
    user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> dict[str, Any]:
    _require_editor(user_id, family_id)
    services = _get_services()
    slots = body.meal_slots or services.meal_slots.get_family_slot_ids(family_id)
    plan = services.meal_plans.create_meal_plan(
        name=body.name,
        family_id=family_id,
        start_date=body.start_date,
        meal_slots=slots,
        created_by=user_id or "anonymous",
        assignments=body.assignments,
    )
    return _plan_payload(plan)


@app.get("/meal-plans/{plan_id}")
def get_meal_plan(plan_id: str) -> dict[str, Any]:
    plan = _get_services().meal_plans.require_meal_plan(plan_id)
    payload = _plan_payload(plan)
    payload["validationErrors"] = plan.validation_errors()
    return payload


@app.delete("/meal-plans/{plan_id}", status_code=204)
def delete_meal_plan(
    plan_id: str,
    user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> None:
    service = _get_services().meal_plans
    plan = service.require_meal_plan(plan_id)
    _require_editor(user_id, plan.family_id)
    service.delete_meal_plan(plan_id)


@app.get("/meal-plans/{plan_id}/assignments")
def list_assignments(plan_id: str) -> list[dict[str, Any]]:
    service = _get_services().meal_plans
    plan = service.require_meal_plan(plan_id)
    return [
        {
            "key": a.assignment_key,
            "date": a.day.isoformat(),
            "slot": a.slot,
            "recipeId": a.recipe_id,
            "recipeAvailable": a.recipe_available,
            "recipe": a.recipe.model_dump(mode="json") if a.recipe else None,
        }
        for a in service.get_meal_assignments(plan)
    ]


@app.put("/meal-plans/{plan_id}/assignments")
def assign_recipe(
    plan_id: str,
    body: AssignmentRequest,
    user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> dict[str, Any]:
    service = _get_services().meal_plans
    plan = service.require_meal_plan(plan_id)
    _require_editor(user_id, plan.family_id)
    updated = service.assign_recipe_to_slot(plan, body.day, body.slot, body.recipe_id)
    return _plan_payload(updated)


@app.delete("/meal-plans/{plan_id}/assignments")
def remove_assignment(
    plan_id: str,
    day: date = Query(..., alias="date"),
    slot: str = Query(...),
    user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> dict[str, Any]:
    service = _get_services().meal_plans
    plan = service.require_meal_plan(plan_id)
    _require_editor(user_id, plan.family_id)
    updated = service.remove_recipe_from_slot(plan, day, slot)
    return _plan_payload(updated)


# Templates


@app.post("/meal-plans/{plan_id}/template", status_code=201)
def save_as_template(
    plan_id: str,
    body: SaveTemplateRequest,
    user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> dict[str, Any]:
    service = _get_services().meal_plans
    plan = service.require_meal_plan(plan_id)
    _require_editor(user_id, plan.family_id)
    template = service.save_as_template(plan, body.template_name, body.template_description)
    return _plan_payload(template)


@app.get("/families/{family_id}/templates")
def list_templates(family_id: str) -> list[dict[str, Any]]:
    return [_plan_payload(t) for t in _get_services().meal_plans.get_templates(family_id)]


@app.get("/templates/{template_id}/stats")
def template_stats(template_id: str) -> dict[str, Any]:
    service = _get_services().meal_plans
    template = service.require_meal_plan(template_id)
    return service.get_template_stats(template).model_dump()


@app.post("/templates/{template_id}/apply", status_code=201)
def apply_template(
    template_id: str,
    body: ApplyTemplateRequest,
    user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> dict[str, Any]:
    service = _get_services().meal_plans
    template = service.require_meal_plan(template_id)
    _require_editor(user_id, template.family_id)
    plan = service.apply_template(template, body.start_date, name=body.name, created_by=user_id)
    return _plan_payload(plan)


@app.delete("/templates/{template_id}", status_code=204)
def delete_template(
    template_id: str,
    user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> None:
    service = _get_services().meal_plans
    template = service.get_meal_plan(template_id)
    if template is None:
        raise MealPlanException("Template not found", "TEMPLATE_NOT_FOUND")
    _require_editor(user_id, template.family_id)
    service.delete_template(template_id)


# Recipe references


@app.get("/recipes/{recipe_id}/deletion-check")
def recipe_deletion_check(recipe_id: str) -> dict[str, Any]:
    result = _get_services().meal_plans.validate_recipe_for_deletion(recipe_id)
    return {
        "canDelete": result.can_delete,
        "summaryMessage": result.summary_message,
        "hasActiveMealPlanConflicts": result.has_active_meal_plan_conflicts,
        "warnings": [w.model_dump(mode="json") for w in result.sorted_warnings()],
        "affectedMealPlanIds": [p.id for p in result.affected_meal_plans],
    }


@app.delete("/recipes/{recipe_id}/meal-plan-references")
def detach_recipe(
    recipe_id: str,
    user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> dict[str, int]:
    """Drop the recipe from every plan. The caller must be able to edit each affected family."""
    service = _get_services().meal_plans
    families = {p.family_id for p in service.get_meal_plans_containing_recipe(recipe_id)}
    for family_id in sorted(families):
        _require_editor(user_id, family_id)
    updated = service.remove_recipe_from_all_meal_plans(recipe_id)
    return {"updatedPlans": updated}


# Meal slots


@app.get("/families/{family_id}/meal-slots")
def get_meal_slots(family_id: str) -> list[dict[str, Any]]:
    slots = _get_services().meal_slots.get_family_meal_slots(family_id)
    return [s.model_dump() for s in slots]


@app.put("/families/{family_id}/meal-slots")
def update_meal_slots(
    family_id: str,
    body: UpdateMealSlotsRequest,
    user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> list[dict[str, Any]]:
    _require_editor(user_id, family_id)
    slots = _get_services().meal_slots.update_family_meal_slots(family_id, body.slots)
    return [s.model_dump() for s in slots]
