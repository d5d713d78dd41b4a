"""Meal plan aggregate: a 4-week grid of (date, slot) -> recipe id."""

import uuid
from collections.abc import Mapping
from datetime import date, datetime
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from family_meal_planner.planning.assignment_key import (
    decode_assignment_key,
    encode_assignment_key,
)
from family_meal_planner.planning.calendar import (
    format_date_range,
    generate_four_week_dates,
    generate_week_dates,
    is_date_in_plan,
    plan_end_date,
    to_calendar_date,
)

MAX_NAME_LENGTH = 100
MAX_MEAL_SLOTS = 8


def generate_plan_id() -> str:
    return f"mp_{uuid.uuid4().hex}"


class TemplateInfo(BaseModel):
    """Metadata present only on template plans."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Template name, unique per family")
    description: str | None = Field(default=None)


class MealPlan(BaseModel):
    """A family's 4-week meal plan, or a calendar-agnostic template when ``template`` is set.

    Instances are immutable. Every edit goes through :meth:`copy_with`, and an
    instance may be structurally invalid: check :attr:`is_valid` before
    persisting.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., description="Opaque unique identifier")
    name: str = Field(..., description="Display name, 1-100 characters")
    family_id: str = Field(...)
    start_date: date = Field(..., description="Day 0 of the 28-day window")
    meal_slots: tuple[str, ...] = Field(default=(), description="Slot ids in display order")
    assignments: Mapping[str, str] = Field(
        default_factory=dict,
        description="Assignment key -> recipe id",
    )
    created_by: str = Field(...)
    created_at: datetime = Field(...)
    updated_at: datetime = Field(...)
    template: TemplateInfo | None = Field(default=None)

    @field_validator("start_date", mode="before")
    @classmethod
    def _normalize_start_date(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.date()
        return value

    @field_validator("assignments", mode="after")
    @classmethod
    def _freeze_assignments(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("assignments")
    def _serialize_assignments(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)

    @classmethod
    def create(
        cls,
        *,
        name: str,
        family_id: str,
        start_date: date | datetime,
        meal_slots: list[str] | tuple[str, ...],
        created_by: str,
        assignments: dict[str, str] | None = None,
        is_template: bool = False,
        template_name: str | None = None,
        template_description: str | None = None,
    ) -> "MealPlan":
        """Build a new plan with a fresh id and timestamps. Never raises on invalid content."""
        now = datetime.now()
        template = None
        if is_template:
            description = (template_description or "").strip() or None
            template = TemplateInfo(name=template_name or "", description=description)
        return cls(
            id=generate_plan_id(),
            name=name,
            family_id=family_id,
            start_date=to_calendar_date(start_date),
            meal_slots=tuple(meal_slots),
            assignments=dict(assignments or {}),
            created_by=created_by,
            created_at=now,
            updated_at=now,
            template=template,
        )

    def copy_with(self, **changes: Any) -> "MealPlan":
        """Return a new plan with ``changes`` applied and all other fields carried over.

        Unknown field names raise ``ValidationError``.
        """
        data = dict(self)
        data.update(changes)
        return type(self).model_validate(data)

    # Template variant

    @property
    def is_template(self) -> bool:
        return self.template is not None

    @property
    def template_name(self) -> str | None:
        return self.template.name if self.template else None

    @property
    def template_description(self) -> str | None:
        return self.template.description if self.template else None

    # Calendar

    @property
    def end_date(self) -> date:
        return plan_end_date(self.start_date)

    @property
    def dates(self) -> list[date]:
        return generate_four_week_dates(self.start_date)

    def get_week_dates(self, week_index: int) -> list[date]:
        return generate_week_dates(self.start_date, week_index)

    @property
    def date_range(self) -> str:
        return format_date_range(self.start_date, self.end_date)

    def is_currently_active(self, today: date | datetime | None = None) -> bool:
        """True when ``today`` (default: the current date) falls inside the window."""
        return is_date_in_plan(self.start_date, today or date.today())

    # Assignments

    def contains_recipe(self, recipe_id: str) -> bool:
        return recipe_id in self.assignments.values()

    @property
    def recipe_ids(self) -> list[str]:
        """Distinct recipe ids in first-seen order."""
        return list(dict.fromkeys(self.assignments.values()))

    def get_recipe_for_slot(self, day: date | datetime, slot: str) -> str | None:
        return self.assignments.get(encode_assignment_key(day, slot))

    # Validation

    def _name_error(self) -> str | None:
        if not self.name.strip():
            return "Meal plan name cannot be empty"
        if len(self.name) > MAX_NAME_LENGTH:
            return f"Meal plan name cannot exceed {MAX_NAME_LENGTH} characters"
        return None

    def _meal_slots_error(self) -> str | None:
        if not self.meal_slots:
            return "At least one meal slot is required"
        if len(self.meal_slots) > MAX_MEAL_SLOTS:
            return f"Cannot have more than {MAX_MEAL_SLOTS} meal slots"
        if any(not slot.strip() for slot in self.meal_slots):
            return "Meal slot names cannot be empty"
        if len(set(self.meal_slots)) != len(self.meal_slots):
            return "Meal slot names must be unique"
        return None

    def _assignments_error(self) -> str | None:
        for key in self.assignments:
            decoded = decode_assignment_key(key)
            if decoded is None:
                return f"Invalid assignment key format: {key}"
            if not is_date_in_plan(self.start_date, decoded.day):
                return (
                    f"Assignment {key} falls outside the plan window ({self.date_range})"
                )
        return None

    def _template_error(self) -> str | None:
        if self.template is not None and not self.template.name.strip():
            return "Template name is required for templates"
        return None

    def validation_errors(self) -> dict[str, str]:
        """Field name -> message for every structural problem. Empty when valid."""
        checks = {
            "name": self._name_error,
            "meal_slots": self._meal_slots_error,
            "assignments": self._assignments_error,
            "template": self._template_error,
        }
        errors: dict[str, str] = {}
        for field, check in checks.items():
            message = check()
            if message:
                errors[field] = message
        return errors

    @property
    def is_valid(self) -> bool:
        return not self.validation_errors()

    # Persistence

    def to_record(self) -> "MealPlanRecord":
        return MealPlanRecord(
            id=self.id,
            name=self.name,
            family_id=self.family_id,
            start_date=self.start_date,
            meal_slots=list(self.meal_slots),
            assignments=dict(self.assignments),
            created_by=self.created_by,
            created_at=self.created_at,
            updated_at=self.updated_at,
            is_template=self.is_template,
            template_name=self.template_name,
            template_description=self.template_description,
        )

    @classmethod
    def from_record(cls, record: "MealPlanRecord | dict[str, Any]") -> "MealPlan":
        if not isinstance(record, MealPlanRecord):
            record = MealPlanRecord.model_validate(record)
        template = None
        if record.is_template:
            template = TemplateInfo(
                name=record.template_name or "",
                description=record.template_description,
            )
        return cls(
            id=record.id,
            name=record.name,
            family_id=record.family_id,
            start_date=record.start_date,
            meal_slots=tuple(record.meal_slots),
            assignments={k: v for k, v in record.assignments.items() if v is not None},
            created_by=record.created_by,
            created_at=record.created_at,
            updated_at=record.updated_at,
            template=template,
        )


class MealPlanRecord(BaseModel):
    """Storage-agnostic persisted form. Serializes with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    family_id: str
    start_date: date
    meal_slots: list[str] = Field(default_factory=list)
    assignments: dict[str, str | None] = Field(default_factory=dict)
    created_by: str
    created_at: datetime
    updated_at: datetime
    is_template: bool = False
    template_name: str | None = None
    template_description: str | None = None

    @field_validator("start_date", mode="before")
    @classmethod
    def _normalize_start_date(cls, value: Any) -> Any:
        # Older records stored the start as a full ISO timestamp.
        if isinstance(value, str) and "T" in value:
            return datetime.fromisoformat(value).date()
        if isinstance(value, datetime):
            return value.date()
        return value

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
