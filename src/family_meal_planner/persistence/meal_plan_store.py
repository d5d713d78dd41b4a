"""Meal plan persistence - JSON file storage, one file per plan."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from family_meal_planner.models import MealPlan
from family_meal_planner.persistence.base import MealPlanRepository

logger = logging.getLogger(__name__)


def safe_filename(value: str) -> str:
    return "".join(c for c in value if c.isalnum() or c in "-_")


def write_json_atomic(path: Path, data: object) -> None:
    """Write to a sibling temp file, then replace, so readers never see half a file."""
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    tmp_path.replace(path)


class MealPlanStore(MealPlanRepository):
    """File-based meal plan store under ``<data_dir>/meal_plans``."""

    def __init__(self, data_dir: Path) -> None:
        self._dir = Path(data_dir) / "meal_plans"
        self._dir.mkdir(parents=True, exist_ok=True)

    def _path(self, plan_id: str) -> Path:
        return self._dir / f"{safe_filename(plan_id)}.json"

    def _read(self, path: Path) -> MealPlan | None:
        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
            return MealPlan.from_record(data)
        except (json.JSONDecodeError, OSError, ValidationError) as e:
            logger.warning("Could not load meal plan %s: %s", path, e)
            return None

    def save(self, plan: MealPlan) -> None:
        path = self._path(plan.id)
        try:
            write_json_atomic(path, plan.to_record().to_json_dict())
        except OSError as e:
            logger.error("Could not save meal plan %s: %s", path, e)
            raise

    def load_all(self, family_id: str | None = None) -> list[MealPlan]:
        plans: list[MealPlan] = []
        for path in sorted(self._dir.glob("*.json")):
            plan = self._read(path)
            if plan is None:
                continue
            if family_id is not None and plan.family_id != family_id:
                continue
            plans.append(plan)
        plans.sort(key=lambda p: p.created_at)
        return plans

    def load_by_id(self, plan_id: str) -> MealPlan | None:
        path = self._path(plan_id)
        if not path.exists():
            return None
        return self._read(path)

    def delete(self, plan_id: str) -> bool:
        path = self._path(plan_id)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error("Could not delete meal plan %s: %s", path, e)
            raise
        return True
