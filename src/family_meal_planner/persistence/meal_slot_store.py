"""Family meal slot persistence - JSON file storage."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from family_meal_planner.models import MealSlot
from family_meal_planner.persistence.base import MealSlotRepository
from family_meal_planner.persistence.meal_plan_store import safe_filename, write_json_atomic

logger = logging.getLogger(__name__)


class MealSlotStore(MealSlotRepository):
    """File-based slot configuration, one file per family."""

    def __init__(self, data_dir: Path) -> None:
        self._dir = Path(data_dir) / "meal_slots"
        self._dir.mkdir(parents=True, exist_ok=True)

    def _path(self, family_id: str) -> Path:
        return self._dir / f"{safe_filename(family_id)}.json"

    def load(self, family_id: str) -> list[MealSlot]:
        path = self._path(family_id)
        if not path.exists():
            return []
        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
            return [MealSlot.model_validate(s) for s in data.get("slots", [])]
        except (json.JSONDecodeError, OSError, ValidationError) as e:
            logger.warning("Could not load meal slots %s: %s", path, e)
            return []

    def save(self, family_id: str, slots: list[MealSlot]) -> None:
        path = self._path(family_id)
        try:
            write_json_atomic(path, {"slots": [s.model_dump(mode="json") for s in slots]})
        except OSError as e:
            logger.error("Could not save meal slots %s: %s", path, e)
            raise

    def clear(self, family_id: str) -> None:
        self._path(family_id).unlink(missing_ok=True)
