"""Redis-backed stores for cloud deployment. Use when REDIS_URL is set."""

import json
import logging

from pydantic import ValidationError

from family_meal_planner.models import MealPlan, MealSlot
from family_meal_planner.persistence.base import MealPlanRepository, MealSlotRepository

logger = logging.getLogger(__name__)

KEY_PREFIX = "family_meal_planner"


class _RedisClientMixin:
    _redis_url: str
    _client = None

    def _get_client(self):
        """Lazy-init Redis client."""
        if self._client is None:
            import redis
            self._client = redis.from_url(
                self._redis_url,
                decode_responses=True,
            )
        return self._client


class RedisMealPlanStore(_RedisClientMixin, MealPlanRepository):
    """Plans as JSON strings, indexed by a global set and a per-family set."""

    def __init__(self, redis_url: str) -> None:
        self._redis_url = redis_url
        self._client = None

    def _key(self, plan_id: str) -> str:
        return f"{KEY_PREFIX}:plan:{plan_id}"

    def _family_key(self, family_id: str) -> str:
        return f"{KEY_PREFIX}:family:{family_id}:plans"

    def _all_key(self) -> str:
        return f"{KEY_PREFIX}:plans"

    def _decode(self, raw: str | None) -> MealPlan | None:
        if not raw:
            return None
        try:
            return MealPlan.from_record(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("Redis meal plan decode failed: %s", e)
            return None

    def save(self, plan: MealPlan) -> None:
        try:
            r = self._get_client()
            pipe = r.pipeline(transaction=True)
            pipe.set(self._key(plan.id), json.dumps(plan.to_record().to_json_dict()))
            pipe.sadd(self._all_key(), plan.id)
            pipe.sadd(self._family_key(plan.family_id), plan.id)
            pipe.execute()
        except Exception as e:
            logger.error("Redis meal plan save failed: %s", e)
            raise

    def load_all(self, family_id: str | None = None) -> list[MealPlan]:
        try:
            r = self._get_client()
            index = self._family_key(family_id) if family_id is not None else self._all_key()
            plan_ids = sorted(r.smembers(index))
            if not plan_ids:
                return []
            raws = r.mget([self._key(pid) for pid in plan_ids])
        except Exception as e:
            # Never report an unreachable store as empty.
            logger.error("Redis meal plan list failed: %s", e)
            raise
        plans = [p for p in (self._decode(raw) for raw in raws) if p is not None]
        plans.sort(key=lambda p: p.created_at)
        return plans

    def load_by_id(self, plan_id: str) -> MealPlan | None:
        try:
            raw = self._get_client().get(self._key(plan_id))
        except Exception as e:
            logger.warning("Redis meal plan get failed: %s", e)
            return None
        return self._decode(raw)

    def delete(self, plan_id: str) -> bool:
        try:
            r = self._get_client()
            plan = self._decode(r.get(self._key(plan_id)))
            if plan is None:
                return False
            pipe = r.pipeline(transaction=True)
            pipe.delete(self._key(plan_id))
            pipe.srem(self._all_key(), plan_id)
            pipe.srem(self._family_key(plan.family_id), plan_id)
            pipe.execute()
            return True
        except Exception as e:
            logger.error("Redis meal plan delete failed: %s", e)
            raise


class RedisMealSlotStore(_RedisClientMixin, MealSlotRepository):
    """Family slot configuration as one JSON string per family."""

    def __init__(self, redis_url: str) -> None:
        self._redis_url = redis_url
        self._client = None

    def _key(self, family_id: str) -> str:
        return f"{KEY_PREFIX}:slots:{family_id}"

    def load(self, family_id: str) -> list[MealSlot]:
        try:
            data = self._get_client().get(self._key(family_id))
            if not data:
                return []
            return [MealSlot.model_validate(s) for s in json.loads(data)]
        except Exception as e:
            logger.warning("Redis meal slot get failed: %s", e)
            return []

    def save(self, family_id: str, slots: list[MealSlot]) -> None:
        try:
            payload = json.dumps([s.model_dump(mode="json") for s in slots])
            self._get_client().set(self._key(family_id), payload)
        except Exception as e:
            logger.error("Redis meal slot save failed: %s", e)
            raise

    def clear(self, family_id: str) -> None:
        try:
            self._get_client().delete(self._key(family_id))
        except Exception as e:
            logger.error("Redis meal slot clear failed: %s", e)
            raise
