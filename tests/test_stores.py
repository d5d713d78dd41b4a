"""Tests for the file and Redis persistence backends."""

import json

import pytest

from family_meal_planner.config import Settings
from family_meal_planner.models import MealSlot
from family_meal_planner.persistence import MealPlanStore, MealSlotStore, create_stores
from family_meal_planner.persistence.redis_store import RedisMealPlanStore, RedisMealSlotStore
from family_meal_planner.recipes import InMemoryRecipeCatalog
from family_meal_planner.services import MealPlanService


class FakeRedis:
    """In-memory stand-in for the few redis-py calls the stores make."""

    def __init__(self):
        self.values = {}
        self.sets = {}

    def get(self, key):
        return self.values.get(key)

    def set(self, key, value):
        self.values[key] = value

    def mget(self, keys):
        return [self.values.get(k) for k in keys]

    def delete(self, key):
        self.values.pop(key, None)

    def sadd(self, key, member):
        self.sets.setdefault(key, set()).add(member)

    def srem(self, key, member):
        self.sets.get(key, set()).discard(member)

    def smembers(self, key):
        return set(self.sets.get(key, set()))

    def pipeline(self, transaction=True):
        return FakePipeline(self)


class FakePipeline:
    def __init__(self, redis):
        self._redis = redis
        self._calls = []

    def __getattr__(self, name):
        def queue(*args):
            self._calls.append((name, args))

        return queue

    def execute(self):
        for name, args in self._calls:
            getattr(self._redis, name)(*args)
        self._calls = []


@pytest.fixture
def redis_plan_store():
    store = RedisMealPlanStore("redis://unused")
    store._client = FakeRedis()
    return store


def test_file_store_round_trip(plan_store, make_plan):
    plan = make_plan(assignments={"2024-03-15_lunch": "r1"})

    plan_store.save(plan)

    assert plan_store.load_by_id(plan.id) == plan
    assert plan_store.load_all("fam-1") == [plan]
    assert plan_store.load_all("fam-2") == []


def test_file_store_writes_camel_case_json(plan_store, make_plan, tmp_path):
    plan = make_plan()
    plan_store.save(plan)

    data = json.loads((tmp_path / "meal_plans" / f"{plan.id}.json").read_text(encoding="utf-8"))

    assert data["familyId"] == "fam-1"
    assert data["mealSlots"] == ["breakfast", "lunch", "dinner"]
    assert data["isTemplate"] is False


def test_file_store_skips_corrupt_files(plan_store, make_plan, tmp_path):
    plan = make_plan()
    plan_store.save(plan)
    (tmp_path / "meal_plans" / "mp_broken.json").write_text("{not json", encoding="utf-8")

    assert plan_store.load_all() == [plan]
    assert plan_store.load_by_id("mp_broken") is None


def test_file_store_delete(plan_store, make_plan):
    plan = make_plan()
    plan_store.save(plan)

    assert plan_store.delete(plan.id)
    assert not plan_store.delete(plan.id)
    assert plan_store.load_by_id(plan.id) is None


def test_slot_store_round_trip(tmp_path):
    store = MealSlotStore(tmp_path)
    slots = [MealSlot(id="brunch", name="Brunch", order=1)]

    store.save("fam-1", slots)

    assert store.load("fam-1") == slots
    store.clear("fam-1")
    store.clear("fam-1")
    assert store.load("fam-1") == []


def test_redis_store_indexes_by_family(redis_plan_store, make_plan):
    first = make_plan()
    second = make_plan(family_id="fam-2")
    redis_plan_store.save(first)
    redis_plan_store.save(second)

    assert redis_plan_store.load_by_id(first.id) == first
    assert redis_plan_store.load_all("fam-1") == [first]
    assert {p.id for p in redis_plan_store.load_all()} == {first.id, second.id}


def test_redis_store_delete_removes_indexes(redis_plan_store, make_plan):
    plan = make_plan()
    redis_plan_store.save(plan)

    assert redis_plan_store.delete(plan.id)

    assert redis_plan_store.load_all() == []
    assert redis_plan_store.load_all("fam-1") == []
    assert not redis_plan_store.delete(plan.id)


def test_redis_slot_store_round_trip():
    store = RedisMealSlotStore("redis://unused")
    store._client = FakeRedis()
    slots = [MealSlot(id="brunch", name="Brunch", order=1)]

    store.save("fam-1", slots)

    assert store.load("fam-1") == slots
    store.clear("fam-1")
    assert store.load("fam-1") == []


class UnreachableRedis:
    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise ConnectionError("redis is down")

        return fail


def test_redis_list_failure_is_not_reported_as_no_plans():
    store = RedisMealPlanStore("redis://unused")
    store._client = UnreachableRedis()

    with pytest.raises(ConnectionError):
        store.load_all()
    with pytest.raises(ConnectionError):
        store.load_all("fam-1")


def test_recipe_scans_fail_when_store_is_unreachable():
    store = RedisMealPlanStore("redis://unused")
    store._client = UnreachableRedis()
    service = MealPlanService(store, InMemoryRecipeCatalog())

    with pytest.raises(ConnectionError):
        service.validate_recipe_for_deletion("r1")
    with pytest.raises(ConnectionError):
        service.remove_recipe_from_all_meal_plans("r1")


def test_create_stores_uses_files_without_redis_url(tmp_path):
    stores = create_stores(Settings(data_dir=tmp_path, redis_url=None))

    assert isinstance(stores.meal_plans, MealPlanStore)
    assert isinstance(stores.meal_slots, MealSlotStore)
    assert (tmp_path / "meal_plans").is_dir()


def test_create_stores_uses_redis_when_configured(tmp_path):
    """The Redis client is created lazily, so no server is contacted here."""
    stores = create_stores(Settings(data_dir=tmp_path, redis_url="redis://localhost:6379/0"))

    assert isinstance(stores.meal_plans, RedisMealPlanStore)
    assert isinstance(stores.meal_slots, RedisMealSlotStore)
