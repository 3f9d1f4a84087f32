"""Tests for slot persistence."""

import json
from datetime import date

from kitchen_wiz.adapters.json_file_slot_repository import JsonFileSlotRepository
from kitchen_wiz.domain.inventory import Category, Ingredient
from kitchen_wiz.domain.plan import MealPlanDay
from kitchen_wiz.domain.recipes import Recipe
from kitchen_wiz.services.pantry import INVENTORY_ADAPTER, seed_inventory
from kitchen_wiz.services.planner import MEAL_PLAN_ADAPTER
from kitchen_wiz.services.profile import PROFILE_ADAPTER
from kitchen_wiz.services.storage import CollectionStore, Slot
from tests.conftest import InMemorySlotRepository


def test_load_returns_default_for_missing_slot(store: CollectionStore) -> None:
    inventory = store.load(Slot.INVENTORY, INVENTORY_ADAPTER, seed_inventory)

    assert [item.id for item in inventory] == ["1", "2", "3", "4"]


def test_save_writes_camel_case_keys_without_nulls(
    store: CollectionStore, slot_repository: InMemorySlotRepository
) -> None:
    item = Ingredient(
        id="a",
        name="Milk",
        quantity="1L",
        category=Category.DAIRY,
        expiry_date=date(2024, 1, 8),
    )

    store.save(Slot.INVENTORY, INVENTORY_ADAPTER, [item])

    assert slot_repository.load("inventory") == [
        {
            "id": "a",
            "name": "Milk",
            "quantity": "1L",
            "category": "dairy",
            "expiryDate": "2024-01-08",
        }
    ]


def test_saved_collections_load_back_equal(store: CollectionStore) -> None:
    recipe = Recipe(id="r1", title="Soup", calories=200, tags=["warm"])
    plan = [MealPlanDay(day="Monday", dinner=recipe), MealPlanDay(day="Tuesday")]

    store.save(Slot.MEAL_PLAN, MEAL_PLAN_ADAPTER, plan)

    assert store.load(Slot.MEAL_PLAN, MEAL_PLAN_ADAPTER, list) == plan


def test_corrupt_slot_falls_back_to_default(
    store: CollectionStore, slot_repository: InMemorySlotRepository
) -> None:
    slot_repository.slots["user"] = "{not json"
    slot_repository.slots["mealPlan"] = json.dumps([{"day": 3}])

    profile = store.load(Slot.PROFILE, PROFILE_ADAPTER, lambda: None)
    plan = store.load(Slot.MEAL_PLAN, MEAL_PLAN_ADAPTER, list)

    assert profile is None
    assert plan == []


def test_stored_categories_are_read_case_insensitively(
    store: CollectionStore, slot_repository: InMemorySlotRepository
) -> None:
    slot_repository.slots["inventory"] = json.dumps(
        [
            {
                "id": "x",
                "name": "Peas",
                "quantity": "1 bag",
                "category": "Frozen",
                "expiryDate": "2024-03-01",
            }
        ]
    )

    inventory = store.load(Slot.INVENTORY, INVENTORY_ADAPTER, list)

    assert inventory[0].category is Category.FROZEN


def test_json_file_repository_round_trip(tmp_path) -> None:
    repository = JsonFileSlotRepository.create(tmp_path / "kitchen")

    assert repository.read("inventory") is None

    repository.write("inventory", "[]")
    repository.write("inventory", '[{"id": "1"}]')

    assert repository.read("inventory") == '[{"id": "1"}]'
    assert sorted(path.name for path in (tmp_path / "kitchen").iterdir()) == [
        "inventory.json"
    ]


def test_undecodable_slot_file_falls_back_to_default(tmp_path) -> None:
    repository = JsonFileSlotRepository.create(tmp_path / "kitchen")
    (tmp_path / "kitchen" / "inventory.json").write_bytes(b"\xff\xfe[garbage")
    store = CollectionStore(repository)

    inventory = store.load(Slot.INVENTORY, INVENTORY_ADAPTER, seed_inventory)

    assert [item.id for item in inventory] == ["1", "2", "3", "4"]
