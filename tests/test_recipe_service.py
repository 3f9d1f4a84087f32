"""Tests for the recipe collections."""

import asyncio

import pytest

from kitchen_wiz.domain.profile import UserProfile
from kitchen_wiz.domain.requests import AIOperation, RequestStatus
from kitchen_wiz.errors import NotFoundError, PreconditionError
from kitchen_wiz.services.gateway import AIGateway, RecipeDraft
from kitchen_wiz.services.pantry import seed_inventory
from kitchen_wiz.services.recipes import RecipeService
from kitchen_wiz.services.requests import RequestTracker
from kitchen_wiz.services.storage import CollectionStore
from tests.conftest import (
    FakeGenerationClient,
    InMemorySlotRepository,
    SupersedingGenerationClient,
)


@pytest.fixture
def recipes(
    gateway: AIGateway, store: CollectionStore, requests: RequestTracker
) -> RecipeService:
    return RecipeService(gateway, store, requests)


def _generate(service: RecipeService) -> list:
    return asyncio.run(service.generate(seed_inventory(), UserProfile()))


def test_generate_prepends_to_discovered(
    recipes: RecipeService, slot_repository: InMemorySlotRepository
) -> None:
    manual = recipes.add_manual(RecipeDraft(title="Toast"))

    generated = _generate(recipes)

    assert [recipe.title for recipe in recipes.discovered()] == [
        "Spinach Omelette",
        "Chicken Fried Rice",
        "Toast",
    ]
    assert recipes.discovered()[-1] == manual
    assert len({recipe.id for recipe in generated}) == 2
    stored = slot_repository.load("recipes")
    assert [entry["title"] for entry in stored] == [
        "Spinach Omelette",
        "Chicken Fried Rice",
        "Toast",
    ]
    assert stored[0]["matchScore"] == 90


def test_generate_requires_inventory(
    recipes: RecipeService, generation_client: FakeGenerationClient
) -> None:
    with pytest.raises(PreconditionError) as exc_info:
        asyncio.run(recipes.generate([], UserProfile()))

    assert exc_info.value.message == "Add some ingredients to your inventory first!"
    assert generation_client.calls == []


def test_generate_failure_returns_nothing(
    recipes: RecipeService,
    requests: RequestTracker,
    generation_client: FakeGenerationClient,
) -> None:
    existing = recipes.add_manual(RecipeDraft(title="Toast"))
    generation_client.error = RuntimeError("timeout")

    assert _generate(recipes) == []
    assert recipes.discovered() == [existing]
    state = requests.state(AIOperation.RECIPES)
    assert state.status is RequestStatus.FAILED
    assert state.error == "Recipe generation failed."


def test_stale_generation_is_discarded(
    store: CollectionStore, requests: RequestTracker
) -> None:
    client = SupersedingGenerationClient(tracker=requests)
    gateway = AIGateway(
        client=client, model="gpt-5.2", reasoning_effort=None, store=False
    )
    service = RecipeService(gateway, store, requests)

    assert _generate(service) == []
    assert service.discovered() == []
    assert requests.state(AIOperation.RECIPES).status is RequestStatus.PENDING


def test_saved_recipe_survives_removal_from_discovered(
    recipes: RecipeService, slot_repository: InMemorySlotRepository
) -> None:
    omelette = _generate(recipes)[0]

    assert recipes.toggle_saved(omelette.id)
    recipes.remove_discovered(omelette.id)

    assert omelette.id not in [recipe.id for recipe in recipes.discovered()]
    assert recipes.saved() == [omelette]
    assert recipes.get(omelette.id) == omelette
    assert recipes.is_saved(omelette.id)
    assert [entry["id"] for entry in slot_repository.load("savedRecipes")] == [
        omelette.id
    ]


def test_unsaving_removed_recipe_forgets_it(recipes: RecipeService) -> None:
    omelette = _generate(recipes)[0]
    recipes.save(omelette.id)
    recipes.save(omelette.id)
    recipes.remove_discovered(omelette.id)

    assert not recipes.toggle_saved(omelette.id)

    assert recipes.saved() == []
    with pytest.raises(NotFoundError):
        recipes.get(omelette.id)


def test_save_unknown_recipe_raises(recipes: RecipeService) -> None:
    with pytest.raises(NotFoundError):
        recipes.save("missing")


def test_collections_reload_from_storage(
    recipes: RecipeService,
    gateway: AIGateway,
    store: CollectionStore,
    requests: RequestTracker,
) -> None:
    generated = _generate(recipes)
    recipes.save(generated[1].id)

    reloaded = RecipeService(gateway, store, requests)

    assert reloaded.discovered() == generated
    assert reloaded.saved() == [generated[1]]


def test_search_matches_title_and_ingredients(recipes: RecipeService) -> None:
    _generate(recipes)

    assert [recipe.title for recipe in recipes.search("rice")] == [
        "Chicken Fried Rice"
    ]
    assert [recipe.title for recipe in recipes.search("spinach")] == [
        "Spinach Omelette"
    ]
    assert len(recipes.search("  ")) == 2
