"""Tests for the profile service."""

import pytest
from pydantic import ValidationError

from kitchen_wiz.domain.profile import CookingSkill, Goal, UserProfile
from kitchen_wiz.services.profile import ProfileService, split_tags
from kitchen_wiz.services.storage import CollectionStore
from tests.conftest import InMemorySlotRepository


def test_defaults_when_nothing_stored(store: CollectionStore) -> None:
    profile = ProfileService(store).get()

    assert profile == UserProfile()
    assert profile.name == "Chef"
    assert profile.cuisine_preferences == ["Italian"]
    assert profile.household_size == 2
    assert profile.max_cooking_time == 45
    assert profile.goals is Goal.MAINTENANCE
    assert profile.cooking_skill is CookingSkill.INTERMEDIATE


def test_update_splits_tag_text_and_persists(
    store: CollectionStore, slot_repository: InMemorySlotRepository
) -> None:
    service = ProfileService(store)

    updated = service.update(
        allergies="peanuts, shellfish ,",
        cuisine_preferences=["Thai"],
        goals="weight-loss",
    )

    assert updated.allergies == ["peanuts", "shellfish"]
    assert updated.cuisine_preferences == ["Thai"]
    assert updated.goals is Goal.WEIGHT_LOSS
    stored = slot_repository.load("user")
    assert stored["allergies"] == ["peanuts", "shellfish"]
    assert stored["cuisinePreferences"] == ["Thai"]
    assert ProfileService(store).get() == updated


def test_update_rejects_invalid_household(store: CollectionStore) -> None:
    service = ProfileService(store)

    with pytest.raises(ValidationError):
        service.update(household_size=0)

    assert service.get().household_size == 2


def test_split_tags() -> None:
    assert split_tags(" vegan,, gluten-free ") == ["vegan", "gluten-free"]
    assert split_tags("") == []
