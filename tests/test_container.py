"""Tests for container wiring."""

import asyncio

from kitchen_wiz.adapters.json_file_slot_repository import JsonFileSlotRepository
from kitchen_wiz.adapters.openai_generation_client import OpenAIGenerationClient
from kitchen_wiz.config import Settings
from kitchen_wiz.containers import build_container, build_slot_repository


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.pantry_service is not None
    assert container.recipe_service is not None
    assert container.planner_service is not None
    assert isinstance(container.gateway.client, OpenAIGenerationClient)
    assert [item.name for item in container.pantry_service.inventory] == [
        "Eggs",
        "Spinach",
        "Chicken Breast",
        "Rice",
    ]
    asyncio.run(container.close_resources())


def test_build_slot_repository_defaults_to_json_files(settings: Settings) -> None:
    repository = build_slot_repository(settings)

    assert isinstance(repository, JsonFileSlotRepository)
    assert repository.directory.exists()
    assert not settings.uses_supabase


def test_settings_use_supabase_only_with_both_credentials() -> None:
    partial = Settings(openai_api_key="key", supabase_url="https://example.supabase.co")
    complete = Settings(
        openai_api_key="key",
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
    )

    assert not partial.uses_supabase
    assert complete.uses_supabase
