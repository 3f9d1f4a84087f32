"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from kitchen_wiz.adapters.json_file_slot_repository import JsonFileSlotRepository
from kitchen_wiz.adapters.openai_generation_client import OpenAIGenerationClient
from kitchen_wiz.adapters.supabase_slot_repository import SupabaseSlotRepository
from kitchen_wiz.config import Settings
from kitchen_wiz.services.assistant import AssistantService
from kitchen_wiz.services.gateway import AIGateway
from kitchen_wiz.services.notifications import (
    ExpiryNotifier,
    LogNotifier,
    NotificationSession,
)
from kitchen_wiz.services.pantry import PantryService
from kitchen_wiz.services.planner import PlannerService
from kitchen_wiz.services.profile import ProfileService
from kitchen_wiz.services.recipes import RecipeService
from kitchen_wiz.services.requests import RequestTracker
from kitchen_wiz.services.storage import CollectionStore, SlotRepository


@dataclass
class AppContainer:
    """Holds application-wide dependencies and kitchen state."""

    settings: Settings
    gateway: AIGateway
    requests: RequestTracker
    pantry_service: PantryService
    recipe_service: RecipeService
    planner_service: PlannerService
    profile_service: ProfileService
    assistant_service: AssistantService
    expiry_notifier: ExpiryNotifier
    notification_session: NotificationSession
    close_resources: Callable[[], Awaitable[None]]


def build_slot_repository(settings: Settings) -> SlotRepository:
    """Pick Supabase when configured, otherwise local JSON files."""
    if settings.uses_supabase:
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseSlotRepository(client)
    return JsonFileSlotRepository.create(settings.data_dir)


def build_services(
    settings: Settings,
    gateway: AIGateway,
    slot_repository: SlotRepository,
    close_resources: Callable[[], Awaitable[None]],
) -> AppContainer:
    """Load kitchen state from storage and assemble the services."""
    store = CollectionStore(slot_repository)
    requests = RequestTracker()
    return AppContainer(
        settings=settings,
        gateway=gateway,
        requests=requests,
        pantry_service=PantryService(gateway, store, requests),
        recipe_service=RecipeService(gateway, store, requests),
        planner_service=PlannerService(gateway, store, requests),
        profile_service=ProfileService(store),
        assistant_service=AssistantService(gateway, requests),
        expiry_notifier=ExpiryNotifier(
            notifier=LogNotifier(), enabled=settings.notifications_enabled
        ),
        notification_session=NotificationSession(),
        close_resources=close_resources,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    openai_client = OpenAIGenerationClient.create(
        resolved_settings.openai_api_key,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    gateway = AIGateway(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return build_services(
        resolved_settings,
        gateway,
        build_slot_repository(resolved_settings),
        close_resources,
    )
