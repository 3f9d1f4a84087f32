"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import pytest

from kitchen_wiz.config import Settings
from kitchen_wiz.containers import AppContainer, build_services
from kitchen_wiz.domain.requests import AIOperation
from kitchen_wiz.services.gateway import AIGateway, GenerationClient
from kitchen_wiz.services.requests import RequestTracker
from kitchen_wiz.services.storage import CollectionStore, SlotRepository

WEEKDAYS = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]


def receipt_payload() -> dict[str, object]:
    return {
        "items": [
            {
                "name": "Milk",
                "quantity": "1L",
                "category": "dairy",
                "expiryDate": "2024-01-08",
                "caloriesPerUnit": 42,
            },
            {
                "name": "Tomatoes",
                "quantity": "500g",
                "category": "produce",
                "expiryDate": "2024-01-06",
                "caloriesPerUnit": None,
            },
        ]
    }


def recipes_payload() -> dict[str, object]:
    return {
        "items": [
            {
                "title": "Spinach Omelette",
                "description": "Quick eggs with greens",
                "ingredients": [
                    {"name": "Eggs", "amount": "3"},
                    {"name": "Spinach", "amount": "50g"},
                ],
                "instructions": ["Whisk eggs", "Wilt spinach", "Cook together"],
                "prepTime": 5,
                "cookTime": 10,
                "calories": 320,
                "matchScore": 90,
                "tags": ["breakfast"],
            },
            {
                "title": "Chicken Fried Rice",
                "description": None,
                "ingredients": [{"name": "Rice", "amount": "200g"}],
                "instructions": None,
                "prepTime": 10,
                "cookTime": 15,
                "calories": 550,
                "matchScore": 75,
                "tags": None,
            },
        ]
    }


def meal_plan_payload() -> dict[str, object]:
    days = []
    for day in reversed(WEEKDAYS):
        days.append(
            {
                "day": day.lower(),
                "breakfast": {
                    "title": f"{day} Oats",
                    "calories": 300,
                    "prepTime": 5,
                    "cookTime": 5,
                    "ingredients": [{"name": "Oats", "amount": "80g"}],
                },
                "lunch": None,
                "dinner": {
                    "title": f"{day} Stir Fry",
                    "calories": 600,
                    "prepTime": 10,
                    "cookTime": 20,
                    "ingredients": None,
                },
            }
        )
    return {"items": days}


def shopping_payload() -> dict[str, object]:
    return {
        "items": [
            {"name": "Oats", "quantity": "1kg", "category": "pantry"},
            {"name": "Bell Pepper", "quantity": None, "category": "Produce"},
        ]
    }


@dataclass
class InMemorySlotRepository(SlotRepository):
    """In-memory slot repository for tests."""

    slots: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def read(self, slot: str) -> str | None:
        return self.slots.get(slot)

    def write(self, slot: str, payload: str) -> None:
        self.slots[slot] = payload
        self.writes.append(slot)

    def load(self, slot: str) -> object:
        return json.loads(self.slots[slot])


@dataclass
class FakeGenerationClient(GenerationClient):
    """Fake generation client returning canned payloads by schema name."""

    responses: dict[str, str] = field(
        default_factory=lambda: {
            "receipt_items": json.dumps(receipt_payload()),
            "recipes": json.dumps(recipes_payload()),
            "meal_plan": json.dumps(meal_plan_payload()),
            "shopping_list": json.dumps(shopping_payload()),
        }
    )
    reply: str = "Try a spinach frittata."
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        schema_name: str,
        image_data_url: str | None = None,
    ) -> str:
        self.calls.append(
            {
                "schema_name": schema_name,
                "prompt": prompt,
                "image_data_url": image_data_url,
            }
        )
        if self.error is not None:
            raise self.error
        return self.responses[schema_name]

    async def converse(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        history: list[dict[str, str]],
        message: str,
    ) -> str:
        self.calls.append(
            {
                "schema_name": "chat",
                "instructions": instructions,
                "history": history,
                "message": message,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply


@dataclass
class SupersedingGenerationClient(FakeGenerationClient):
    """Starts a newer request for the same operation while answering."""

    tracker: RequestTracker | None = None
    operation: AIOperation = AIOperation.RECIPES

    async def generate(self, **kwargs) -> str:  # type: ignore[override]
        self.tracker.begin(self.operation)
        return await super().generate(**kwargs)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(openai_api_key="openai-key", data_dir=str(tmp_path / "data"))


@pytest.fixture
def slot_repository() -> InMemorySlotRepository:
    return InMemorySlotRepository()


@pytest.fixture
def store(slot_repository: InMemorySlotRepository) -> CollectionStore:
    return CollectionStore(slot_repository)


@pytest.fixture
def generation_client() -> FakeGenerationClient:
    return FakeGenerationClient()


@pytest.fixture
def gateway(generation_client: FakeGenerationClient) -> AIGateway:
    return AIGateway(
        client=generation_client,
        model="gpt-5.2",
        reasoning_effort="low",
        store=False,
    )


@pytest.fixture
def requests() -> RequestTracker:
    return RequestTracker()


@pytest.fixture
def container(
    settings: Settings,
    gateway: AIGateway,
    slot_repository: InMemorySlotRepository,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return build_services(settings, gateway, slot_repository, close_resources)
