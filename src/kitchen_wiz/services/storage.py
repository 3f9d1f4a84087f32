"""Write-through persistence of the top-level kitchen collections."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class Slot(StrEnum):
    """Independently addressed storage slots."""

    INVENTORY = "inventory"
    PROFILE = "user"
    MEAL_PLAN = "mealPlan"
    RECIPES = "recipes"
    SAVED_RECIPES = "savedRecipes"
    SHOPPING_LIST = "shoppingList"


class SlotRepository(Protocol):
    """Durable key-value storage for serialized collections."""

    def read(self, slot: str) -> str | None:
        """Return the stored payload for a slot, if present."""

    def write(self, slot: str, payload: str) -> None:
        """Overwrite the payload stored in a slot."""


@dataclass
class CollectionStore:
    """Loads collections with defaults and writes them back whole."""

    repository: SlotRepository

    def load(self, slot: Slot, adapter: TypeAdapter[T], default: Callable[[], T]) -> T:
        """Load a collection, falling back to its default when absent or corrupt."""
        try:
            payload = self.repository.read(slot.value)
        except UnicodeDecodeError as exc:
            _logger.warning(
                "Stored %s is not valid text, using defaults: %s", slot.value, exc
            )
            return default()
        if payload is None:
            return default()
        try:
            return adapter.validate_json(payload)
        except ValidationError as exc:
            _logger.warning(
                "Stored %s is unreadable, using defaults (%s errors)",
                slot.value,
                exc.error_count(),
            )
            return default()

    def save(self, slot: Slot, adapter: TypeAdapter[T], value: T) -> None:
        """Serialize the full collection and overwrite its slot."""
        payload = adapter.dump_json(value, by_alias=True, exclude_none=True)
        self.repository.write(slot.value, payload.decode("utf-8"))
