"""Inventory and shopping-list reducer."""

import logging
import math
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta

from pydantic import TypeAdapter

from kitchen_wiz.domain.base import new_id
from kitchen_wiz.domain.inventory import Category, Ingredient, ShoppingItem
from kitchen_wiz.domain.plan import MealPlanDay
from kitchen_wiz.domain.requests import AIOperation
from kitchen_wiz.errors import (
    GenerationError,
    NotFoundError,
    PreconditionError,
    ReceiptParseError,
)
from kitchen_wiz.services.gateway import AIGateway, IngredientDraft, ShoppingDraft
from kitchen_wiz.services.requests import RequestTracker
from kitchen_wiz.services.storage import CollectionStore, Slot

_logger = logging.getLogger(__name__)

EXPIRING_SOON_DAYS = 3
DEFAULT_SHELF_LIFE_DAYS = 7
_SECONDS_PER_DAY = 86400

INVENTORY_ADAPTER = TypeAdapter(list[Ingredient])
SHOPPING_LIST_ADAPTER = TypeAdapter(list[ShoppingItem])


def seed_inventory() -> list[Ingredient]:
    """Starter stock used when nothing has been stored yet."""
    return [
        Ingredient(
            id="1",
            name="Eggs",
            quantity="12",
            category=Category.DAIRY,
            expiry_date=date(2023, 12, 10),
        ),
        Ingredient(
            id="2",
            name="Spinach",
            quantity="200g",
            category=Category.PRODUCE,
            expiry_date=date(2023, 12, 5),
        ),
        Ingredient(
            id="3",
            name="Chicken Breast",
            quantity="500g",
            category=Category.MEAT,
            expiry_date=date(2023, 12, 7),
        ),
        Ingredient(
            id="4",
            name="Rice",
            quantity="1kg",
            category=Category.PANTRY,
            expiry_date=date(2024, 6, 1),
        ),
    ]


def days_until_expiry(item: Ingredient, as_of: date | datetime | None = None) -> int:
    """Whole days until expiry, rounded up; negative once expired."""
    expires_at = datetime.combine(item.expiry_date, time.min, tzinfo=UTC)
    delta = expires_at - _as_datetime(as_of)
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)


def is_expiring_soon(item: Ingredient, as_of: date | datetime | None = None) -> bool:
    """Return True when the item expires within the next three days."""
    return 0 <= days_until_expiry(item, as_of) <= EXPIRING_SOON_DAYS


def _as_datetime(value: date | datetime | None) -> datetime:
    if value is None:
        return datetime.now(tz=UTC)
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    return datetime.combine(value, time.min, tzinfo=UTC)


def _today(as_of: date | None) -> date:
    return as_of or datetime.now(tz=UTC).date()


@dataclass
class PantryService:
    """Owns the stock and shopping list and persists every change."""

    gateway: AIGateway
    store: CollectionStore
    requests: RequestTracker
    inventory: list[Ingredient] = field(init=False)
    shopping_list: list[ShoppingItem] = field(init=False)

    def __post_init__(self) -> None:
        self.inventory = self.store.load(
            Slot.INVENTORY, INVENTORY_ADAPTER, seed_inventory
        )
        self.shopping_list = self.store.load(
            Slot.SHOPPING_LIST, SHOPPING_LIST_ADAPTER, list
        )

    async def scan_receipt(self, image_bytes: bytes) -> list[Ingredient]:
        """Parse a receipt photo and add its items to stock."""
        token = self.requests.begin(AIOperation.RECEIPT_SCAN)
        try:
            drafts = await self.gateway.parse_receipt(image_bytes)
        except ReceiptParseError as exc:
            self.requests.fail(AIOperation.RECEIPT_SCAN, token, exc.message)
            raise
        self.requests.succeed(AIOperation.RECEIPT_SCAN, token)
        return self.add_from_receipt(drafts)

    def add_from_receipt(self, drafts: list[IngredientDraft]) -> list[Ingredient]:
        """Append parsed receipt items with fresh ids."""
        added = [Ingredient(id=new_id(), **draft.model_dump()) for draft in drafts]
        if added:
            self._set_inventory([*self.inventory, *added])
        return added

    def add_ingredient(  # noqa: PLR0913
        self,
        name: str,
        quantity: str,
        category: Category,
        expiry_date: date,
        calories_per_unit: float | None = None,
    ) -> Ingredient:
        """Add a single item to stock by hand."""
        item = Ingredient(
            id=new_id(),
            name=name,
            quantity=quantity,
            category=category,
            expiry_date=expiry_date,
            calories_per_unit=calories_per_unit,
        )
        self._set_inventory([*self.inventory, item])
        return item

    def update_ingredient(self, ingredient_id: str, **changes: object) -> Ingredient:
        """Correct fields of a stock item, re-validating the result."""
        for index, item in enumerate(self.inventory):
            if item.id == ingredient_id:
                updated = Ingredient.model_validate(
                    {**item.model_dump(), **changes, "id": item.id}
                )
                inventory = list(self.inventory)
                inventory[index] = updated
                self._set_inventory(inventory)
                return updated
        raise NotFoundError("Ingredient", ingredient_id)

    def remove_ingredient(self, ingredient_id: str) -> None:
        """Drop an item from stock; unknown ids are ignored."""
        remaining = [item for item in self.inventory if item.id != ingredient_id]
        if len(remaining) != len(self.inventory):
            self._set_inventory(remaining)

    def search_inventory(self, term: str) -> list[Ingredient]:
        """Return stock items whose name contains term."""
        needle = term.strip().lower()
        return [item for item in self.inventory if needle in item.name.lower()]

    async def generate_shopping_list(
        self, meal_plan: list[MealPlanDay]
    ) -> list[ShoppingItem]:
        """Append items the plan needs and the stock lacks."""
        if not any(day.meals() for day in meal_plan):
            raise PreconditionError(
                "Plan some meals before generating a shopping list."
            )
        token = self.requests.begin(AIOperation.SHOPPING_LIST)
        try:
            drafts = await self.gateway.generate_shopping_list(
                self.inventory, meal_plan
            )
        except GenerationError as exc:
            self.requests.fail(AIOperation.SHOPPING_LIST, token, exc.message)
            raise
        if not self.requests.succeed(AIOperation.SHOPPING_LIST, token):
            return []
        added = [_shopping_item(draft) for draft in drafts]
        self._set_shopping_list([*self.shopping_list, *added])
        _logger.info("Added %s shopping items", len(added))
        return added

    def toggle_checked(self, item_id: str) -> ShoppingItem | None:
        """Flip the checked flag of one shopping item."""
        toggled: ShoppingItem | None = None
        items: list[ShoppingItem] = []
        for item in self.shopping_list:
            if item.id == item_id:
                item = item.model_copy(update={"checked": not item.checked})
                toggled = item
            items.append(item)
        if toggled is not None:
            self._set_shopping_list(items)
        return toggled

    def remove_shopping_item(self, item_id: str) -> None:
        """Drop a shopping item; unknown ids are ignored."""
        remaining = [item for item in self.shopping_list if item.id != item_id]
        if len(remaining) != len(self.shopping_list):
            self._set_shopping_list(remaining)

    def move_checked_to_stock(self, as_of: date | None = None) -> list[Ingredient]:
        """Move every checked shopping item into stock in one step.

        Moved items keep their id and get a placeholder expiry a week from
        today. Returns the new stock items, or an empty list when nothing is
        checked.
        """
        checked = [item for item in self.shopping_list if item.checked]
        if not checked:
            return []
        expiry = _today(as_of) + timedelta(days=DEFAULT_SHELF_LIFE_DAYS)
        moved = [
            Ingredient(
                id=item.id,
                name=item.name,
                quantity=item.quantity,
                category=item.category,
                expiry_date=expiry,
            )
            for item in checked
        ]
        self.inventory = [*self.inventory, *moved]
        self.shopping_list = [item for item in self.shopping_list if not item.checked]
        self.store.save(Slot.INVENTORY, INVENTORY_ADAPTER, self.inventory)
        self.store.save(Slot.SHOPPING_LIST, SHOPPING_LIST_ADAPTER, self.shopping_list)
        return moved

    def _set_inventory(self, inventory: list[Ingredient]) -> None:
        self.inventory = inventory
        self.store.save(Slot.INVENTORY, INVENTORY_ADAPTER, inventory)

    def _set_shopping_list(self, shopping_list: list[ShoppingItem]) -> None:
        self.shopping_list = shopping_list
        self.store.save(Slot.SHOPPING_LIST, SHOPPING_LIST_ADAPTER, shopping_list)


def _shopping_item(draft: ShoppingDraft) -> ShoppingItem:
    return ShoppingItem(
        id=new_id(),
        name=draft.name,
        quantity=draft.quantity or "",
        category=draft.category,
        checked=False,
    )
