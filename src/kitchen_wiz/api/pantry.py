"""Stock and shopping-list endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from kitchen_wiz.api.schemas import IngredientCreate, IngredientUpdate
from kitchen_wiz.domain.inventory import Ingredient, ShoppingItem
from kitchen_wiz.errors import NotFoundError
from kitchen_wiz.services.views import expiring_soon

if TYPE_CHECKING:
    from kitchen_wiz.containers import AppContainer

router = APIRouter(tags=["pantry"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/inventory")
async def list_inventory(request: Request, search: str = "") -> list[Ingredient]:
    """Return stock items, optionally filtered by name."""
    pantry = _container(request).pantry_service
    if search:
        return pantry.search_inventory(search)
    return pantry.inventory


@router.post("/inventory", status_code=status.HTTP_201_CREATED)
async def add_ingredient(payload: IngredientCreate, request: Request) -> Ingredient:
    """Add a stock item by hand."""
    return _container(request).pantry_service.add_ingredient(**payload.model_dump())


@router.get("/inventory/expiring")
async def list_expiring(request: Request) -> list[Ingredient]:
    """Return items expiring within three days."""
    return expiring_soon(_container(request).pantry_service.inventory)


@router.post("/inventory/receipt")
async def scan_receipt(request: Request) -> list[Ingredient]:
    """Add the items of a receipt photo sent as the raw request body."""
    image_bytes = await request.body()
    return await _container(request).pantry_service.scan_receipt(image_bytes)


@router.patch("/inventory/{ingredient_id}")
async def update_ingredient(
    ingredient_id: str, payload: IngredientUpdate, request: Request
) -> Ingredient:
    """Correct fields of a stock item."""
    return _container(request).pantry_service.update_ingredient(
        ingredient_id, **payload.model_dump(exclude_unset=True)
    )


@router.delete("/inventory/{ingredient_id}")
async def remove_ingredient(ingredient_id: str, request: Request) -> dict[str, str]:
    """Remove a stock item."""
    _container(request).pantry_service.remove_ingredient(ingredient_id)
    return {"status": "ok"}


@router.get("/shopping-list")
async def list_shopping(request: Request) -> list[ShoppingItem]:
    """Return the shopping list."""
    return _container(request).pantry_service.shopping_list


@router.post("/shopping-list/generate")
async def generate_shopping_list(request: Request) -> list[ShoppingItem]:
    """Append items needed for the current meal plan."""
    container = _container(request)
    return await container.pantry_service.generate_shopping_list(
        container.planner_service.plan
    )


@router.post("/shopping-list/move-to-stock")
async def move_checked_to_stock(request: Request) -> dict[str, object]:
    """Move checked items into stock."""
    moved = _container(request).pantry_service.move_checked_to_stock()
    return {"moved": moved}


@router.post("/shopping-list/{item_id}/toggle")
async def toggle_item(item_id: str, request: Request) -> ShoppingItem:
    """Flip the checked flag of an item."""
    item = _container(request).pantry_service.toggle_checked(item_id)
    if item is None:
        raise NotFoundError("Shopping item", item_id)
    return item


@router.delete("/shopping-list/{item_id}")
async def remove_shopping_item(item_id: str, request: Request) -> dict[str, str]:
    """Remove an item from the shopping list."""
    _container(request).pantry_service.remove_shopping_item(item_id)
    return {"status": "ok"}
