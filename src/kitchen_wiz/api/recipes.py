"""Recipe discovery and saved-recipe endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from kitchen_wiz.domain.recipes import Recipe
from kitchen_wiz.domain.requests import AIOperation
from kitchen_wiz.services.gateway import RecipeDraft

if TYPE_CHECKING:
    from kitchen_wiz.containers import AppContainer

router = APIRouter(prefix="/recipes", tags=["recipes"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("")
async def list_recipes(request: Request, search: str = "") -> list[Recipe]:
    """Return discovered recipes matching an optional search term."""
    return _container(request).recipe_service.search(search)


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_recipe(payload: RecipeDraft, request: Request) -> Recipe:
    """Add a hand-written recipe."""
    return _container(request).recipe_service.add_manual(payload)


@router.post("/generate")
async def generate_recipes(request: Request) -> dict[str, object]:
    """Generate recipes from current stock and profile."""
    container = _container(request)
    recipes = await container.recipe_service.generate(
        container.pantry_service.inventory, container.profile_service.get()
    )
    return {
        "recipes": recipes,
        "request": container.requests.state(AIOperation.RECIPES),
    }


@router.get("/saved")
async def list_saved(request: Request) -> list[Recipe]:
    """Return saved recipes."""
    return _container(request).recipe_service.saved()


@router.get("/{recipe_id}")
async def recipe_detail(recipe_id: str, request: Request) -> dict[str, object]:
    """Return a recipe with its saved flag."""
    service = _container(request).recipe_service
    return {"recipe": service.get(recipe_id), "saved": service.is_saved(recipe_id)}


@router.delete("/{recipe_id}")
async def remove_recipe(recipe_id: str, request: Request) -> dict[str, str]:
    """Remove a recipe from the discovered list."""
    _container(request).recipe_service.remove_discovered(recipe_id)
    return {"status": "ok"}


@router.put("/{recipe_id}/save")
async def save_recipe(recipe_id: str, request: Request) -> dict[str, bool]:
    """Add a recipe to the saved list."""
    _container(request).recipe_service.save(recipe_id)
    return {"saved": True}


@router.delete("/{recipe_id}/save")
async def unsave_recipe(recipe_id: str, request: Request) -> dict[str, bool]:
    """Remove a recipe from the saved list."""
    _container(request).recipe_service.unsave(recipe_id)
    return {"saved": False}
