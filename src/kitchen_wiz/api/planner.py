"""Weekly meal plan endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from kitchen_wiz.api.schemas import ClearWeekRequest, SlotUpdate
from kitchen_wiz.domain.plan import MealPlanDay, MealType, Weekday
from kitchen_wiz.domain.recipes import Recipe
from kitchen_wiz.services.views import daily_calories

if TYPE_CHECKING:
    from kitchen_wiz.containers import AppContainer

router = APIRouter(prefix="/plan", tags=["plan"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("")
async def get_plan(request: Request) -> dict[str, object]:
    """Return the week with per-day calorie totals."""
    week = _container(request).planner_service.week()
    return {"days": week, "calories": daily_calories(week)}


@router.post("/generate")
async def generate_plan(request: Request) -> list[MealPlanDay]:
    """Replace the plan with a generated week."""
    container = _container(request)
    return await container.planner_service.generate_plan(
        container.profile_service.get(), container.pantry_service.inventory
    )


@router.post("/clear")
async def clear_plan(payload: ClearWeekRequest, request: Request) -> list[MealPlanDay]:
    """Empty every slot once confirmed."""
    return _container(request).planner_service.clear_week(confirmed=payload.confirm)


@router.get("/search")
async def search_recipes(request: Request, q: str = "") -> list[Recipe]:
    """Find discovered recipes to drop into a slot."""
    return _container(request).recipe_service.search(q)


@router.put("/{day}/{meal}")
async def update_slot(
    day: Weekday, meal: MealType, payload: SlotUpdate, request: Request
) -> MealPlanDay:
    """Fill a slot from a stored recipe, or from free text."""
    container = _container(request)
    if payload.recipe_id:
        recipe = container.recipe_service.get(payload.recipe_id)
        return container.planner_service.assign(day, meal, recipe)
    return container.planner_service.manual_entry(day, meal, payload.text or "")


@router.delete("/{day}/{meal}")
async def clear_slot(day: Weekday, meal: MealType, request: Request) -> MealPlanDay:
    """Empty one slot."""
    return _container(request).planner_service.clear_slot(day, meal)
