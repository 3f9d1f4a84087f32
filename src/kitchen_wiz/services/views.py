"""Read-only views derived from kitchen state."""

from dataclasses import dataclass
from datetime import date, datetime

from kitchen_wiz.domain.inventory import Category, Ingredient
from kitchen_wiz.domain.plan import MealPlanDay
from kitchen_wiz.services.pantry import is_expiring_soon


@dataclass(frozen=True)
class CategoryCount:
    """Number of stock items in one category."""

    category: Category
    count: int


@dataclass(frozen=True)
class DashboardSummary:
    """Overview of the kitchen for the home screen."""

    total_items: int
    expiring_count: int
    categories: list[CategoryCount]


def category_distribution(inventory: list[Ingredient]) -> list[CategoryCount]:
    """Count items per category in order of first appearance."""
    counts: dict[Category, int] = {}
    for item in inventory:
        counts[item.category] = counts.get(item.category, 0) + 1
    return [CategoryCount(category=name, count=count) for name, count in counts.items()]


def expiring_soon(
    inventory: list[Ingredient], as_of: date | datetime | None = None
) -> list[Ingredient]:
    """Items expiring within the next three days."""
    return [item for item in inventory if is_expiring_soon(item, as_of)]


def expiring_count(
    inventory: list[Ingredient], as_of: date | datetime | None = None
) -> int:
    return len(expiring_soon(inventory, as_of))


def is_saved(recipe_id: str, saved_ids: set[str]) -> bool:
    return recipe_id in saved_ids


def daily_calories(week: list[MealPlanDay]) -> dict[str, float | None]:
    """Per-day calorie totals, None where nothing would be shown."""
    return {day.day: day.total_calories or None for day in week}


def dashboard(
    inventory: list[Ingredient], as_of: date | datetime | None = None
) -> DashboardSummary:
    return DashboardSummary(
        total_items=len(inventory),
        expiring_count=expiring_count(inventory, as_of),
        categories=category_distribution(inventory),
    )
