"""Weekly meal plan domain models."""

from enum import StrEnum

from kitchen_wiz.domain.base import KitchenModel
from kitchen_wiz.domain.recipes import Recipe


class Weekday(StrEnum):
    """Days of the plan in canonical order."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def parse(cls, value: str) -> "Weekday":
        """Match a day name case-insensitively."""
        cleaned = value.strip().lower()
        for day in cls:
            if day.value.lower() == cleaned:
                return day
        raise ValueError(f"Unknown weekday: {value!r}")


WEEK: tuple[Weekday, ...] = tuple(Weekday)


class MealType(StrEnum):
    """Slots available on each day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class MealPlanDay(KitchenModel):
    """One day of the plan with up to three filled slots."""

    day: str
    breakfast: Recipe | None = None
    lunch: Recipe | None = None
    dinner: Recipe | None = None

    def slot(self, meal_type: MealType) -> Recipe | None:
        """Return the recipe in a slot, if filled."""
        return getattr(self, meal_type.value)

    def meals(self) -> list[Recipe]:
        """Filled slots in breakfast, lunch, dinner order."""
        return [recipe for meal in MealType if (recipe := self.slot(meal)) is not None]

    @property
    def total_calories(self) -> float:
        """Sum of calories across filled slots."""
        return sum(recipe.calories or 0 for recipe in self.meals())
