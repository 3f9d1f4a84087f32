"""Weekly meal plan reducer."""

import logging
from dataclasses import dataclass, field

from pydantic import TypeAdapter

from kitchen_wiz.domain.base import new_id
from kitchen_wiz.domain.inventory import Ingredient
from kitchen_wiz.domain.plan import WEEK, MealPlanDay, MealType, Weekday
from kitchen_wiz.domain.profile import UserProfile
from kitchen_wiz.domain.recipes import Recipe
from kitchen_wiz.domain.requests import AIOperation
from kitchen_wiz.errors import GenerationError, PreconditionError
from kitchen_wiz.services.gateway import AIGateway, PlanDayDraft, RecipeDraft
from kitchen_wiz.services.requests import RequestTracker
from kitchen_wiz.services.storage import CollectionStore, Slot

_logger = logging.getLogger(__name__)

MEAL_PLAN_ADAPTER = TypeAdapter(list[MealPlanDay])
MANUAL_TAG = "manual"


@dataclass
class PlannerService:
    """Owns the weekly plan; each slot is empty or holds a recipe copy."""

    gateway: AIGateway
    store: CollectionStore
    requests: RequestTracker
    plan: list[MealPlanDay] = field(init=False)

    def __post_init__(self) -> None:
        self.plan = self.store.load(Slot.MEAL_PLAN, MEAL_PLAN_ADAPTER, list)

    def week(self) -> list[MealPlanDay]:
        """Return Monday to Sunday, synthesizing days with no stored plan."""
        stored: dict[Weekday, MealPlanDay] = {}
        for entry in self.plan:
            try:
                stored.setdefault(Weekday.parse(entry.day), entry)
            except ValueError:
                continue
        week: list[MealPlanDay] = []
        for day in WEEK:
            entry = stored.get(day)
            if entry is None:
                week.append(MealPlanDay(day=day.value))
            else:
                week.append(entry.model_copy(update={"day": day.value}))
        return week

    def has_meals(self) -> bool:
        """Return True when at least one slot is filled."""
        return any(day.meals() for day in self.plan)

    async def generate_plan(
        self, profile: UserProfile, inventory: list[Ingredient]
    ) -> list[MealPlanDay]:
        """Replace the whole plan with a generated week.

        On failure the existing plan is kept and the error propagates.
        """
        token = self.requests.begin(AIOperation.MEAL_PLAN)
        try:
            drafts = await self.gateway.generate_meal_plan(profile, inventory)
        except GenerationError as exc:
            self.requests.fail(AIOperation.MEAL_PLAN, token, exc.message)
            raise
        if not self.requests.succeed(AIOperation.MEAL_PLAN, token):
            return self.week()
        plan = _plan_from_drafts(drafts)
        self._set_plan(plan)
        _logger.info("Planned %s meals", sum(len(day.meals()) for day in plan))
        return plan

    def clear_week(self, confirmed: bool) -> list[MealPlanDay]:
        """Empty all slots; the caller must confirm first."""
        if not confirmed:
            raise PreconditionError("Confirm clearing the entire week's plan.")
        plan = [MealPlanDay(day=day.value) for day in WEEK]
        self._set_plan(plan)
        return plan

    def assign(
        self, day: Weekday | str, meal_type: MealType | str, recipe: Recipe | None
    ) -> MealPlanDay:
        """Fill a slot with a copy of recipe, or empty it when recipe is None."""
        weekday = Weekday.parse(day)
        meal = MealType(meal_type)
        snapshot = recipe.model_copy(deep=True) if recipe is not None else None
        week = self.week()
        index = WEEK.index(weekday)
        week[index] = week[index].model_copy(update={meal.value: snapshot})
        self._set_plan(week)
        return week[index]

    def clear_slot(self, day: Weekday | str, meal_type: MealType | str) -> MealPlanDay:
        return self.assign(day, meal_type, None)

    def manual_entry(
        self, day: Weekday | str, meal_type: MealType | str, text: str
    ) -> MealPlanDay:
        """Fill a slot from free text; blank text empties it."""
        title = text.strip()
        if not title:
            return self.clear_slot(day, meal_type)
        recipe = Recipe(
            id=new_id(),
            title=title,
            calories=0,
            description="Manually added meal",
            tags=[MANUAL_TAG],
        )
        return self.assign(day, meal_type, recipe)

    def day_calories(self, day: Weekday | str) -> float | None:
        """Calories planned for a day, or None when there are none to show."""
        weekday = Weekday.parse(day)
        total = self.week()[WEEK.index(weekday)].total_calories
        return total if total > 0 else None

    def _set_plan(self, plan: list[MealPlanDay]) -> None:
        self.plan = plan
        self.store.save(Slot.MEAL_PLAN, MEAL_PLAN_ADAPTER, plan)


def _plan_from_drafts(drafts: list[PlanDayDraft]) -> list[MealPlanDay]:
    by_day: dict[Weekday, PlanDayDraft] = {}
    for draft in drafts:
        try:
            by_day.setdefault(Weekday.parse(draft.day), draft)
        except ValueError:
            _logger.warning("Ignoring plan entry for unknown day %r", draft.day)
    plan: list[MealPlanDay] = []
    for day in WEEK:
        draft = by_day.get(day)
        if draft is None:
            plan.append(MealPlanDay(day=day.value))
            continue
        plan.append(
            MealPlanDay(
                day=day.value,
                breakfast=_recipe(draft.breakfast),
                lunch=_recipe(draft.lunch),
                dinner=_recipe(draft.dinner),
            )
        )
    return plan


def _recipe(draft: RecipeDraft | None) -> Recipe | None:
    if draft is None:
        return None
    return Recipe(id=new_id(), **draft.model_dump())
