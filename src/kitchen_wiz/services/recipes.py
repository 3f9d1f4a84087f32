"""Discovered and saved recipe collections."""

import logging
from dataclasses import dataclass, field

from pydantic import TypeAdapter

from kitchen_wiz.domain.base import new_id
from kitchen_wiz.domain.inventory import Ingredient
from kitchen_wiz.domain.profile import UserProfile
from kitchen_wiz.domain.recipes import Recipe
from kitchen_wiz.domain.requests import AIOperation
from kitchen_wiz.errors import GenerationError, NotFoundError, PreconditionError
from kitchen_wiz.services.gateway import AIGateway, RecipeDraft
from kitchen_wiz.services.requests import RequestTracker
from kitchen_wiz.services.storage import CollectionStore, Slot

_logger = logging.getLogger(__name__)

RECIPES_ADAPTER = TypeAdapter(list[Recipe])


@dataclass
class RecipeService:
    """One recipe store with two ordered memberships: discovered and saved.

    Saving is a membership fact rather than a copy, so a recipe removed from
    the discovered list stays available while it is saved. Records referenced
    by neither list are dropped.
    """

    gateway: AIGateway
    store: CollectionStore
    requests: RequestTracker
    _recipes: dict[str, Recipe] = field(init=False)
    _discovered: list[str] = field(init=False)
    _saved: list[str] = field(init=False)

    def __post_init__(self) -> None:
        discovered = self.store.load(Slot.RECIPES, RECIPES_ADAPTER, list)
        saved = self.store.load(Slot.SAVED_RECIPES, RECIPES_ADAPTER, list)
        self._recipes = {recipe.id: recipe for recipe in saved}
        self._recipes.update({recipe.id: recipe for recipe in discovered})
        self._discovered = _unique_ids(discovered)
        self._saved = _unique_ids(saved)

    async def generate(
        self, inventory: list[Ingredient], profile: UserProfile
    ) -> list[Recipe]:
        """Ask for new recipes and prepend them to the discovered list.

        A failed request leaves the collections untouched and yields no recipes.
        """
        if not inventory:
            raise PreconditionError("Add some ingredients to your inventory first!")
        token = self.requests.begin(AIOperation.RECIPES)
        try:
            drafts = await self.gateway.generate_recipes(inventory, profile)
        except GenerationError as exc:
            self.requests.fail(AIOperation.RECIPES, token, exc.message)
            return []
        if not self.requests.succeed(AIOperation.RECIPES, token):
            return []
        recipes = [Recipe(id=new_id(), **draft.model_dump()) for draft in drafts]
        self._prepend(recipes)
        _logger.info("Discovered %s recipes", len(recipes))
        return recipes

    def add_manual(self, draft: RecipeDraft) -> Recipe:
        """Add a hand-written recipe to the top of the discovered list."""
        recipe = Recipe(id=new_id(), **draft.model_dump())
        self._prepend([recipe])
        return recipe

    def discovered(self) -> list[Recipe]:
        return [self._recipes[recipe_id] for recipe_id in self._discovered]

    def saved(self) -> list[Recipe]:
        return [self._recipes[recipe_id] for recipe_id in self._saved]

    def get(self, recipe_id: str) -> Recipe:
        """Return a known recipe by id."""
        recipe = self._recipes.get(recipe_id)
        if recipe is None:
            raise NotFoundError("Recipe", recipe_id)
        return recipe

    def is_saved(self, recipe_id: str) -> bool:
        return recipe_id in self._saved

    def save(self, recipe_id: str) -> Recipe:
        """Add a recipe to the saved list."""
        recipe = self.get(recipe_id)
        if recipe_id not in self._saved:
            self._saved = [*self._saved, recipe_id]
            self._persist_saved()
        return recipe

    def unsave(self, recipe_id: str) -> None:
        """Remove a recipe from the saved list."""
        if recipe_id in self._saved:
            self._saved = [item for item in self._saved if item != recipe_id]
            self._prune()
            self._persist_saved()

    def toggle_saved(self, recipe_id: str) -> bool:
        """Flip saved membership and return the new value."""
        if self.is_saved(recipe_id):
            self.unsave(recipe_id)
            return False
        self.save(recipe_id)
        return True

    def remove_discovered(self, recipe_id: str) -> None:
        """Drop a recipe from the discovered list, keeping it if saved."""
        if recipe_id in self._discovered:
            self._discovered = [
                item for item in self._discovered if item != recipe_id
            ]
            self._prune()
            self._persist_discovered()

    def search(self, term: str) -> list[Recipe]:
        """Discovered recipes whose title or ingredients mention term."""
        needle = term.strip()
        if not needle:
            return self.discovered()
        return [recipe for recipe in self.discovered() if recipe.mentions(needle)]

    def _prepend(self, recipes: list[Recipe]) -> None:
        for recipe in recipes:
            self._recipes[recipe.id] = recipe
        self._discovered = [recipe.id for recipe in recipes] + self._discovered
        self._persist_discovered()

    def _prune(self) -> None:
        referenced = set(self._discovered) | set(self._saved)
        self._recipes = {
            recipe_id: recipe
            for recipe_id, recipe in self._recipes.items()
            if recipe_id in referenced
        }

    def _persist_discovered(self) -> None:
        self.store.save(Slot.RECIPES, RECIPES_ADAPTER, self.discovered())

    def _persist_saved(self) -> None:
        self.store.save(Slot.SAVED_RECIPES, RECIPES_ADAPTER, self.saved())


def _unique_ids(recipes: list[Recipe]) -> list[str]:
    return list(dict.fromkeys(recipe.id for recipe in recipes))
