"""Recipe domain models."""

from pydantic import Field

from kitchen_wiz.domain.base import KitchenModel


class RecipeIngredient(KitchenModel):
    """Ingredient line of a recipe."""

    name: str
    amount: str = ""


class Recipe(KitchenModel):
    """A generated, saved, planned or manually entered recipe."""

    id: str
    title: str
    description: str | None = None
    ingredients: list[RecipeIngredient] | None = None
    instructions: list[str] | None = None
    prep_time: int | None = Field(default=None, ge=0)
    cook_time: int | None = Field(default=None, ge=0)
    calories: float | None = Field(default=None, ge=0)
    match_score: float | None = Field(default=None, ge=0, le=100)
    tags: list[str] | None = None

    @property
    def total_time(self) -> int | None:
        """Prep plus cook time when both are known."""
        if self.prep_time is None or self.cook_time is None:
            return None
        return self.prep_time + self.cook_time

    def mentions(self, term: str) -> bool:
        """Return True when the title or an ingredient name contains term."""
        needle = term.lower()
        if needle in self.title.lower():
            return True
        return any(needle in item.name.lower() for item in self.ingredients or [])
