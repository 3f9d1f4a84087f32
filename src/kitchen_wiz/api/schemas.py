"""Pydantic models for API request payloads."""

from datetime import date

from pydantic import BaseModel, Field, field_validator

from kitchen_wiz.domain.inventory import Category
from kitchen_wiz.domain.profile import CookingSkill, Goal


class IngredientCreate(BaseModel):
    """Manual stock entry."""

    name: str = Field(min_length=1)
    quantity: str = ""
    category: Category = Category.OTHER
    expiry_date: date
    calories_per_unit: float | None = Field(default=None, ge=0)


class IngredientUpdate(BaseModel):
    """Partial correction of a stock item.

    Only fields that were sent are applied; `calories_per_unit` may be sent as
    null to clear it.
    """

    name: str | None = Field(default=None, min_length=1)
    quantity: str | None = None
    category: Category | None = None
    expiry_date: date | None = None
    calories_per_unit: float | None = Field(default=None, ge=0)

    @field_validator("name", "quantity", "category", "expiry_date")
    @classmethod
    def _not_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("may not be null")
        return value


class ClearWeekRequest(BaseModel):
    """Confirmation for wiping the plan."""

    confirm: bool = False


class SlotUpdate(BaseModel):
    """Fill a plan slot from a stored recipe or free text."""

    recipe_id: str | None = None
    text: str | None = None


class ProfileUpdate(BaseModel):
    """Partial profile update; tag lists accept comma-separated text."""

    name: str | None = None
    dietary_restrictions: list[str] | str | None = None
    allergies: list[str] | str | None = None
    goals: Goal | None = None
    cooking_skill: CookingSkill | None = None
    household_size: int | None = Field(default=None, gt=0)
    cuisine_preferences: list[str] | str | None = None
    max_cooking_time: int | None = Field(default=None, gt=0)


class ChatRequest(BaseModel):
    """New message for the assistant."""

    text: str
