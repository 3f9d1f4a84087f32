"""Domain models for stock items and the shopping list."""

import re
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Annotated

from pydantic import BeforeValidator, Field

from kitchen_wiz.domain.base import KitchenModel

_QUANTITY_PATTERN = re.compile(r"^\s*(\d+(?:[.,]\d+)?)\s*([^\d\s].*)?$")


class Category(StrEnum):
    """Storage category shared by stock and shopping items."""

    PRODUCE = "produce"
    DAIRY = "dairy"
    MEAT = "meat"
    PANTRY = "pantry"
    FROZEN = "frozen"
    OTHER = "other"


def _normalize_category(value: object) -> object:
    if isinstance(value, str):
        return value.strip().lower()
    return value


CategoryField = Annotated[Category, BeforeValidator(_normalize_category)]


@dataclass(frozen=True)
class Quantity:
    """Structured reading of a free-text quantity, for display only."""

    magnitude: float
    unit: str | None


def parse_quantity(text: str) -> Quantity | None:
    """Split text like "500g" or "1.5 L" into magnitude and unit."""
    match = _QUANTITY_PATTERN.match(text or "")
    if match is None:
        return None
    magnitude = float(match.group(1).replace(",", "."))
    unit = (match.group(2) or "").strip() or None
    return Quantity(magnitude=magnitude, unit=unit)


class Ingredient(KitchenModel):
    """An item currently in stock."""

    id: str
    name: str
    quantity: str
    category: CategoryField
    expiry_date: date
    calories_per_unit: float | None = Field(default=None, ge=0)

    @property
    def measure(self) -> Quantity | None:
        """Structured quantity, if the text can be read as one."""
        return parse_quantity(self.quantity)


class ShoppingItem(KitchenModel):
    """An entry on the shopping list."""

    id: str
    name: str
    quantity: str = ""
    category: CategoryField = Category.OTHER
    checked: bool = False
