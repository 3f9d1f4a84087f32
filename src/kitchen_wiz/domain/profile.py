"""User profile domain model."""

from enum import StrEnum

from pydantic import Field

from kitchen_wiz.domain.base import KitchenModel


class Goal(StrEnum):
    """Dietary goal used to steer planning."""

    WEIGHT_LOSS = "weight-loss"
    MUSCLE_GAIN = "muscle-gain"
    MAINTENANCE = "maintenance"
    BUDGET_FRIENDLY = "budget-friendly"


class CookingSkill(StrEnum):
    """Self-reported cooking skill."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class UserProfile(KitchenModel):
    """Singleton taste profile for the installation."""

    name: str = "Chef"
    dietary_restrictions: list[str] = Field(default_factory=list)
    allergies: list[str] = Field(default_factory=list)
    goals: Goal = Goal.MAINTENANCE
    cooking_skill: CookingSkill = CookingSkill.INTERMEDIATE
    household_size: int = Field(default=2, gt=0)
    cuisine_preferences: list[str] = Field(default_factory=lambda: ["Italian"])
    max_cooking_time: int = Field(default=45, gt=0)
