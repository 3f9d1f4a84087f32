"""Gateway to the generation service for parsing, planning and chat."""

import base64
import json
import logging
import re
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol

from pydantic import Field, TypeAdapter, field_validator

from kitchen_wiz.domain.base import KitchenModel
from kitchen_wiz.domain.chat import ChatMessage, ChatRole
from kitchen_wiz.domain.inventory import Category, CategoryField, Ingredient
from kitchen_wiz.domain.plan import MealPlanDay
from kitchen_wiz.domain.profile import UserProfile
from kitchen_wiz.domain.recipes import RecipeIngredient
from kitchen_wiz.errors import GenerationError, ReceiptParseError

_logger = logging.getLogger(__name__)

CHAT_FALLBACK = (
    "I'm having a little trouble in the kitchen right now. Ask me again in a moment!"
)
DEFAULT_MAX_COOKING_TIME = 60

_CODE_FENCE = re.compile(r"```(?:json)?\s*|\s*```")


class IngredientDraft(KitchenModel):
    """Ingredient read from a receipt, before it receives an id."""

    name: str
    quantity: str
    category: CategoryField
    expiry_date: date
    calories_per_unit: float | None = Field(default=None, ge=0)


class RecipeDraft(KitchenModel):
    """Generated recipe, before it receives an id."""

    title: str
    description: str | None = None
    ingredients: list[RecipeIngredient] | None = None
    instructions: list[str] | None = None
    prep_time: int | None = Field(default=None, ge=0)
    cook_time: int | None = Field(default=None, ge=0)
    calories: float | None = Field(default=None, ge=0)
    match_score: float | None = None
    tags: list[str] | None = None

    @field_validator("match_score")
    @classmethod
    def _clamp_score(cls, value: float | None) -> float | None:
        if value is None:
            return None
        return min(max(value, 0.0), 100.0)


class PlanDayDraft(KitchenModel):
    """Generated day of a meal plan."""

    day: str
    breakfast: RecipeDraft | None = None
    lunch: RecipeDraft | None = None
    dinner: RecipeDraft | None = None


class ShoppingDraft(KitchenModel):
    """Generated shopping-list entry, before it receives an id."""

    name: str
    quantity: str | None = None
    category: CategoryField = Category.OTHER


_INGREDIENT_DRAFTS = TypeAdapter(list[IngredientDraft])
_RECIPE_DRAFTS = TypeAdapter(list[RecipeDraft])
_PLAN_DRAFTS = TypeAdapter(list[PlanDayDraft])
_SHOPPING_DRAFTS = TypeAdapter(list[ShoppingDraft])


def _nullable(schema: dict[str, object]) -> dict[str, object]:
    return {"anyOf": [schema, {"type": "null"}]}


def _strict_object(properties: dict[str, object]) -> dict[str, object]:
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }


def _item_list(item_schema: dict[str, object]) -> dict[str, object]:
    return _strict_object({"items": {"type": "array", "items": item_schema}})


_CATEGORY_SCHEMA: dict[str, object] = {
    "type": "string",
    "enum": [category.value for category in Category],
}
_RECIPE_INGREDIENTS_SCHEMA: dict[str, object] = {
    "type": "array",
    "items": _strict_object({"name": {"type": "string"}, "amount": {"type": "string"}}),
}

RECEIPT_SCHEMA = _item_list(
    _strict_object(
        {
            "name": {"type": "string"},
            "quantity": {"type": "string"},
            "category": _CATEGORY_SCHEMA,
            "expiryDate": {"type": "string", "description": "YYYY-MM-DD"},
            "caloriesPerUnit": _nullable(
                {
                    "type": "number",
                    "description": "Approximate calories per unit/serving",
                }
            ),
        }
    )
)

RECIPES_SCHEMA = _item_list(
    _strict_object(
        {
            "title": {"type": "string"},
            "description": _nullable({"type": "string"}),
            "ingredients": _nullable(_RECIPE_INGREDIENTS_SCHEMA),
            "instructions": _nullable({"type": "array", "items": {"type": "string"}}),
            "prepTime": _nullable({"type": "integer"}),
            "cookTime": _nullable({"type": "integer"}),
            "calories": _nullable({"type": "number"}),
            "matchScore": _nullable({"type": "number"}),
            "tags": _nullable({"type": "array", "items": {"type": "string"}}),
        }
    )
)

_PLAN_MEAL_SCHEMA = _nullable(
    _strict_object(
        {
            "title": {"type": "string"},
            "calories": _nullable({"type": "number"}),
            "prepTime": _nullable({"type": "integer"}),
            "cookTime": _nullable({"type": "integer"}),
            "ingredients": _nullable(_RECIPE_INGREDIENTS_SCHEMA),
        }
    )
)

MEAL_PLAN_SCHEMA = _item_list(
    _strict_object(
        {
            "day": {"type": "string"},
            "breakfast": _PLAN_MEAL_SCHEMA,
            "lunch": _PLAN_MEAL_SCHEMA,
            "dinner": _PLAN_MEAL_SCHEMA,
        }
    )
)

SHOPPING_LIST_SCHEMA = _item_list(
    _strict_object(
        {
            "name": {"type": "string"},
            "quantity": _nullable({"type": "string"}),
            "category": _CATEGORY_SCHEMA,
        }
    )
)


class GenerationClient(Protocol):
    """Interface for the hosted generation model."""

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        schema_name: str,
        image_data_url: str | None = None,
    ) -> str:
        """Return the raw text of a schema-constrained response."""

    async def converse(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        history: list[dict[str, str]],
        message: str,
    ) -> str:
        """Return the reply to message given the prior conversation."""


@dataclass
class AIGateway:
    """Builds prompts, calls the generation client and validates results.

    The gateway never touches kitchen state; reducers decide what to do with
    the drafts it returns.
    """

    client: GenerationClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def parse_receipt(
        self, image_bytes: bytes, today: date | None = None
    ) -> list[IngredientDraft]:
        """Extract stock items from a photo of a grocery receipt."""
        if not image_bytes:
            raise ReceiptParseError("Receipt image is empty.")
        today = today or datetime.now(tz=UTC).date()
        prompt = (
            "Analyze this grocery receipt. Extract the items as ingredients. "
            "For each item, determine a likely category "
            "(produce, dairy, meat, pantry, frozen, other), "
            'a standard quantity (e.g. "1 unit", "500g"), and estimate an expiry '
            f"date counted from today ({today.isoformat()}) as YYYY-MM-DD based on "
            "the type of food (e.g. fresh produce = 7 days, pantry = 180 days). "
            "Include approximate calories per unit when you can."
        )
        try:
            raw = await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=prompt,
                schema=RECEIPT_SCHEMA,
                schema_name="receipt_items",
                image_data_url=to_data_url(image_bytes),
            )
            return _INGREDIENT_DRAFTS.validate_python(decode_items(raw))
        except Exception as exc:
            _logger.exception("Receipt parsing failed")
            raise ReceiptParseError("Failed to read receipt.") from exc

    async def generate_recipes(
        self, inventory: list[Ingredient], profile: UserProfile
    ) -> list[RecipeDraft]:
        """Suggest recipes that use up existing stock."""
        stock = ", ".join(f"{item.quantity} {item.name}" for item in inventory)
        prompt = (
            f"I have these ingredients: {stock}.\n"
            f"My profile: {profile.model_dump_json(by_alias=True)}.\n\n"
            "Suggest 3 creative recipes that prioritize using my existing stock "
            "to reduce waste. Take into account my cuisine preferences "
            f"({_cuisines(profile)}) and maximum cooking time "
            f"({_max_time(profile)} minutes). Avoid my allergies "
            f"({', '.join(profile.allergies) or 'none'}). "
            "Rate each recipe with a matchScore (0-100) based on how many "
            "ingredients I already have versus need to buy."
        )
        raw = await self._generate(prompt, RECIPES_SCHEMA, "recipes", "Recipe")
        return self._validate(_RECIPE_DRAFTS, raw, "Recipe")

    async def generate_meal_plan(
        self, profile: UserProfile, inventory: list[Ingredient]
    ) -> list[PlanDayDraft]:
        """Create a Monday to Sunday plan with breakfast, lunch and dinner."""
        stock = ", ".join(item.name for item in inventory)
        prompt = (
            "Create a 7-day meal plan (Monday to Sunday) for a user with these "
            "attributes:\n"
            f"- Goals: {profile.goals.value}\n"
            f"- Diet: {', '.join(profile.dietary_restrictions) or 'none'}\n"
            f"- Allergies: {', '.join(profile.allergies) or 'none'}\n"
            f"- Cuisines: {_cuisines(profile)}\n"
            f"- Max Cooking Time: {_max_time(profile)} minutes per meal\n"
            f"- Household size: {profile.household_size}\n\n"
            f"Available Ingredients: {stock}.\n"
            "Prioritize using available ingredients to reduce waste. Ensure meals "
            "are culturally relevant to the preferred cuisines and fit within the "
            "time limit. Give every meal a title, calories, prepTime, cookTime and "
            "its main ingredients."
        )
        raw = await self._generate(prompt, MEAL_PLAN_SCHEMA, "meal_plan", "Meal plan")
        return self._validate(_PLAN_DRAFTS, raw, "Meal plan")

    async def generate_shopping_list(
        self, inventory: list[Ingredient], meal_plan: list[MealPlanDay]
    ) -> list[ShoppingDraft]:
        """List what the plan needs that the stock does not cover."""
        stock = ", ".join(f"{item.quantity} {item.name}" for item in inventory)
        prompt = (
            f"I have this inventory: {stock}.\n\n"
            "I have this meal plan for the week:\n"
            f"{describe_plan(meal_plan)}\n\n"
            "Create a consolidated shopping list for items I am missing or likely "
            "don't have enough of to cook these meals. Do not include basic "
            "staples like water, salt, pepper unless explicitly needed in large "
            "quantities. Give each item a name, quantity and category "
            "(produce, dairy, meat, pantry, frozen, other)."
        )
        raw = await self._generate(
            prompt, SHOPPING_LIST_SCHEMA, "shopping_list", "Shopping list"
        )
        return self._validate(_SHOPPING_DRAFTS, raw, "Shopping list")

    async def chat(
        self,
        history: list[ChatMessage],
        message: str,
        inventory: list[Ingredient],
    ) -> str:
        """Answer a cooking question, returning a fallback reply on failure."""
        instructions = (
            "You are an expert Chef and Nutritionist AI. The user has these "
            f"ingredients in stock: {', '.join(item.name for item in inventory)}. "
            "Answer cooking questions, suggest substitutions, and help with "
            "techniques. Keep answers concise and helpful."
        )
        try:
            reply = await self.client.converse(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                instructions=instructions,
                history=[_to_turn(entry) for entry in history],
                message=message,
            )
        except Exception:
            _logger.exception("Chat request failed")
            return CHAT_FALLBACK
        return reply.strip() or CHAT_FALLBACK

    async def _generate(
        self, prompt: str, schema: dict[str, object], schema_name: str, label: str
    ) -> str:
        try:
            return await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=prompt,
                schema=schema,
                schema_name=schema_name,
            )
        except Exception as exc:
            _logger.exception("%s generation failed", label)
            raise GenerationError(f"{label} generation failed.") from exc

    @staticmethod
    def _validate(adapter: TypeAdapter, raw: str, label: str) -> list:
        try:
            return adapter.validate_python(decode_items(raw))
        except ValueError as exc:
            _logger.warning("%s response was malformed: %s", label, exc)
            raise GenerationError(f"{label} response was malformed.") from exc


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences wrapped around a JSON payload."""
    return _CODE_FENCE.sub("", text).strip()


def decode_items(raw: str) -> list[object]:
    """Parse a response into its list of records.

    Accepts both a bare JSON array and an object wrapping the array under
    ``items``.
    """
    data = json.loads(strip_code_fences(raw or "[]"))
    if isinstance(data, dict):
        data = data.get("items")
    if not isinstance(data, list):
        raise ValueError("Expected a JSON array of records")
    return data


def describe_plan(meal_plan: list[MealPlanDay]) -> str:
    """Render the plan as one line per day for prompting."""
    lines = []
    for day in meal_plan:
        meals = "; ".join(
            f"{recipe.title} ({_ingredient_names(recipe.ingredients)})"
            for recipe in day.meals()
        )
        lines.append(f"{day.day}: {meals}")
    return "\n".join(lines)


def to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return "image/jpeg"


def _ingredient_names(ingredients: list[RecipeIngredient] | None) -> str:
    if not ingredients:
        return "ingredients unknown"
    return ", ".join(item.name for item in ingredients)


def _cuisines(profile: UserProfile) -> str:
    return ", ".join(profile.cuisine_preferences) or "Any"


def _max_time(profile: UserProfile) -> int:
    return profile.max_cooking_time or DEFAULT_MAX_COOKING_TIME


def _to_turn(message: ChatMessage) -> dict[str, str]:
    role = "assistant" if message.role is ChatRole.MODEL else "user"
    return {"role": role, "content": message.text}
