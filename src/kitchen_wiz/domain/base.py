"""Shared pydantic configuration for persisted domain records."""

from uuid import uuid4

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class KitchenModel(BaseModel):
    """Immutable record stored with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid4().hex
