"""Domain models for the cooking assistant conversation."""

from datetime import datetime
from enum import StrEnum

from kitchen_wiz.domain.base import KitchenModel


class ChatRole(StrEnum):
    """Author of a chat message."""

    USER = "user"
    MODEL = "model"


class ChatMessage(KitchenModel):
    """A single message in the transcript."""

    id: str
    role: ChatRole
    text: str
    timestamp: datetime
