"""Lifecycle of outstanding AI requests."""

from dataclasses import dataclass
from enum import StrEnum


class AIOperation(StrEnum):
    """Operations that suspend on the generation service."""

    RECEIPT_SCAN = "receipt_scan"
    RECIPES = "recipes"
    MEAL_PLAN = "meal_plan"
    SHOPPING_LIST = "shopping_list"
    CHAT = "chat"


class RequestStatus(StrEnum):
    """Request state for one operation."""

    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class RequestState:
    """Latest known state of an operation."""

    status: RequestStatus = RequestStatus.IDLE
    token: int = 0
    error: str | None = None

    @property
    def generating(self) -> bool:
        """True while a request is outstanding."""
        return self.status is RequestStatus.PENDING
