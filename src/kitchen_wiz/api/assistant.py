"""Profile and cooking-assistant endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from kitchen_wiz.api.schemas import ChatRequest, ProfileUpdate
from kitchen_wiz.domain.chat import ChatMessage
from kitchen_wiz.domain.profile import UserProfile

if TYPE_CHECKING:
    from kitchen_wiz.containers import AppContainer

router = APIRouter(tags=["assistant"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/profile")
async def get_profile(request: Request) -> UserProfile:
    return _container(request).profile_service.get()


@router.patch("/profile")
async def update_profile(payload: ProfileUpdate, request: Request) -> UserProfile:
    """Update profile fields that were sent."""
    changes = payload.model_dump(exclude_none=True)
    return _container(request).profile_service.update(**changes)


@router.get("/assistant/messages")
async def list_messages(request: Request) -> list[ChatMessage]:
    return _container(request).assistant_service.transcript


@router.post("/assistant/messages")
async def send_message(payload: ChatRequest, request: Request) -> ChatMessage:
    """Send a message and return the assistant's reply."""
    container = _container(request)
    return await container.assistant_service.send(
        payload.text, container.pantry_service.inventory
    )


@router.delete("/assistant/messages")
async def reset_conversation(request: Request) -> list[ChatMessage]:
    """Start a new conversation."""
    return _container(request).assistant_service.reset()
