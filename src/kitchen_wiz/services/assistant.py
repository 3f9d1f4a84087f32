"""Conversational cooking assistant."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from kitchen_wiz.domain.base import new_id
from kitchen_wiz.domain.chat import ChatMessage, ChatRole
from kitchen_wiz.domain.inventory import Ingredient
from kitchen_wiz.domain.requests import AIOperation
from kitchen_wiz.errors import PreconditionError
from kitchen_wiz.services.gateway import CHAT_FALLBACK, AIGateway
from kitchen_wiz.services.requests import RequestTracker

GREETING = (
    "Hello! I'm your Kitchen AI Chef. Ask me anything about your ingredients, "
    "recipes, or cooking tips!"
)


def _now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class AssistantService:
    """Keeps one append-only transcript for the current conversation."""

    gateway: AIGateway
    requests: RequestTracker
    clock: Callable[[], datetime] = _now
    transcript: list[ChatMessage] = field(init=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self) -> list[ChatMessage]:
        """Start a new conversation with the greeting."""
        self.transcript = [self._message(ChatRole.MODEL, GREETING)]
        return self.transcript

    async def send(self, text: str, inventory: list[Ingredient]) -> ChatMessage:
        """Append the user's message and the assistant's reply.

        The reply is always appended, using the fallback text when the model
        call fails, so the transcript never ends on an unanswered message. A
        reply that arrives after ``reset`` goes to the conversation it was
        asked in, not the new one.
        """
        if not text.strip():
            raise PreconditionError("Message is empty.")
        conversation = self.transcript
        history = list(conversation)
        conversation.append(self._message(ChatRole.USER, text))
        token = self.requests.begin(AIOperation.CHAT)
        reply_text = await self.gateway.chat(history, text, inventory)
        if reply_text == CHAT_FALLBACK:
            self.requests.fail(AIOperation.CHAT, token, "Chat request failed.")
        else:
            self.requests.succeed(AIOperation.CHAT, token)
        reply = self._message(ChatRole.MODEL, reply_text)
        conversation.append(reply)
        return reply

    def _message(self, role: ChatRole, text: str) -> ChatMessage:
        return ChatMessage(id=new_id(), role=role, text=text, timestamp=self.clock())
