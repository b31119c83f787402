"""Companion chat session."""

from typing import Optional

from ..data.models import Plan
from ..logging.config import get_logger
from ..services.base import ChatMessage, PlanGenerationService

GREETING = (
    "Hi! I'm your learning companion. I can help answer questions about your plan "
    "or explain concepts. What are we working on?"
)
FALLBACK_REPLY = "I'm having trouble connecting to my brain right now. Please check your API key."

logger = get_logger(__name__)


class ChatSession:
    """Message history plus a send operation that never raises on service failure."""

    def __init__(self, service: PlanGenerationService, plan: Optional[Plan] = None):
        self.service = service
        self.plan = plan
        self.messages: list[ChatMessage] = [ChatMessage(role="assistant", content=GREETING)]

    def send(self, message: str) -> Optional[ChatMessage]:
        """
        Send a user message and append the reply.

        Returns:
            The assistant reply, or None for blank input
        """
        if not message or not message.strip():
            return None

        history = list(self.messages)
        self.messages.append(ChatMessage(role="user", content=message))

        try:
            content = self.service.chat(history, message, self.plan)
        except Exception as e:
            logger.warning("Chat request failed", error=str(e))
            content = FALLBACK_REPLY

        reply = ChatMessage(role="assistant", content=content)
        self.messages.append(reply)
        return reply
