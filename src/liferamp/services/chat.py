"""Coaching chat service."""

import logging
from dataclasses import dataclass

from ..clients.llm import ChatMessage, ChatModel
from ..errors import LLMNotConfiguredError
from .prompts import build_chat_system_prompt

logger = logging.getLogger(__name__)


@dataclass
class HistoryMessage:
    """One prior chat message as the page keeps it."""

    sender: str  # "user" or "bot"
    text: str


def build_messages(
    user_message: str,
    topic: str | None,
    skill: str | None,
    history: list[HistoryMessage],
) -> list[ChatMessage]:
    """System prompt, then history, then the current message."""
    messages: list[ChatMessage] = [
        {"role": "system", "content": build_chat_system_prompt(topic, skill)}
    ]
    for msg in history:
        role = "user" if msg.sender == "user" else "assistant"
        messages.append({"role": role, "content": msg.text})
    messages.append({"role": "user", "content": user_message})
    return messages


class ChatService:
    """Forwards a conversation to the LLM and returns the coach's reply."""

    def __init__(self, model: ChatModel | None):
        self.model = model

    async def reply(
        self,
        user_message: str,
        topic: str | None = None,
        skill: str | None = None,
        history: list[HistoryMessage] | None = None,
    ) -> str:
        """Get the coach's reply.

        Raises:
            LLMNotConfiguredError: if no LLM is configured
            LLMError: if the completion call fails
        """
        if self.model is None:
            raise LLMNotConfiguredError("Missing OpenAI API key")

        messages = build_messages(user_message, topic, skill, history or [])
        reply = await self.model.complete(messages)
        return reply.strip()
