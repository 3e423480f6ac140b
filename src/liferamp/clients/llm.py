"""Chat completion client for the coaching LLM."""

import logging
from typing import Protocol, runtime_checkable

from openai import AsyncOpenAI, OpenAIError

from ..errors import LLMError

logger = logging.getLogger(__name__)

ChatMessage = dict[str, str]  # {"role": "system" | "user" | "assistant", "content": ...}


@runtime_checkable
class ChatModel(Protocol):
    """Anything that can answer a list of chat messages."""

    async def complete(self, messages: list[ChatMessage], temperature: float | None = None) -> str:
        """Return the assistant's reply text."""
        ...


class OpenAIChatModel:
    """OpenAI chat completions behind the ChatModel protocol."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        client: AsyncOpenAI | None = None,
    ):
        self.model = model
        self.temperature = temperature
        self.client = client or AsyncOpenAI(api_key=api_key)

    async def complete(self, messages: list[ChatMessage], temperature: float | None = None) -> str:
        """Send messages and return the first choice's content ("" if empty).

        Raises:
            LLMError: if the API call fails
        """
        logger.debug("Chat completion: model=%s messages=%d", self.model, len(messages))
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature if temperature is None else temperature,
            )
        except OpenAIError as e:
            logger.error("OpenAI chat completion failed: %s", e)
            raise LLMError(str(e)) from e

        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""
