# services/relay/completion_client.py
"""
Completion Client - sends the full conversation to OpenAI Chat Completions.

The service keeps no session state, so every call carries the directive,
the whole history and the new user turn. Calls are never retried.
"""

from typing import Protocol

from loguru import logger
from openai import AsyncOpenAI, OpenAIError

from .errors import CompletionResult, CompletionServiceError
from .models import Message


DEFAULT_MODEL = "gpt-4o-mini"


class CompletionClient(Protocol):
    async def complete(self, messages: list[Message]) -> CompletionResult: ...


class OpenAICompletionClient:
    """CompletionClient using the OpenAI async SDK."""

    def __init__(
        self,
        openai_api_key: str = None,
        model: str = DEFAULT_MODEL,
        timeout: float = 60.0,
        client: AsyncOpenAI = None,
    ):
        self.client = client or AsyncOpenAI(
            api_key=openai_api_key,
            timeout=timeout,
            max_retries=0,
        )
        self.model = model

    async def complete(self, messages: list[Message]) -> CompletionResult:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[m.to_dict() for m in messages],
            )
        except OpenAIError as e:
            logger.error(f"❌ OpenAI request failed ({self.model}): {e}")
            return CompletionResult(error=CompletionServiceError(str(e)))

        if not response.choices or not response.choices[0].message.content:
            logger.error(f"❌ OpenAI returned no reply text ({self.model})")
            return CompletionResult(error=CompletionServiceError("empty completion"))

        tokens = response.usage.total_tokens if response.usage else 0
        logger.debug(f"🤖 Completion received | model={self.model} tokens={tokens}")
        return CompletionResult(text=response.choices[0].message.content)


def create_completion_client(
    openai_api_key: str,
    model: str = DEFAULT_MODEL,
    timeout: float = 60.0,
) -> OpenAICompletionClient:
    """Factory function to create an OpenAICompletionClient."""
    return OpenAICompletionClient(openai_api_key=openai_api_key, model=model, timeout=timeout)
