"""
Language-model client: OpenAI chat completions.

The assistant only needs (model, messages, max_tokens) -> text. Anything with a
matching async complete() can stand in for OpenAIChatClient.
"""

import logging
from typing import Any, Protocol

from openai import AsyncOpenAI, OpenAIError

from query_assistant.core.errors import UpstreamError

logger = logging.getLogger(__name__)


class LanguageModelClient(Protocol):
    async def complete(self, model: str, messages: list[dict[str, str]], max_tokens: int) -> str:
        ...


class OpenAIChatClient:
    """Calls OpenAI chat completions and returns the first choice's text."""

    def __init__(self, api_key: str, client: Any = None) -> None:
        self._client = client or AsyncOpenAI(api_key=api_key)

    async def complete(self, model: str, messages: list[dict[str, str]], max_tokens: int) -> str:
        prompt_len = sum(len(m.get("content") or "") for m in messages)
        logger.info("[llm:openai] IN  model=%s messages=%d prompt_len=%d max_tokens=%d", model, len(messages), prompt_len, max_tokens)
        try:
            response = await self._client.chat.completions.create(
                model=model,
                messages=messages,
                max_tokens=max_tokens,
            )
        except OpenAIError as e:
            raise UpstreamError(f"OpenAI request failed: {e}") from e
        msg = response.choices[0].message if response.choices else None
        if not msg or not getattr(msg, "content", None):
            raise UpstreamError("OpenAI returned an empty completion")
        out = (msg.content or "").strip()
        logger.info("[llm:openai] OUT response_len=%d", len(out))
        logger.debug("[llm:openai] OUT response_full=%r", out)
        return out
