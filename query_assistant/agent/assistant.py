"""
Query assistant: the public entry point.

QueryAssistant.get_response() picks an endpoint with the model, calls it (and its
chain, if any), and has the model phrase the result. Only construction and
argument errors are raised; any failure while answering is logged and returned
as ERROR_MESSAGE.
"""

import logging
from typing import Any

from pydantic import ValidationError

from query_assistant.agent.graph import AssistantPipeline
from query_assistant.agent.llm import LanguageModelClient, OpenAIChatClient
from query_assistant.core import config
from query_assistant.core.config import AssistantConfig
from query_assistant.core.errors import ERROR_MESSAGE, ConfigurationError, InvalidArgumentError
from query_assistant.schemas.endpoint import AssistantOptions, ConversationMessage, EndpointDescriptor
from query_assistant.services.endpoint_client import EndpointClient

logger = logging.getLogger(__name__)


def _parse_endpoints(endpoints: list) -> list[EndpointDescriptor]:
    """Validate the catalog and enforce case-insensitive unique names."""
    parsed = [e if isinstance(e, EndpointDescriptor) else EndpointDescriptor.model_validate(e) for e in endpoints]
    seen: set[str] = set()
    for e in parsed:
        key = e.name.lower()
        if key in seen:
            raise InvalidArgumentError(f"Duplicate endpoint name: {e.name!r}")
        seen.add(key)
    return parsed


def _parse_messages(messages: list | None) -> list[dict[str, str]]:
    """Caller history as OpenAI role/content dicts; userId is dropped."""
    out = []
    for m in messages or []:
        msg = m if isinstance(m, ConversationMessage) else ConversationMessage.model_validate(m)
        out.append(msg.to_openai())
    return out


class QueryAssistant:
    """
    Answers natural-language questions from a caller-supplied endpoint catalog.

    Example:
        assistant = QueryAssistant(openai_api_key="sk-...")
        answer = await assistant.get_response(
            "Where is my last order?",
            [{"name": "Orders", "url": "https://api.example.com/orders", ...}],
            language="es",
        )
    """

    def __init__(
        self,
        openai_api_key: str,
        model: str = config.DEFAULT_MODEL,
        max_tokens: int = config.DEFAULT_MAX_TOKENS,
        *,
        llm_client: LanguageModelClient | None = None,
        http_client: EndpointClient | None = None,
    ) -> None:
        if not openai_api_key:
            raise ConfigurationError("You must provide an OpenAI API Key.")
        try:
            self.config = AssistantConfig(openai_api_key=openai_api_key, model=model, max_tokens=max_tokens)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid assistant configuration: {e}") from e
        self.pipeline = AssistantPipeline(
            llm_client or OpenAIChatClient(self.config.openai_api_key),
            http_client or EndpointClient(),
        )
        logger.info("[assistant] initialized model=%s max_tokens=%d", self.config.model, self.config.max_tokens)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "QueryAssistant":
        """Build from OPENAI_API_KEY / OPENAI_LLM_MODEL / OPENAI_MAX_TOKENS."""
        try:
            max_tokens = int(config.OPENAI_MAX_TOKENS)
        except ValueError as e:
            raise ConfigurationError(f"OPENAI_MAX_TOKENS must be an integer, got {config.OPENAI_MAX_TOKENS!r}") from e
        return cls(config.OPENAI_API_KEY, model=config.OPENAI_LLM_MODEL, max_tokens=max_tokens, **kwargs)

    @property
    def model(self) -> str:
        return self.config.model

    @property
    def max_tokens(self) -> int:
        return self.config.max_tokens

    async def get_response(
        self,
        query: str,
        endpoints: list,
        messages: list | None = None,
        language: str = "en",
        options: AssistantOptions | dict | None = None,
    ) -> str:
        """
        Answer query using one endpoint from endpoints.

        endpoints / messages may be schema objects or plain dicts using either
        snake_case or the camelCase keys (responseExample, userId, maxTokens).
        Returns the model's answer, or ERROR_MESSAGE if anything fails on the way.
        Raises InvalidArgumentError for an empty query or an empty endpoint list.
        """
        if not isinstance(query, str) or not query.strip() or not isinstance(endpoints, list) or not endpoints:
            raise InvalidArgumentError("You must provide a query and a valid list of endpoints.")

        logger.info("[assistant:get_response] START query=%r endpoints=%d language=%s", query, len(endpoints), language)
        try:
            catalog = _parse_endpoints(endpoints)
            history = _parse_messages(messages)
            opts = options if isinstance(options, AssistantOptions) else AssistantOptions.model_validate(options or {})
            answer = await self.pipeline.run(
                query=query,
                endpoints=catalog,
                messages=history,
                language=language or "en",
                model=opts.model or self.config.model,
                max_tokens=opts.max_tokens or self.config.max_tokens,
            )
        except Exception:
            logger.exception("[assistant:get_response] failed")
            return ERROR_MESSAGE
        logger.info("[assistant:get_response] END answer_len=%d", len(answer))
        return answer
