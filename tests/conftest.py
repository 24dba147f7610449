"""
Shared fakes: a scripted language model and an httpx MockTransport recorder.

No test talks to OpenAI or the network.
"""

from typing import Any, Callable

import httpx
import pytest

from query_assistant.services.endpoint_client import EndpointClient


class FakeLLM:
    """Returns scripted replies in order and records every call."""

    def __init__(self, *replies: str) -> None:
        self.replies = list(replies)
        self.calls: list[dict[str, Any]] = []

    async def complete(self, model: str, messages: list[dict[str, str]], max_tokens: int) -> str:
        self.calls.append({"model": model, "messages": messages, "max_tokens": max_tokens})
        return self.replies.pop(0)


class RecordingHTTP:
    """EndpointClient backed by httpx.MockTransport; keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _handle(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        self.client = EndpointClient(httpx.AsyncClient(transport=httpx.MockTransport(_handle)))


@pytest.fixture
def catalog() -> list[dict[str, Any]]:
    return [
        {
            "name": "Orders",
            "url": "https://api.example.com/orders",
            "description": "Recent orders of the customer.",
            "examples": ["Where is my order?", "What did I buy?"],
            "responseExample": [{"id": 1, "status": "shipped"}],
            "query": {"limit": 5},
        },
        {
            "name": "Products",
            "url": "https://api.example.com/products?lang=en",
            "description": "Product catalog.",
            "examples": ["How much is the Trail Runner?"],
            "responseExample": {"id": 42, "price": 89.9},
        },
    ]


@pytest.fixture
def make_llm() -> type[FakeLLM]:
    return FakeLLM


@pytest.fixture
def make_http() -> type[RecordingHTTP]:
    return RecordingHTTP
