"""
Endpoint calls: URL assembly, request building, JSON fetch and list normalization.

Responsibility: Turn an endpoint descriptor into one HTTP request and return its
JSON body as a list. No model calls here.
"""

import logging
from typing import Any
from urllib.parse import urlencode

import httpx

from query_assistant.core.config import ENDPOINT_HTTP_TIMEOUT
from query_assistant.core.errors import UpstreamError
from query_assistant.schemas.endpoint import ChainDescriptor

logger = logging.getLogger(__name__)


def build_url(url: str, query: dict[str, Any] | None = None) -> str:
    """Append URL-encoded query parameters, keeping any query string already on url."""
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urlencode(query, doseq=True)}"


def build_request_kwargs(descriptor: ChainDescriptor) -> dict[str, Any]:
    """Arguments for httpx's request(): method, url, headers and, for non-GET calls, a JSON body."""
    method = descriptor.method or "GET"
    headers = httpx.Headers(descriptor.headers or {})
    kwargs: dict[str, Any] = {
        "method": method,
        "url": build_url(descriptor.url, descriptor.query),
        "headers": headers,
    }
    if descriptor.body is not None and method != "GET":
        # replaces any caller spelling of the header
        headers["Content-Type"] = "application/json"
        kwargs["json"] = descriptor.body
    return kwargs


def normalize_to_list(data: Any) -> list:
    """List bodies pass through; anything else becomes a one-element list."""
    return data if isinstance(data, list) else [data]


class EndpointClient:
    """Fetches endpoint descriptors over HTTP. Pass an httpx.AsyncClient to reuse a connection pool."""

    def __init__(self, client: httpx.AsyncClient | None = None, timeout: float = ENDPOINT_HTTP_TIMEOUT) -> None:
        self._client = client
        self._timeout = timeout

    async def fetch(self, descriptor: ChainDescriptor) -> list:
        """Issue the request described by descriptor and return its JSON body as a list."""
        kwargs = build_request_kwargs(descriptor)
        logger.info("[endpoint_client:fetch] IN  method=%s url=%s has_body=%s", kwargs["method"], kwargs["url"], "json" in kwargs)
        try:
            if self._client is not None:
                response = await self._client.request(**kwargs)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.request(**kwargs)
        except httpx.TimeoutException as e:
            raise UpstreamError(f"Request to {kwargs['url']} timed out") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Request to {kwargs['url']} failed: {e}") from e
        if not response.is_success:
            raise UpstreamError(
                f"{kwargs['method']} {kwargs['url']} returned {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )
        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(f"{kwargs['url']} did not return valid JSON") from e
        items = normalize_to_list(data)
        logger.info("[endpoint_client:fetch] OUT status=%d items=%d", response.status_code, len(items))
        return items
