"""
Unit tests for the endpoint client: URL assembly, request building, fetch.
"""

import asyncio
import json

import httpx
import pytest

from query_assistant.core.errors import UpstreamError
from query_assistant.schemas.endpoint import ChainDescriptor, EndpointDescriptor
from query_assistant.services.endpoint_client import (
    EndpointClient,
    build_request_kwargs,
    build_url,
    normalize_to_list,
)


class TestBuildUrl:
    """Tests for build_url()."""

    def test_no_query_returns_url_unchanged(self) -> None:
        assert build_url("https://api.example.com/orders") == "https://api.example.com/orders"
        assert build_url("https://api.example.com/orders", {}) == "https://api.example.com/orders"

    def test_appends_with_question_mark(self) -> None:
        url = build_url("https://api.example.com/orders", {"limit": 5, "status": "open now"})
        assert url == "https://api.example.com/orders?limit=5&status=open+now"

    def test_appends_with_ampersand_when_query_string_present(self) -> None:
        url = build_url("https://api.example.com/products?lang=en", {"q": "trail & road"})
        assert url == "https://api.example.com/products?lang=en&q=trail+%26+road"

    def test_list_values_repeat_the_key(self) -> None:
        assert build_url("https://x.test/a", {"id": [1, 2]}) == "https://x.test/a?id=1&id=2"


class TestBuildRequestKwargs:
    """Tests for build_request_kwargs()."""

    def test_get_never_sends_body(self) -> None:
        d = ChainDescriptor(url="https://x.test/a", body={"ignored": True})
        kwargs = build_request_kwargs(d)
        assert kwargs["method"] == "GET"
        assert "json" not in kwargs
        assert "content-type" not in kwargs["headers"]

    def test_post_with_body_is_json(self) -> None:
        d = ChainDescriptor(url="https://x.test/a", method="post", headers={"X-Key": "k"}, body={"id": 7})
        kwargs = build_request_kwargs(d)
        assert kwargs["method"] == "POST"
        assert kwargs["json"] == {"id": 7}
        assert kwargs["headers"] == {"X-Key": "k", "Content-Type": "application/json"}
        # descriptor headers are not mutated
        assert d.headers == {"X-Key": "k"}

    def test_post_without_body_sends_nothing(self) -> None:
        kwargs = build_request_kwargs(ChainDescriptor(url="https://x.test/a", method="POST"))
        assert "json" not in kwargs
        assert kwargs["headers"] == {}


class TestNormalizeToList:
    def test_list_passes_through(self) -> None:
        data = [{"a": 1}, {"a": 2}]
        assert normalize_to_list(data) is data

    def test_object_and_scalar_are_wrapped(self) -> None:
        assert normalize_to_list({"a": 1}) == [{"a": 1}]
        assert normalize_to_list(3) == [3]
        assert normalize_to_list(None) == [None]


class TestFetch:
    """Tests for EndpointClient.fetch() against httpx.MockTransport."""

    def test_object_body_is_wrapped(self, make_http) -> None:
        http = make_http(lambda r: httpx.Response(200, json={"id": 42}))
        d = EndpointDescriptor(name="P", url="https://x.test/p", query={"id": 42})
        assert asyncio.run(http.client.fetch(d)) == [{"id": 42}]
        assert http.requests[0].url.params["id"] == "42"

    def test_post_body_reaches_the_wire(self, make_http) -> None:
        http = make_http(lambda r: httpx.Response(200, json=[1, 2]))
        d = ChainDescriptor(url="https://x.test/search", method="POST", body={"term": "shoes"})
        assert asyncio.run(http.client.fetch(d)) == [1, 2]
        sent = http.requests[0]
        assert sent.method == "POST"
        assert sent.headers["content-type"] == "application/json"
        assert json.loads(sent.content) == {"term": "shoes"}

    def test_json_content_type_replaces_caller_spelling(self, make_http) -> None:
        http = make_http(lambda r: httpx.Response(200, json={"ok": True}))
        d = ChainDescriptor(url="https://x.test/notes", method="PUT", headers={"content-type": "text/plain"}, body={"a": 1})
        asyncio.run(http.client.fetch(d))
        sent = http.requests[0]
        assert sent.headers.get_list("content-type") == ["application/json"]
        assert json.loads(sent.content) == {"a": 1}

    def test_get_with_body_sends_nothing(self, make_http) -> None:
        http = make_http(lambda r: httpx.Response(200, json=[]))
        asyncio.run(http.client.fetch(ChainDescriptor(url="https://x.test/a", body={"ignored": True})))
        sent = http.requests[0]
        assert sent.content == b""
        assert "content-type" not in sent.headers

    def test_non_2xx_raises_upstream_error(self, make_http) -> None:
        http = make_http(lambda r: httpx.Response(404, json={"error": "nope"}))
        with pytest.raises(UpstreamError) as exc:
            asyncio.run(http.client.fetch(ChainDescriptor(url="https://x.test/missing")))
        assert exc.value.status_code == 404

    def test_invalid_json_raises_upstream_error(self, make_http) -> None:
        http = make_http(lambda r: httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(UpstreamError):
            asyncio.run(http.client.fetch(ChainDescriptor(url="https://x.test/html")))

    def test_transport_error_raises_upstream_error(self) -> None:
        def boom(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = EndpointClient(httpx.AsyncClient(transport=httpx.MockTransport(boom)))
        with pytest.raises(UpstreamError):
            asyncio.run(client.fetch(ChainDescriptor(url="https://x.test/down")))
