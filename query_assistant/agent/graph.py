"""
LangGraph pipeline: select endpoint → fetch primary → (fetch chain) → format response.

Orchestration only; the model picks the endpoint and phrases the answer, the
endpoint client does the HTTP. Steps run strictly in order.
"""

import logging
from typing import Any, Literal, TypedDict

from langgraph.graph import END, StateGraph

from query_assistant.agent.llm import LanguageModelClient
from query_assistant.agent.prompts import (
    FORMATTING_SYSTEM_PROMPT,
    SELECTION_SYSTEM_PROMPT,
    build_formatting_prompt,
    build_selection_prompt,
)
from query_assistant.core.config import SELECTION_MAX_TOKENS
from query_assistant.core.errors import EndpointNotFoundError
from query_assistant.schemas.endpoint import EndpointDescriptor
from query_assistant.services.endpoint_client import EndpointClient

logger = logging.getLogger(__name__)

PRIMARY_KEY = "productData"
CHAIN_KEY = "chainData"


class PipelineState(TypedDict, total=False):
    query: str
    endpoints: list[EndpointDescriptor]
    messages: list[dict[str, str]]  # caller history, already in {"role", "content"} form
    language: str
    model: str
    max_tokens: int
    selected: EndpointDescriptor
    payload: dict[str, Any]
    answer: str


def find_endpoint(name: str, endpoints: list[EndpointDescriptor]) -> EndpointDescriptor:
    """Case-insensitive exact match of the model's answer against endpoint names."""
    wanted = (name or "").strip().lower()
    for endpoint in endpoints:
        if endpoint.name.lower() == wanted:
            return endpoint
    raise EndpointNotFoundError(name)


class AssistantPipeline:
    """
    Compiled graph plus the two clients it needs. Built once per assistant and
    shared by every call; nodes only read self and return state updates.
    """

    def __init__(self, llm_client: LanguageModelClient, endpoint_client: EndpointClient) -> None:
        self.llm = llm_client
        self.endpoint_client = endpoint_client
        self.graph = self._build_graph()

    async def select_endpoint(self, state: PipelineState) -> dict:
        """Node 1: ask the model for an endpoint name and match it against the catalog."""
        query = state["query"]
        endpoints = state["endpoints"]
        logger.info("[graph:select_endpoint] IN  query=%r endpoints=%d", query, len(endpoints))
        messages = [
            {"role": "system", "content": SELECTION_SYSTEM_PROMPT},
            *state.get("messages", []),
            {"role": "user", "content": build_selection_prompt(query, endpoints)},
        ]
        reply = await self.llm.complete(state["model"], messages, SELECTION_MAX_TOKENS)
        logger.info("[graph:select_endpoint] llm_raw=%r", reply)
        selected = find_endpoint(reply, endpoints)
        logger.info("[graph:select_endpoint] OUT selected=%s", selected.name)
        return {"selected": selected}

    async def fetch_primary(self, state: PipelineState) -> dict:
        """Node 2: call the selected endpoint."""
        selected = state["selected"]
        logger.info("[graph:fetch_primary] IN  endpoint=%s", selected.name)
        data = await self.endpoint_client.fetch(selected)
        logger.info("[graph:fetch_primary] OUT items=%d", len(data))
        return {"payload": {PRIMARY_KEY: data}}

    async def fetch_chain(self, state: PipelineState) -> dict:
        """Node 3: call the chained endpoint and add its result next to the primary one."""
        selected = state["selected"]
        logger.info("[graph:fetch_chain] IN  endpoint=%s chain_url=%s", selected.name, selected.chain.url)
        data = await self.endpoint_client.fetch(selected.chain)
        logger.info("[graph:fetch_chain] OUT items=%d", len(data))
        return {"payload": {**state["payload"], CHAIN_KEY: data}}

    async def format_response(self, state: PipelineState) -> dict:
        """Node 4: have the model turn the payload into a sentence in the requested language."""
        selected = state["selected"]
        payload = state["payload"]
        language = state["language"]
        logger.info("[graph:format_response] IN  endpoint=%s keys=%s language=%s", selected.name, sorted(payload), language)
        messages = [
            {"role": "system", "content": FORMATTING_SYSTEM_PROMPT},
            *state.get("messages", []),
            {"role": "user", "content": build_formatting_prompt(selected.name, payload, language)},
        ]
        answer = await self.llm.complete(state["model"], messages, state["max_tokens"])
        logger.info("[graph:format_response] OUT answer_len=%d", len(answer))
        return {"answer": answer}

    @staticmethod
    def _route_after_primary(state: PipelineState) -> Literal["fetch_chain", "format_response"]:
        """Chain only when the selected endpoint declares one."""
        next_node = "fetch_chain" if state["selected"].chain is not None else "format_response"
        logger.info("[graph:route_after_primary] -> %s", next_node)
        return next_node

    def _build_graph(self):
        graph = StateGraph(PipelineState)

        graph.add_node("select_endpoint", self.select_endpoint)
        graph.add_node("fetch_primary", self.fetch_primary)
        graph.add_node("fetch_chain", self.fetch_chain)
        graph.add_node("format_response", self.format_response)

        graph.set_entry_point("select_endpoint")
        graph.add_edge("select_endpoint", "fetch_primary")
        graph.add_conditional_edges("fetch_primary", self._route_after_primary)
        graph.add_edge("fetch_chain", "format_response")
        graph.add_edge("format_response", END)

        return graph.compile()

    async def run(
        self,
        query: str,
        endpoints: list[EndpointDescriptor],
        messages: list[dict[str, str]],
        language: str,
        model: str,
        max_tokens: int,
    ) -> str:
        """Run all stages and return the model's formatted answer."""
        initial: PipelineState = {
            "query": query,
            "endpoints": endpoints,
            "messages": messages,
            "language": language,
            "model": model,
            "max_tokens": max_tokens,
        }
        final = await self.graph.ainvoke(initial)
        return final["answer"]
