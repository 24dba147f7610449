"""Schemas for the endpoint catalog, conversation messages and per-call options."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator


class ChainDescriptor(BaseModel):
    """Second HTTP call issued after the selected endpoint; its result lands under chainData."""

    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(..., min_length=1, description="Base URL of the chained call.")
    response_example: Any = Field(None, alias="responseExample", description="Sample JSON shape returned by the call.")
    method: str = Field("GET", description="HTTP method.")
    headers: dict[str, str] = Field(default_factory=dict, description="Request headers.")
    query: dict[str, Any] = Field(default_factory=dict, description="Query-string parameters, URL-encoded onto url.")
    body: Any = Field(None, description="JSON body; only sent when method is not GET.")

    @field_validator("method")
    @classmethod
    def _upper_method(cls, v: str) -> str:
        v = (v or "").strip().upper()
        return v or "GET"


class EndpointDescriptor(ChainDescriptor):
    """One HTTP resource the model can pick for a query."""

    name: str = Field(..., min_length=1, description="Unique endpoint name; the model answers with it.")
    description: str = Field("", description="What the endpoint returns.")
    examples: list[str] = Field(default_factory=list, description="Sample user queries this endpoint answers.")
    chain: ChainDescriptor | None = Field(None, description="Optional follow-up call.")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "name": "Orders",
                    "url": "https://api.example.com/orders",
                    "description": "Lists the customer's recent orders.",
                    "examples": ["Where is my order?", "What did I buy last week?"],
                    "responseExample": [{"id": 1, "status": "shipped"}],
                    "query": {"limit": 5},
                }
            ]
        },
    )


class ConversationMessage(BaseModel):
    """Prior conversation turn supplied by the caller. Not stored by the assistant."""

    model_config = ConfigDict(populate_by_name=True)

    role: Literal["system", "user", "assistant"]
    content: str
    user_id: str | None = Field(None, alias="userId")

    def to_openai(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


class AssistantOptions(BaseModel):
    """Per-call overrides of the instance defaults."""

    model_config = ConfigDict(populate_by_name=True)

    model: str | None = Field(None, description="Chat model for this call only; blank means the instance default.")
    max_tokens: PositiveInt | None = Field(None, alias="maxTokens", description="Token budget for the formatted answer.")

    @field_validator("model")
    @classmethod
    def _blank_model_is_default(cls, v: str | None) -> str | None:
        return (v or "").strip() or None
