"""Schemas for the query endpoint."""

from pydantic import BaseModel, Field

from query_assistant.schemas.endpoint import AssistantOptions, ConversationMessage, EndpointDescriptor


class QueryRequest(BaseModel):
    """Request body for POST /query. Conversation history is sent by the caller on every request."""

    query: str = Field(..., min_length=1, description="User question for the assistant.")
    endpoints: list[EndpointDescriptor] = Field(..., min_length=1, description="Endpoint catalog the model picks from.")
    messages: list[ConversationMessage] = Field(default_factory=list, description="Prior conversation turns.")
    language: str = Field("en", min_length=1, description="Language of the answer, e.g. en, es, fr.")
    options: AssistantOptions = Field(default_factory=AssistantOptions, description="Per-call model/token overrides.")


class QueryResponse(BaseModel):
    """Response for POST /query."""

    answer: str = Field(..., description="Formatted answer, or the generic error message if the query failed.")
