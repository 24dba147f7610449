"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and defaults
for the assistant. The library takes its settings programmatically; these values
are only read by QueryAssistant.from_env() and the HTTP service.
"""

import os
from typing import Annotated

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, StringConstraints

load_dotenv()

# Defaults for a new assistant
DEFAULT_MODEL: str = "gpt-4"
DEFAULT_MAX_TOKENS: int = 200

# Endpoint selection only needs a name back
SELECTION_MAX_TOKENS: int = 50

# Endpoint HTTP calls (seconds)
ENDPOINT_HTTP_TIMEOUT: float = float(os.getenv("ENDPOINT_HTTP_TIMEOUT", "").strip() or 15.0)

# OpenAI
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "").strip()
OPENAI_LLM_MODEL: str = (
    os.getenv("OPENAI_LLM_MODEL", DEFAULT_MODEL).strip() or DEFAULT_MODEL
)
OPENAI_MAX_TOKENS: str = os.getenv("OPENAI_MAX_TOKENS", str(DEFAULT_MAX_TOKENS)).strip()


class AssistantConfig(BaseModel):
    """Immutable per-instance settings, created once when the assistant is built."""

    model_config = ConfigDict(frozen=True)

    openai_api_key: StrictStr = Field(..., min_length=1, description="OpenAI API key.")
    model: Annotated[StrictStr, StringConstraints(strip_whitespace=True, min_length=1)] = Field(
        DEFAULT_MODEL, description="Default chat model."
    )
    max_tokens: StrictInt = Field(DEFAULT_MAX_TOKENS, gt=0, description="Default token budget for the formatted answer.")
