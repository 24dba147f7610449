"""
API routes: register endpoints; no logic, only delegate to the assistant.
"""

import logging
from functools import lru_cache

from fastapi import APIRouter, HTTPException

from query_assistant.agent.assistant import QueryAssistant
from query_assistant.core.errors import ConfigurationError, InvalidArgumentError
from query_assistant.schemas.query import QueryRequest, QueryResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@lru_cache(maxsize=1)
def get_assistant() -> QueryAssistant:
    """One assistant per process, configured from the environment."""
    return QueryAssistant.from_env()


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "Query assistant running"}


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Query ---

@router.post(
    "/query",
    response_model=QueryResponse,
    tags=["query"],
    summary="Answer a question from an endpoint catalog",
    description="The model picks one of the given endpoints, the endpoint (and its chain) is called, and the model phrases the result in the requested language. Failures while answering come back as a generic error answer; 400 on invalid input, 503 when the assistant is not configured.",
)
async def post_query(body: QueryRequest) -> QueryResponse:
    logger.info("[api:post_query] IN  query=%r endpoints=%d language=%s", body.query, len(body.endpoints), body.language)
    try:
        assistant = get_assistant()
    except ConfigurationError as e:
        logger.warning("[api:post_query] assistant not configured: %s", e.message)
        raise HTTPException(status_code=503, detail="Query assistant is not configured (set OPENAI_API_KEY).") from e
    try:
        answer = await assistant.get_response(
            body.query,
            body.endpoints,
            messages=body.messages,
            language=body.language,
            options=body.options,
        )
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=e.message) from e
    logger.info("[api:post_query] OUT answer_len=%d", len(answer))
    return QueryResponse(answer=answer)
