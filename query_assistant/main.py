# HTTP surface for the query assistant: POST /query answers a question from the
# endpoint catalog sent in the request body. Needs OPENAI_API_KEY in the env.
# Run from project root: uvicorn query_assistant.main:app --reload

import logging

from fastapi import FastAPI

from query_assistant.api.routes import router

logging.basicConfig(level=logging.INFO)


app = FastAPI(title="Query Assistant", description="Pick an endpoint with an LLM, call it, and phrase the JSON answer.")
app.include_router(router)
