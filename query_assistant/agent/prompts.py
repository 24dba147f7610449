"""
Prompts for the two model calls: endpoint selection and answer formatting.
"""

import json
from typing import Any

from query_assistant.schemas.endpoint import EndpointDescriptor

SELECTION_SYSTEM_PROMPT = (
    "You are an assistant that selects the best endpoint based on queries and response examples."
)

FORMATTING_SYSTEM_PROMPT = (
    "You are an assistant that formats responses into natural language in the requested language."
)

# Shown to the model so it answers in prose instead of echoing JSON back.
_FORMATTING_EXAMPLES = """
Example 1
Data: {"productData": [{"id": 42, "name": "Trail Runner", "price": 89.9, "stock": 3}]}
Language: en
Answer: The Trail Runner costs 89.90 and there are only 3 pairs left in stock.

Example 2
Data: {"productData": [{"order": "A-17", "status": "shipped"}], "chainData": [{"carrier": "DHL", "eta": "2024-05-02"}]}
Language: es
Answer: Tu pedido A-17 ya fue enviado con DHL y se espera que llegue el 2 de mayo de 2024.
"""


def _describe_endpoint(endpoint: EndpointDescriptor) -> str:
    return (
        f"- {endpoint.name}: {endpoint.description}\n"
        f"  Common questions: {', '.join(endpoint.examples)}\n"
        f"  Expected response example: {json.dumps(endpoint.response_example, ensure_ascii=False)}"
    )


def build_selection_prompt(query: str, endpoints: list[EndpointDescriptor]) -> str:
    """List every endpoint and ask for the name of the one that fits query."""
    catalog = "\n\n".join(_describe_endpoint(e) for e in endpoints)
    return (
        "I have the following available endpoints:\n"
        f"{catalog}\n\n"
        f'Based on the following user query, select the most relevant endpoint: "{query}".\n'
        "Return only the exact name of the endpoint, without explanation."
    )


def build_formatting_prompt(endpoint_name: str, payload: dict[str, Any], language: str) -> str:
    """Ask for a short factual paragraph in language describing payload."""
    return f"""Here is the data retrieved from the {endpoint_name} endpoint:
{json.dumps(payload, ensure_ascii=False)}

Write the answer for the user in this language: {language}.

Rules:
- Write one short, factual paragraph in plain sentences.
- Use only the data above; do not invent values.
- Do not return JSON, code blocks, or field names as they appear in the data.
- If the data is empty, say that no matching information was found.
{_FORMATTING_EXAMPLES}
Answer:"""
