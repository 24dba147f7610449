"""
Assistant errors.

ConfigurationError and InvalidArgumentError reach the caller. Everything raised
while a query is being answered (EndpointNotFoundError, UpstreamError, ...) is
logged and replaced by ERROR_MESSAGE at the top of QueryAssistant.get_response.
"""

ERROR_MESSAGE = "An error occurred while processing your request. Please try again later."


class QueryAssistantError(Exception):
    """Base class for assistant errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(QueryAssistantError):
    """Raised when the assistant cannot be built (missing API key, bad model or token budget)."""


class InvalidArgumentError(QueryAssistantError, ValueError):
    """Raised for an empty query, an empty endpoint list, or an unusable endpoint catalog."""


class EndpointNotFoundError(QueryAssistantError):
    """Raised when the model's answer matches no endpoint name."""

    def __init__(self, selected_name: str) -> None:
        self.selected_name = selected_name
        super().__init__(f"No suitable endpoint found for the query (model answered {selected_name!r}).")


class UpstreamError(QueryAssistantError):
    """Raised when an endpoint or the language model fails or returns something unusable."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
