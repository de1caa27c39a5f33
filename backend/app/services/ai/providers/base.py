"""
Base Provider Implementation

Common functionality shared by both provider adapters.
"""

import json
from typing import Any

import httpx

from app.core.config import Settings
from app.services.ai.interface import AIProviderInterface


def extract_error_message(body: Any) -> str | None:
    """Pull a human-readable message out of a provider error body.

    Accepts the raw response text, the decoded ``{"error": {"message": ...}}``
    envelope, or the inner error object itself.
    """
    if isinstance(body, (str, bytes)):
        try:
            body = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None

    if not isinstance(body, dict):
        return None

    error = body.get("error", body)
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


class BaseProvider(AIProviderInterface):
    """Base class holding the per-call credential and HTTP client.

    The HTTP client is owned by the gateway call that created this provider;
    providers never open or close connections themselves.
    """

    def __init__(self, api_key: str, http_client: httpx.AsyncClient, settings: Settings):
        """Initialize provider for a single call.

        Args:
            api_key: Caller's API key (never logged)
            http_client: HTTP client scoped to the current gateway call
            settings: Model names, endpoints and generation defaults
        """
        self._api_key = api_key
        self._http_client = http_client
        self.settings = settings

    def __repr__(self) -> str:
        # Keep the key out of tracebacks and debug output
        return f"<{type(self).__name__} provider={self.provider_name!r}>"
