"""
Chat Completion Provider

Adapter for OpenAI-compatible chat completions endpoints (Groq by default).
Text requests default to JSON mode; image requests go to the vision model
and always come back as free text.
"""

from typing import Any

import structlog
from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from app.core.models import AIProvider
from app.services.ai.errors import GENERIC_FAILURE_MESSAGE, TransportError
from app.services.ai.interface import ProviderResponse
from app.services.ai.providers.base import BaseProvider, extract_error_message
from app.services.ai.request_builder import ContentRequest, build_chat_message, select_model

logger = structlog.get_logger()


class ChatCompletionProvider(BaseProvider):
    """OpenAI-compatible provider adapter.

    Default URL: https://api.groq.com/openai/v1
    """

    @property
    def provider_name(self) -> str:
        return AIProvider.CHAT_COMPLETION.value

    def model_for(self, request: ContentRequest) -> str:
        return select_model(AIProvider.CHAT_COMPLETION, request, self.settings)

    def _get_client(self) -> AsyncOpenAI:
        """Create an OpenAI client bound to this call's HTTP client."""
        return AsyncOpenAI(
            base_url=self.settings.chat_completion_api_url,
            api_key=self._api_key,
            http_client=self._http_client,
            timeout=self.settings.ai_request_timeout,
            max_retries=0,  # one attempt per call; retry UX belongs to the caller
        )

    def build_request_kwargs(self, request: ContentRequest) -> dict[str, Any]:
        """Build the chat.completions.create arguments for a request."""
        request_kwargs: dict[str, Any] = {
            "model": self.model_for(request),
            "messages": [build_chat_message(request)],
            "temperature": self.settings.ai_temperature,
        }
        if request.json_mode:
            request_kwargs["response_format"] = {"type": "json_object"}
        return request_kwargs

    async def send(self, request: ContentRequest) -> ProviderResponse:
        client = self._get_client()
        request_kwargs = self.build_request_kwargs(request)

        try:
            response = await client.chat.completions.create(**request_kwargs)
        except APIStatusError as e:
            label = self.settings.chat_completion_provider_label
            message = extract_error_message(e.body) or f"{label} API error ({e.status_code})"
            logger.warning(
                "chat_completion_api_error",
                status=e.status_code,
                model=request_kwargs["model"],
                error=message,
            )
            raise TransportError(message, cause=e, status_code=e.status_code) from e
        except APIConnectionError as e:
            logger.warning("chat_completion_connection_error", error=str(e))
            raise TransportError(str(e) or GENERIC_FAILURE_MESSAGE, cause=e) from e

        return ProviderResponse(kind="chat-completion", raw=response)

    def completion_text(self, response: ProviderResponse) -> str:
        """Return choices[0].message.content, or "" when the provider sent none."""
        choices = getattr(response.raw, "choices", None) or []
        if not choices:
            return ""
        message = getattr(choices[0], "message", None)
        return getattr(message, "content", None) or ""
