"""
Gemini Provider

Uses the Generative Language API (generativelanguage.googleapis.com) with
the caller's API key. The same model handles text and vision requests:

- Text: asks for application/json output when JSON mode is on
- Vision: prompt + inline image, plain text back (OCR, descriptions)
"""

from typing import Any

import structlog

from app.core.models import AIProvider
from app.services.ai.errors import TransportError
from app.services.ai.interface import ProviderResponse
from app.services.ai.providers.base import BaseProvider, extract_error_message
from app.services.ai.request_builder import ContentRequest, build_gemini_parts, select_model

logger = structlog.get_logger()


class GeminiProvider(BaseProvider):
    """Gemini provider adapter (primary multimodal backend)."""

    @property
    def provider_name(self) -> str:
        return AIProvider.PRIMARY_MULTIMODAL.value

    def model_for(self, request: ContentRequest) -> str:
        return select_model(AIProvider.PRIMARY_MULTIMODAL, request, self.settings)

    @staticmethod
    def _to_rest_parts(parts: str | list[Any]) -> list[dict[str, Any]]:
        """Convert native input (prompt or [prompt, inline image]) to REST parts."""
        if isinstance(parts, str):
            parts = [parts]
        return [{"text": part} if isinstance(part, str) else part for part in parts]

    def build_payload(self, request: ContentRequest) -> dict[str, Any]:
        """Build the generateContent request body."""
        generation_config: dict[str, Any] = {
            "temperature": self.settings.ai_temperature,
        }
        if request.json_mode:
            generation_config["responseMimeType"] = "application/json"

        return {
            "contents": [
                {"role": "user", "parts": self._to_rest_parts(build_gemini_parts(request))}
            ],
            "generationConfig": generation_config,
        }

    async def send(self, request: ContentRequest) -> ProviderResponse:
        model = self.model_for(request)
        url = f"{self.settings.gemini_api_url}/models/{model}:generateContent"

        response = await self._http_client.post(
            url,
            json=self.build_payload(request),
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": self._api_key,
            },
            timeout=self.settings.ai_request_timeout,
        )

        if response.status_code != 200:
            message = extract_error_message(response.text) or (
                f"Gemini API error ({response.status_code})"
            )
            logger.warning(
                "gemini_api_error",
                status=response.status_code,
                model=model,
                error=message,
            )
            raise TransportError(message, status_code=response.status_code)

        return ProviderResponse(kind="multimodal", raw=response.json())

    def completion_text(self, response: ProviderResponse) -> str:
        """Join the text parts of the single candidate, skipping thoughts."""
        data = response.raw or {}
        candidates = data.get("candidates") or []

        if not candidates:
            block_reason = (data.get("promptFeedback") or {}).get("blockReason")
            if block_reason:
                raise TransportError(f"Response was blocked due to {block_reason}")
            return ""

        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(
            part.get("text", "") for part in parts if not part.get("thought")
        )
