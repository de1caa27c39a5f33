"""
AI Gateway

Main entry point for AI generation:
- Validates the caller's API key before any network activity
- Decides modality (text vs. text + image)
- Dispatches to the Gemini or chat-completion provider
- Normalizes every failure into a single TransportError

The gateway is stateless: each call builds its own HTTP client and provider,
makes exactly one attempt and returns the completion text unmodified.
"""

import httpx
import structlog

from app.core.config import Settings, get_settings
from app.core.models import AIProvider
from app.services.ai.errors import (
    GENERIC_FAILURE_MESSAGE,
    GatewayError,
    MissingCredentialError,
    TransportError,
)
from app.services.ai.providers import PROVIDER_REGISTRY, BaseProvider
from app.services.ai.request_builder import build_content_request

logger = structlog.get_logger()


def resolve_provider(provider: AIProvider | str | None) -> AIProvider:
    """Map a provider selector to AIProvider.

    Gemini is the default: a missing or unrecognised selector falls back to it.
    """
    if isinstance(provider, AIProvider):
        return provider
    if not provider:
        return AIProvider.PRIMARY_MULTIMODAL
    try:
        return AIProvider(provider)
    except ValueError:
        logger.warning("ai_unknown_provider", provider=provider, fallback=AIProvider.PRIMARY_MULTIMODAL.value)
        return AIProvider.PRIMARY_MULTIMODAL


class AIGateway:
    """Single facade over both AI providers."""

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize gateway.

        Args:
            settings: Model names and endpoints (defaults to global settings)
            transport: Optional httpx transport for every outbound call
                (tests pass an httpx.MockTransport here)
        """
        self.settings = settings or get_settings()
        self._transport = transport

    def _create_provider(
        self,
        provider: AIProvider,
        api_key: str,
        http_client: httpx.AsyncClient,
    ) -> BaseProvider:
        provider_class = PROVIDER_REGISTRY[provider]
        return provider_class(api_key=api_key, http_client=http_client, settings=self.settings)

    async def generate(
        self,
        api_key: str | None,
        provider: AIProvider | str | None,
        prompt: str,
        image_data: str | None = None,
        image_mime_type: str | None = None,
        *,
        json_mode: bool = True,
        model_override: str | None = None,
    ) -> str:
        """Generate a completion.

        Args:
            api_key: Caller's API key for the selected provider
            provider: Provider selector ("primary-multimodal", "chat-completion-compatible",
                or the short names "gemini" / "groq")
            prompt: Fully formed prompt
            image_data: Optional base64 image (needs image_mime_type as well)
            image_mime_type: MIME type of image_data
            json_mode: Ask for a JSON object response (ignored for image requests)
            model_override: Use this model instead of the default for text requests

        Returns:
            The provider's completion text, unmodified

        Raises:
            MissingCredentialError: If api_key is empty (raised before any I/O)
            TransportError: On any provider or network failure
        """
        if not api_key or not api_key.strip():
            raise MissingCredentialError()

        selected = resolve_provider(provider)
        request = build_content_request(
            prompt,
            image_data=image_data,
            image_mime_type=image_mime_type,
            json_mode=json_mode,
            model_override=model_override,
        )

        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=self.settings.ai_request_timeout,
        ) as http_client:
            adapter = self._create_provider(selected, api_key, http_client)
            model = adapter.model_for(request)

            logger.info(
                "ai_generate_start",
                provider=adapter.provider_name,
                model=model,
                modality=request.modality.value,
                json_mode=request.json_mode,
                prompt_len=len(prompt),
            )

            try:
                text = await adapter.generate(request)
            except GatewayError as e:
                logger.error(
                    "ai_generate_failed",
                    provider=adapter.provider_name,
                    model=model,
                    error=e.message,
                    cause=repr(e.cause) if e.cause else None,
                )
                raise
            except httpx.HTTPError as e:
                logger.error(
                    "ai_generate_failed",
                    provider=adapter.provider_name,
                    model=model,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise TransportError(str(e) or GENERIC_FAILURE_MESSAGE, cause=e) from e
            except Exception as e:
                logger.exception(
                    "ai_generate_failed",
                    provider=adapter.provider_name,
                    model=model,
                    error_type=type(e).__name__,
                )
                raise TransportError(GENERIC_FAILURE_MESSAGE, cause=e) from e

        if not text:
            # Not an error here; the caller's JSON decoding reports it
            logger.warning("ai_empty_completion", provider=adapter.provider_name, model=model)
        else:
            logger.info(
                "ai_generate_success",
                provider=adapter.provider_name,
                model=model,
                response_len=len(text),
            )

        return text


def get_ai_gateway() -> AIGateway:
    """FastAPI dependency: AI gateway bound to the global settings."""
    return AIGateway()
