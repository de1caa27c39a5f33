"""
AI Service Package

Provides a two-provider AI generation gateway with:
- Provider abstraction layer (Gemini, OpenAI-compatible chat completions)
- Text and text + image requests
- JSON mode for structured grammar output
- Normalized, user-presentable errors
"""

from app.services.ai.errors import (
    GENERIC_FAILURE_MESSAGE,
    GatewayError,
    MissingCredentialError,
    TransportError,
)
from app.services.ai.gateway import AIGateway, get_ai_gateway, resolve_provider
from app.services.ai.interface import AIProviderInterface, ProviderResponse
from app.services.ai.request_builder import ContentRequest, ImagePayload, build_content_request

__all__ = [
    "GENERIC_FAILURE_MESSAGE",
    "AIGateway",
    "AIProviderInterface",
    "ContentRequest",
    "GatewayError",
    "ImagePayload",
    "MissingCredentialError",
    "ProviderResponse",
    "TransportError",
    "build_content_request",
    "get_ai_gateway",
    "resolve_provider",
]
