"""
Provider Adapters Package

Exactly two providers are supported. The registry maps each AIProvider
value to the class the gateway instantiates per call.
"""

from app.core.models import AIProvider
from app.services.ai.providers.base import BaseProvider
from app.services.ai.providers.chat_completion import ChatCompletionProvider
from app.services.ai.providers.gemini import GeminiProvider

PROVIDER_REGISTRY: dict[AIProvider, type[BaseProvider]] = {
    AIProvider.PRIMARY_MULTIMODAL: GeminiProvider,
    AIProvider.CHAT_COMPLETION: ChatCompletionProvider,
}

__all__ = [
    "PROVIDER_REGISTRY",
    "BaseProvider",
    "ChatCompletionProvider",
    "GeminiProvider",
]
