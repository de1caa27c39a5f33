"""
AI Provider Interface

Abstract base class defining the contract that both AI providers implement,
plus the tagged response type resolved at the transport boundary.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Literal

from app.services.ai.request_builder import ContentRequest


@dataclass(frozen=True)
class ProviderResponse:
    """Raw provider response, tagged by the shape it came in."""
    kind: Literal["chat-completion", "multimodal"]
    raw: Any


class AIProviderInterface(ABC):
    """Abstract interface for AI providers.

    A provider is built per gateway call with the caller's API key and
    must never cache anything across calls.
    """

    @abstractmethod
    async def send(self, request: ContentRequest) -> ProviderResponse:
        """Perform one network call for the request.

        Raises:
            TransportError: On any non-success status or provider-reported error
        """
        pass

    @abstractmethod
    def completion_text(self, response: ProviderResponse) -> str:
        """Resolve the provider's response shape to the completion string."""
        pass

    @abstractmethod
    def model_for(self, request: ContentRequest) -> str:
        """Get the model name a request will be sent to."""
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the provider name for logging."""
        pass

    async def generate(self, request: ContentRequest) -> str:
        """Send the request and return the completion text unmodified."""
        response = await self.send(request)
        return self.completion_text(response)
