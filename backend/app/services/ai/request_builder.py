"""
Content Request Builder

Turns caller intent (prompt, optional image, JSON mode, model override)
into a provider-agnostic ContentRequest, then into the message/payload
shape each provider expects.

Vision responses are always free text (OCR, descriptions), so a request
that carries an image never asks for JSON mode - the builder downgrades
it here instead of trusting every call site to pass json_mode=False.
"""

from dataclasses import dataclass
from typing import Any

from app.core.config import Settings
from app.core.models import AIProvider, Modality


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class ImagePayload:
    """Base64-encoded image plus its MIME type. Treated as opaque bytes."""
    base64_data: str
    mime_type: str

    @property
    def data_uri(self) -> str:
        """data:<mime>;base64,<data> - byte-exact, no re-encoding."""
        return f"data:{self.mime_type};base64,{self.base64_data}"


@dataclass(frozen=True)
class ContentRequest:
    """One provider-agnostic generation request.

    Invariant: if ``image`` is set, ``json_mode`` is False.
    """
    prompt: str
    image: ImagePayload | None = None
    json_mode: bool = True
    model_override: str | None = None

    def __post_init__(self) -> None:
        if self.image is not None and self.json_mode:
            raise ValueError("JSON mode is not supported for image requests")

    @property
    def modality(self) -> Modality:
        return Modality.VISION if self.image is not None else Modality.TEXT

    @property
    def has_image(self) -> bool:
        return self.image is not None


# =============================================================================
# Request Assembly
# =============================================================================

def build_content_request(
    prompt: str,
    image_data: str | None = None,
    image_mime_type: str | None = None,
    json_mode: bool = True,
    model_override: str | None = None,
) -> ContentRequest:
    """Assemble a ContentRequest from caller intent.

    The request is multimodal only when both image_data and image_mime_type
    are non-empty; an empty base64 string counts as "no image".
    """
    image = None
    if image_data and image_mime_type:
        image = ImagePayload(base64_data=image_data, mime_type=image_mime_type)

    return ContentRequest(
        prompt=prompt,
        image=image,
        json_mode=json_mode and image is None,
        model_override=model_override or None,
    )


def build_chat_message(request: ContentRequest) -> dict[str, Any]:
    """Build the single user turn for an OpenAI-compatible chat completion."""
    if request.image is None:
        return {"role": "user", "content": request.prompt}

    return {
        "role": "user",
        "content": [
            {"type": "text", "text": request.prompt},
            {"type": "image_url", "image_url": {"url": request.image.data_uri}},
        ],
    }


def build_gemini_parts(request: ContentRequest) -> str | list[Any]:
    """Build Gemini's native input: the prompt, or [prompt, inline image]."""
    if request.image is None:
        return request.prompt

    return [
        request.prompt,
        {
            "inlineData": {
                "mimeType": request.image.mime_type,
                "data": request.image.base64_data,
            }
        },
    ]


def select_model(provider: AIProvider, request: ContentRequest, settings: Settings) -> str:
    """Pick the model name for a request.

    - Chat completion, text: caller override or the general-purpose default
    - Chat completion, image: always the vision model
    - Gemini: caller override or the one model that serves both modalities
    """
    if provider == AIProvider.CHAT_COMPLETION:
        if request.has_image:
            return settings.chat_completion_vision_model
        return request.model_override or settings.chat_completion_model

    return request.model_override or settings.gemini_model
