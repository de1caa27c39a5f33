"""
Request/response models shared by the AI-backed routes.
"""

from pydantic import Field

from app.core.models import AIProvider, BaseSchema, OcrLanguage
from app.services.grammar import GrammarAction
from app.services.grammar.schemas import WordPos

# ~6 MB of base64; the web client downsizes photos to 1024px JPEG first
MAX_IMAGE_BASE64_CHARS = 8_000_000


class AIRequest(BaseSchema):
    """Credentials every AI-backed request carries."""
    api_key: str | None = Field(None, alias="apiKey", repr=False)
    provider: AIProvider | None = None


class SentenceRequest(AIRequest):
    sentence: str = Field(..., max_length=1000)


class TransformRequest(SentenceRequest):
    action: GrammarAction
    option: str | None = Field(
        None,
        max_length=40,
        description="Question type, modal verb or conditional type, depending on action",
    )


class HindiTenseRequest(AIRequest):
    hindi_sentence: str = Field(..., alias="hindiSentence", max_length=1000)


class SuggestionsRequest(AIRequest):
    tagged_sentence: list[WordPos] = Field(..., alias="taggedSentence", max_length=200)


class ImageRequest(AIRequest):
    image_base64: str = Field(..., alias="imageBase64", max_length=MAX_IMAGE_BASE64_CHARS)
    image_mime_type: str = Field(..., alias="imageMimeType", pattern=r"^image/[a-zA-Z0-9.+-]+$")


class OcrRequest(ImageRequest):
    language: OcrLanguage = OcrLanguage.ENGLISH


class OcrResponse(BaseSchema):
    text: str


class RawGenerateRequest(AIRequest):
    """Direct gateway access for prompts built on the client."""
    prompt: str = Field(..., min_length=1, max_length=20000)
    image_base64: str | None = Field(None, alias="imageBase64", max_length=MAX_IMAGE_BASE64_CHARS)
    image_mime_type: str | None = Field(None, alias="imageMimeType")
    json_mode: bool = Field(True, alias="jsonMode")


class RawGenerateResponse(BaseSchema):
    text: str
