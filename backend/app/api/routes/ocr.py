"""
OCR route.

POST /api/v1/ocr reads the text in a photographed page so it can be
dropped into the analyzer.
"""

from fastapi import APIRouter

from app.api.dependencies import GrammarServiceDep
from app.api.middleware import add_ai_call_to_wide_event
from app.api.routes.schemas import OcrRequest, OcrResponse
from app.services.ai.gateway import resolve_provider

router = APIRouter()


@router.post("", response_model=OcrResponse)
async def extract_text(body: OcrRequest, service: GrammarServiceDep) -> OcrResponse:
    """Extract English or Hindi text from a base64 image."""
    add_ai_call_to_wide_event(
        provider=resolve_provider(body.provider).value,
        action=f"ocr.{body.language.value}",
        has_image=bool(body.image_base64),
    )
    text = await service.extract_text_from_image(
        body.api_key,
        body.provider,
        body.image_base64,
        body.image_mime_type,
        body.language,
    )
    return OcrResponse(text=text)
