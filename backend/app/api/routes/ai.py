"""
AI Gateway API Routes

Direct access to the two-provider gateway for prompts the client builds
itself. The completion text is returned exactly as the provider sent it.

Routes:
- POST /generate    - One completion from the selected provider
"""

from fastapi import APIRouter

from app.api.dependencies import GatewayDep
from app.api.middleware import add_ai_call_to_wide_event
from app.api.routes.schemas import RawGenerateRequest, RawGenerateResponse
from app.services.ai.gateway import resolve_provider

router = APIRouter()


@router.post("/generate", response_model=RawGenerateResponse)
async def generate(body: RawGenerateRequest, gateway: GatewayDep) -> RawGenerateResponse:
    """Forward a prompt (and optional image) to the selected provider."""
    add_ai_call_to_wide_event(
        provider=resolve_provider(body.provider).value,
        action="raw",
        has_image=bool(body.image_base64 and body.image_mime_type),
        prompt_chars=len(body.prompt),
    )
    text = await gateway.generate(
        body.api_key,
        body.provider,
        body.prompt,
        image_data=body.image_base64,
        image_mime_type=body.image_mime_type,
        json_mode=body.json_mode,
    )
    return RawGenerateResponse(text=text)
