"""
Sentence generation route.

POST /api/v1/generate builds a sentence from the words chosen in the
sentence builder and returns it tagged word by word.
"""

from fastapi import APIRouter

from app.api.dependencies import GrammarServiceDep
from app.api.middleware import add_ai_call_to_wide_event
from app.services.ai.errors import MissingCredentialError
from app.services.ai.gateway import resolve_provider
from app.services.grammar.schemas import SentenceInput, SentenceOutput

router = APIRouter()


@router.post("", response_model=SentenceOutput)
async def generate_sentence(body: SentenceInput, service: GrammarServiceDep) -> SentenceOutput:
    """Generate a sentence from subject, verb, object and tense."""
    if not body.api_key or not body.api_key.strip():
        raise MissingCredentialError("API Key is required")

    add_ai_call_to_wide_event(
        provider=resolve_provider(body.provider).value,
        action="generate",
    )
    return await service.generate_sentence(body)
