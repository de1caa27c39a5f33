"""
FastAPI dependencies shared by the route modules.
"""

from typing import Annotated

from fastapi import Depends

from app.services.ai.gateway import AIGateway, get_ai_gateway
from app.services.grammar import GrammarService
from app.services.transliteration import TransliterationClient


def get_grammar_service(
    gateway: Annotated[AIGateway, Depends(get_ai_gateway)],
) -> GrammarService:
    """Grammar service on top of the request's gateway."""
    return GrammarService(gateway)


def get_transliteration_client() -> TransliterationClient:
    return TransliterationClient()


GatewayDep = Annotated[AIGateway, Depends(get_ai_gateway)]
GrammarServiceDep = Annotated[GrammarService, Depends(get_grammar_service)]
TransliterationDep = Annotated[TransliterationClient, Depends(get_transliteration_client)]
