"""
Grammar Lab API Routes

Routes:
- POST /analyze      - Tag a sentence word by word and translate it to Hindi
- POST /transform    - Question / modal / conditional / articles / punctuation / voice / speech
- POST /hindi-tense  - Suggest the English tense for a Hindi sentence
- POST /suggestions  - Three alternative phrasings of a tagged sentence
"""

from fastapi import APIRouter

from app.api.dependencies import GrammarServiceDep
from app.api.middleware import add_ai_call_to_wide_event
from app.api.routes.schemas import (
    HindiTenseRequest,
    SentenceRequest,
    SuggestionsRequest,
    TransformRequest,
)
from app.services.ai.gateway import resolve_provider
from app.services.grammar.schemas import (
    AnalysisResult,
    HindiTenseAnalysis,
    SuggestionsResult,
    TransformationResult,
)

router = APIRouter()


# ============================================================================
# Analysis
# ============================================================================


@router.post("/analyze", response_model=AnalysisResult)
async def analyze_sentence(body: SentenceRequest, service: GrammarServiceDep) -> AnalysisResult:
    add_ai_call_to_wide_event(provider=resolve_provider(body.provider).value, action="analyze")
    return await service.analyze_sentence(body.api_key, body.provider, body.sentence)


@router.post("/hindi-tense", response_model=HindiTenseAnalysis)
async def analyze_hindi_tense(body: HindiTenseRequest, service: GrammarServiceDep) -> HindiTenseAnalysis:
    """Which English tense carries this Hindi sentence's meaning."""
    add_ai_call_to_wide_event(provider=resolve_provider(body.provider).value, action="hindi-tense")
    return await service.analyze_hindi_tense(body.api_key, body.provider, body.hindi_sentence)


# ============================================================================
# Transformations
# ============================================================================


@router.post("/transform", response_model=TransformationResult)
async def transform_sentence(body: TransformRequest, service: GrammarServiceDep) -> TransformationResult:
    """Rewrite a sentence according to the selected grammar action."""
    add_ai_call_to_wide_event(
        provider=resolve_provider(body.provider).value,
        action=f"transform.{body.action.value}",
    )
    return await service.transform_sentence(
        body.api_key,
        body.provider,
        body.action,
        body.sentence,
        option=body.option,
    )


@router.post("/suggestions", response_model=SuggestionsResult)
async def suggest_alternatives(body: SuggestionsRequest, service: GrammarServiceDep) -> SuggestionsResult:
    add_ai_call_to_wide_event(provider=resolve_provider(body.provider).value, action="suggestions")
    suggestions = await service.suggest_alternatives(body.api_key, body.provider, body.tagged_sentence)
    return SuggestionsResult(suggestions=suggestions)
