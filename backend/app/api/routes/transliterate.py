"""
Transliteration route.

GET /api/v1/transliterate proxies Google Input Tools so the browser can
offer Devanagari suggestions while the user types Roman Hindi.
"""

from fastapi import APIRouter, HTTPException, Query, status

from app.api.dependencies import TransliterationDep
from app.core.models import BaseSchema
from app.services.transliteration import find_word_at_cursor

router = APIRouter()


class TransliterationResponse(BaseSchema):
    word: str
    suggestions: list[str]
    start: int | None = None
    end: int | None = None


@router.get("", response_model=TransliterationResponse)
async def transliterate(
    client: TransliterationDep,
    text: str | None = Query(None, max_length=500),
    cursor: int | None = Query(None, ge=0, description="Caret position; the word around it is looked up"),
) -> TransliterationResponse:
    """Suggestions for `text`, or for the word at `cursor` inside it."""
    if not text or not text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Text is required",
        )

    if cursor is None:
        result = await client.suggest(text.strip())
        return TransliterationResponse(word=result.word, suggestions=result.suggestions)

    located = find_word_at_cursor(text, min(cursor, len(text)))
    if located is None:
        return TransliterationResponse(word="", suggestions=[])

    result = await client.suggest(located.word)
    return TransliterationResponse(
        word=result.word,
        suggestions=result.suggestions,
        start=located.start,
        end=located.end,
    )
