"""
Grammar Lab Package

Prompt compilers for sentence generation, analysis, transformations,
Hindi tense help, suggestions and OCR, validated against pydantic schemas.
"""

from app.services.grammar.errors import (
    GrammarServiceError,
    InvalidGrammarRequestError,
    MalformedResponseError,
)
from app.services.grammar.service import (
    GrammarAction,
    GrammarService,
    clean_extracted_text,
    decode_json_object,
    word_pos_to_text,
)

__all__ = [
    "GrammarAction",
    "GrammarService",
    "GrammarServiceError",
    "InvalidGrammarRequestError",
    "MalformedResponseError",
    "clean_extracted_text",
    "decode_json_object",
    "word_pos_to_text",
]
