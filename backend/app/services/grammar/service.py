"""
Grammar Service

Prompt compilers on top of the AI gateway. Each operation builds a prompt,
asks the gateway for a completion and validates the returned JSON against
the shape that prompt asked for. The gateway never parses JSON; every
decoding and shape problem is reported from here as MalformedResponseError.
"""

import json
import re
from enum import Enum
from typing import Any, Callable

import structlog
from pydantic import ValidationError

from app.core.models import AIProvider, OcrLanguage
from app.services.ai.gateway import AIGateway
from app.services.grammar import prompts
from app.services.grammar.errors import InvalidGrammarRequestError, MalformedResponseError
from app.services.grammar.schemas import (
    AnalysisResult,
    HindiTenseAnalysis,
    SentenceInput,
    SentenceOutput,
    SuggestionsResult,
    TransformationResult,
    WordPos,
)

logger = structlog.get_logger()

UNEXPECTED_FORMAT_MESSAGE = "The AI response was not in the expected format."

# Keys a rewritten sentence may come back under, depending on the prompt
TRANSFORMED_SENTENCE_KEYS = (
    "sentence",
    "transformedSentence",
    "rewrittenSentence",
    "generatedQuestion",
    "taggedSentence",
)

_SPACE_BEFORE_PUNCTUATION = re.compile(r" ([.?!,])")
_SURROUNDING_QUOTES = re.compile(r"^[\"'`]+|[\"'`]+$")
_LEADING_FENCE = re.compile(r"^```[\s\S]*?\n")
_TRAILING_FENCE = re.compile(r"\n```$")


class GrammarAction(str, Enum):
    """Sentence transformations offered by the grammar lab."""
    QUESTION = "question"
    MODAL = "modal"
    CONDITIONAL = "conditional"
    ARTICLES = "articles"
    PUNCTUATION = "punctuation"
    VOICE = "voice"
    SPEECH = "speech"


# =============================================================================
# Helpers
# =============================================================================

def word_pos_to_text(sentence: list[WordPos]) -> str:
    """Join tagged words back into a sentence, tightening punctuation."""
    text = " ".join(wp.word for wp in sentence)
    return _SPACE_BEFORE_PUNCTUATION.sub(r"\1", text)


def clean_extracted_text(text: str) -> str:
    """Strip wrapping quotes and code fences a model may add around OCR output."""
    # Fences first: the quote pattern would otherwise eat the backticks
    # and leave a language tag like "text" behind
    cleaned = _LEADING_FENCE.sub("", text.strip(), count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    cleaned = _SURROUNDING_QUOTES.sub("", cleaned.strip())
    return cleaned.strip()


def decode_json_object(text: str) -> dict[str, Any]:
    """Decode a completion that should be a JSON object.

    Raises:
        MalformedResponseError: On empty text, invalid JSON, a non-object
            payload, or a model-reported {"error": "..."}
    """
    if not text or not text.strip():
        raise MalformedResponseError("The AI returned an empty response. Please try again.")

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("grammar_json_parse_error", error=str(e), text=text[:500])
        raise MalformedResponseError("The AI response was not valid JSON.") from e

    if not isinstance(parsed, dict):
        raise MalformedResponseError(UNEXPECTED_FORMAT_MESSAGE)

    error = parsed.get("error")
    if error:
        raise MalformedResponseError(str(error))

    return parsed


def _require_text(value: str | None, message: str) -> str:
    if not value or not value.strip():
        raise InvalidGrammarRequestError(message)
    return value.strip()


# =============================================================================
# Service
# =============================================================================

class GrammarService:
    """Grammar-lab operations backed by the AI gateway."""

    def __init__(self, gateway: AIGateway):
        self.gateway = gateway

    async def _generate_json(
        self,
        api_key: str | None,
        provider: AIProvider | str | None,
        prompt: str,
    ) -> dict[str, Any]:
        text = await self.gateway.generate(api_key, provider, prompt, json_mode=True)
        return decode_json_object(text)

    # -------------------------------------------------------------------------
    # Sentence generation
    # -------------------------------------------------------------------------

    async def generate_sentence(self, words: SentenceInput) -> SentenceOutput:
        """Generate a tagged sentence in the requested tense."""
        data = await self._generate_json(
            words.api_key,
            words.provider,
            prompts.build_sentence_prompt(words),
        )
        try:
            return SentenceOutput.model_validate(data)
        except ValidationError as e:
            logger.warning("grammar_sentence_shape_error", keys=list(data.keys()))
            raise MalformedResponseError("AI failed to generate a sentence output.") from e

    # -------------------------------------------------------------------------
    # Analysis and transformations
    # -------------------------------------------------------------------------

    async def analyze_sentence(
        self,
        api_key: str | None,
        provider: AIProvider | str | None,
        sentence: str,
    ) -> AnalysisResult:
        """Tag every word with its part of speech and translate to Hindi."""
        sentence = _require_text(sentence, "Please provide a sentence.")
        data = await self._generate_json(api_key, provider, prompts.build_analysis_prompt(sentence))
        try:
            return AnalysisResult.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(UNEXPECTED_FORMAT_MESSAGE) from e

    def _build_transformation_prompt(self, action: GrammarAction, sentence: str, option: str | None) -> str:
        """Resolve the action's option and build its prompt."""
        option = option.strip() if option else None

        choices: tuple[str, ...]
        builder: Callable[..., str]
        if action == GrammarAction.QUESTION:
            option = option or prompts.QUESTION_TYPES[0]
            choices = prompts.QUESTION_TYPES
            builder = prompts.build_question_prompt
        elif action == GrammarAction.MODAL:
            if not option:
                raise InvalidGrammarRequestError("Please select a modal verb.")
            choices = prompts.MODAL_VERBS
            builder = prompts.build_modal_rewrite_prompt
        elif action == GrammarAction.CONDITIONAL:
            option = option or prompts.CONDITIONALS[0]
            choices = prompts.CONDITIONALS
            builder = prompts.build_conditional_prompt
        else:
            return {
                GrammarAction.ARTICLES: prompts.build_article_check_prompt,
                GrammarAction.PUNCTUATION: prompts.build_punctuation_prompt,
                GrammarAction.VOICE: prompts.build_voice_prompt,
                GrammarAction.SPEECH: prompts.build_speech_prompt,
            }[action](sentence)

        if option not in choices:
            raise InvalidGrammarRequestError(
                f"Unsupported option '{option}' for {action.value}. Choose one of: {', '.join(choices)}."
            )
        return builder(sentence, option)

    async def transform_sentence(
        self,
        api_key: str | None,
        provider: AIProvider | str | None,
        action: GrammarAction,
        sentence: str,
        option: str | None = None,
    ) -> TransformationResult:
        """Rewrite a sentence (question, modal, conditional, voice, ...)."""
        sentence = _require_text(sentence, "Please provide a sentence.")
        prompt = self._build_transformation_prompt(action, sentence, option)
        data = await self._generate_json(api_key, provider, prompt)

        tagged = next((data[key] for key in TRANSFORMED_SENTENCE_KEYS if data.get(key)), None)
        if tagged is None:
            logger.warning("grammar_transform_shape_error", action=action.value, keys=list(data.keys()))
            raise MalformedResponseError(UNEXPECTED_FORMAT_MESSAGE)

        try:
            return TransformationResult.model_validate({
                "sentence": tagged,
                "hindiTranslation": data.get("hindiTranslation"),
                "explanation": data.get("explanation"),
            })
        except ValidationError as e:
            raise MalformedResponseError(UNEXPECTED_FORMAT_MESSAGE) from e

    async def analyze_hindi_tense(
        self,
        api_key: str | None,
        provider: AIProvider | str | None,
        hindi_sentence: str,
    ) -> HindiTenseAnalysis:
        """Suggest the English tense that best carries a Hindi sentence's meaning."""
        hindi_sentence = _require_text(
            hindi_sentence, "कृपया विश्लेषण के लिए एक हिंदी वाक्य दर्ज करें।"
        )
        data = await self._generate_json(api_key, provider, prompts.build_hindi_tense_prompt(hindi_sentence))
        try:
            return HindiTenseAnalysis.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(UNEXPECTED_FORMAT_MESSAGE) from e

    async def suggest_alternatives(
        self,
        api_key: str | None,
        provider: AIProvider | str | None,
        tagged_sentence: list[WordPos],
    ) -> list[list[WordPos]]:
        """Three rewrites of a tagged sentence with the same meaning and tense."""
        if not tagged_sentence:
            raise InvalidGrammarRequestError("Please provide a sentence.")

        original_text = " ".join(wp.word for wp in tagged_sentence)
        data = await self._generate_json(api_key, provider, prompts.build_suggestions_prompt(original_text))

        suggestions = data.get("suggestions")
        if not isinstance(suggestions, list):
            raise MalformedResponseError("AI response did not contain a 'suggestions' array.")
        try:
            return SuggestionsResult.model_validate(data).suggestions
        except ValidationError as e:
            raise MalformedResponseError(UNEXPECTED_FORMAT_MESSAGE) from e

    # -------------------------------------------------------------------------
    # OCR
    # -------------------------------------------------------------------------

    async def extract_text_from_image(
        self,
        api_key: str | None,
        provider: AIProvider | str | None,
        image_data: str,
        mime_type: str,
        language: OcrLanguage = OcrLanguage.ENGLISH,
    ) -> str:
        """Read the text in a photographed page."""
        if not image_data or not mime_type:
            raise InvalidGrammarRequestError("Please provide an image.")

        text = await self.gateway.generate(
            api_key,
            provider,
            prompts.build_ocr_prompt(language),
            image_data=image_data,
            image_mime_type=mime_type,
            json_mode=False,
        )
        cleaned = clean_extracted_text(text)
        if not cleaned:
            raise MalformedResponseError(
                "No text could be extracted from the image. Please try a clearer photo."
            )
        return cleaned
