"""
Grammar Schemas

Expected JSON shapes of AI responses, plus the sentence-generation input.
Field aliases match the camelCase keys the prompts ask the model for.
"""

from pydantic import Field

from app.core.models import AIProvider, BaseSchema


class WordPos(BaseSchema):
    """A single word or punctuation mark with its part-of-speech tag."""
    word: str
    pos: str  # e.g. "Noun", "Verb", "Punctuation"


class SentenceInput(BaseSchema):
    """Words for a generated sentence, plus the caller's credentials."""
    subject: str = Field(..., min_length=1, max_length=100)
    verb: str = Field(..., min_length=1, max_length=100)
    object: str = Field(..., min_length=1, max_length=100)
    tense: str = Field(..., min_length=1, max_length=60)
    adjective: str | None = Field(None, max_length=100)
    adverb: str | None = Field(None, max_length=100)
    preposition: str | None = Field(None, max_length=100)
    conjunction: str | None = Field(None, max_length=100)
    determiner: str | None = Field(None, max_length=100)
    interjection: str | None = Field(None, max_length=100)
    other_words: str | None = Field(None, alias="otherWords", max_length=300)
    api_key: str | None = Field(None, alias="apiKey", repr=False)
    provider: AIProvider | None = None


class SentenceOutput(BaseSchema):
    sentence: list[WordPos]


class AnalysisResult(BaseSchema):
    tagged_sentence: list[WordPos] = Field(..., alias="taggedSentence")
    hindi_translation: str | None = Field(None, alias="hindiTranslation")


class TransformationResult(BaseSchema):
    """A rewritten sentence with its Hindi translation and the rule applied."""
    sentence: list[WordPos]
    hindi_translation: str | None = Field(None, alias="hindiTranslation")
    explanation: str | None = None


class HindiTenseAnalysis(BaseSchema):
    identified_english_tense: str = Field(..., alias="identifiedEnglishTense")
    reasoning: str
    example_english_sentence: list[WordPos] = Field(..., alias="exampleEnglishSentence")
    english_tense_rule_key: str = Field(..., alias="englishTenseRuleKey")


class SuggestionsResult(BaseSchema):
    suggestions: list[list[WordPos]]
