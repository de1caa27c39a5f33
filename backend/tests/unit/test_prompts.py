"""
Unit tests for grammar prompt templates.
"""

import pytest

from app.core.models import OcrLanguage
from app.services.grammar import prompts
from app.services.grammar.schemas import SentenceInput


def make_words(**overrides) -> SentenceInput:
    data = {"subject": "She", "verb": "write", "object": "letters", "tense": "Past Perfect"}
    data.update(overrides)
    return SentenceInput.model_validate(data)


class TestSentencePrompt:
    def test_includes_tense_formula(self):
        prompt = prompts.build_sentence_prompt(make_words())
        assert prompts.TENSE_FORMULAS["Past Perfect"] in prompt
        assert "- Subject: She" in prompt
        assert '"sentence"' in prompt

    def test_unknown_tense_gets_generic_instruction(self):
        prompt = prompts.build_sentence_prompt(make_words(tense="Habitual Past"))
        assert 'Use the correct verb form for "Habitual Past" tense.' in prompt

    def test_optional_words_only_when_present(self):
        bare = prompts.build_sentence_prompt(make_words())
        assert "Optional additions" not in bare

        full = prompts.build_sentence_prompt(make_words(adverb="quickly", otherWords="every day"))
        assert "- Adverb: quickly" in full
        assert "- Other: every day" in full
        assert "- Adjective" not in full

    def test_all_twelve_tenses_have_formulas(self):
        assert len(prompts.TENSE_FORMULAS) == 12


class TestTransformationPrompts:
    @pytest.mark.parametrize(
        "builder,key",
        [
            (lambda s: prompts.build_question_prompt(s, "How"), "generatedQuestion"),
            (lambda s: prompts.build_modal_rewrite_prompt(s, "might"), "rewrittenSentence"),
            (lambda s: prompts.build_conditional_prompt(s, "Third"), "transformedSentence"),
            (prompts.build_article_check_prompt, "rewrittenSentence"),
            (prompts.build_punctuation_prompt, "rewrittenSentence"),
            (prompts.build_voice_prompt, "transformedSentence"),
            (prompts.build_speech_prompt, "transformedSentence"),
        ],
    )
    def test_names_result_key_and_sentence(self, builder, key):
        prompt = builder("the boy kicked the ball")
        assert f'"{key}"' in prompt
        assert 'Sentence: "the boy kicked the ball"' in prompt
        assert '"hindiTranslation"' in prompt
        assert '"explanation"' in prompt


class TestOtherPrompts:
    def test_analysis_prompt_keys(self):
        prompt = prompts.build_analysis_prompt("Birds fly")
        assert '"taggedSentence"' in prompt
        assert '"hindiTranslation"' in prompt

    def test_hindi_tense_prompt_allows_error_reply(self):
        prompt = prompts.build_hindi_tense_prompt("वह पढ़ रहा है")
        assert "वह पढ़ रहा है" in prompt
        assert '"error"' in prompt
        assert '"englishTenseRuleKey"' in prompt

    def test_suggestions_prompt(self):
        assert '"suggestions"' in prompts.build_suggestions_prompt("Cats sleep")

    def test_ocr_prompt_language_hint(self):
        assert "Devanagari" in prompts.build_ocr_prompt(OcrLanguage.HINDI)
        assert "Devanagari" not in prompts.build_ocr_prompt()
