"""
Grammar Prompts

Centralized prompt templates for every grammar-lab operation. Each builder
returns a complete prompt that tells the model which JSON object to reply
with; the response shapes are validated in service.py.
"""

from app.core.models import OcrLanguage
from app.services.grammar.schemas import SentenceInput

# Strict tense formulas so the model does not mix up neighbouring tenses
TENSE_FORMULAS: dict[str, str] = {
    "Present Indefinite": "Subject + V1/V1s (e.g., I play / He plays). Do NOT use is/am/are + V-ing.",
    "Present Continuous": "Subject + is/am/are + V-ing (e.g., I am playing / He is playing). Must use 'be + V-ing'.",
    "Present Perfect": "Subject + has/have + V3 (past participle) (e.g., I have played / He has eaten). Do NOT use 'been + V-ing'. No continuous form.",
    "Present Perfect Continuous": "Subject + has/have + been + V-ing (e.g., I have been playing / He has been studying). Must use 'been + V-ing'.",
    "Past Indefinite": "Subject + V2 (past form) (e.g., I played / He ate). Do NOT use was/were + V-ing.",
    "Past Continuous": "Subject + was/were + V-ing (e.g., I was playing / He was eating). Must use 'was/were + V-ing'.",
    "Past Perfect": "Subject + had + V3 (past participle) (e.g., I had played / He had eaten). Do NOT use 'been + V-ing'. No continuous form.",
    "Past Perfect Continuous": "Subject + had + been + V-ing (e.g., I had been playing / He had been studying). Must use 'had been + V-ing'.",
    "Future Indefinite": "Subject + will/shall + V1 (base form) (e.g., I will play / He will eat). Do NOT use 'be + V-ing'.",
    "Future Continuous": "Subject + will be + V-ing (e.g., I will be playing / He will be eating). Must use 'will be + V-ing'.",
    "Future Perfect": "Subject + will have + V3 (past participle) (e.g., I will have played / He will have eaten). Do NOT use 'been + V-ing'. No continuous form.",
    "Future Perfect Continuous": "Subject + will have + been + V-ing (e.g., I will have been playing). Must use 'will have been + V-ing'.",
}

QUESTION_TYPES = ("What", "Why", "When", "Where", "Who", "How", "Yes/No")

MODAL_VERBS = ("can", "could", "may", "might", "must", "should")

CONDITIONALS = ("Zero", "First", "Second", "Third")

POS_TAG_HINT = (
    '"pos" (Part-of-Speech tag string like "Noun", "Verb", "Adjective", "Adverb", '
    '"Pronoun", "Preposition", "Conjunction", "Determiner", "Auxiliary", "Punctuation", etc.)'
)


def build_sentence_prompt(words: SentenceInput) -> str:
    """Build the prompt that generates one tense-specific tagged sentence."""
    optional_parts = "\n".join(
        line
        for line in (
            f"- Adjective: {words.adjective}" if words.adjective else "",
            f"- Adverb: {words.adverb}" if words.adverb else "",
            f"- Preposition: {words.preposition}" if words.preposition else "",
            f"- Conjunction: {words.conjunction}" if words.conjunction else "",
            f"- Determiner: {words.determiner}" if words.determiner else "",
            f"- Interjection: {words.interjection}" if words.interjection else "",
            f"- Other: {words.other_words}" if words.other_words else "",
        )
        if line
    )
    tense_formula = TENSE_FORMULAS.get(words.tense) or f'Use the correct verb form for "{words.tense}" tense.'
    optional_block = f"Optional additions:\n{optional_parts}" if optional_parts else ""

    return f"""You are an expert English grammar teacher. You must be VERY STRICT about tense accuracy.
Generate a natural, grammatically correct English sentence in the "{words.tense}" tense.

CRITICAL TENSE RULE - You MUST follow this formula exactly:
{tense_formula}

WARNING: Do NOT confuse similar tenses. For example:
- "Present Perfect" uses "have/has + V3" (e.g., "I have studied") - NOT "have been + V-ing"
- "Present Perfect Continuous" uses "have/has + been + V-ing" (e.g., "I have been studying")
- "Past Indefinite" uses "V2" (e.g., "I studied") - NOT "was/were + V-ing"
These are DIFFERENT tenses. Use ONLY the formula for "{words.tense}".

Core Components:
- Subject: {words.subject}
- Verb: {words.verb}
- Object: {words.object}

{optional_block}

Instructions:
1. Construct the sentence naturally using the EXACT tense formula above.
2. Double-check: does the verb form match "{words.tense}" exactly? If not, fix it.
3. Break the sentence into an array of objects where each object has "word" and "pos" (e.g., "Noun", "Verb", "Punctuation").
4. If a determiner is needed for correct grammar, add it automatically.
5. Respond with ONLY a JSON object: {{ "sentence": [ {{ "word": "...", "pos": "..." }}, ... ] }}"""


def build_analysis_prompt(sentence: str) -> str:
    return f"""You are an English grammar expert. Analyze the following sentence.
Sentence: "{sentence}"
Task:
1. Break down into an array of objects, each with "word" (string) and {POS_TAG_HINT}.
2. Translate into natural Hindi.
3. Respond with ONLY a valid JSON object (no extra text): {{ "taggedSentence": [{{"word":"The","pos":"Determiner"}},{{"word":"cat","pos":"Noun"}},...], "hindiTranslation": "..." }}"""


def _transformation_prompt(instruction: str, sentence: str, steps: tuple[str, str], result_key: str, example: str) -> str:
    """Shared layout for the rewrite-style prompts."""
    rewrite_step, explain_step = steps
    return f"""You are an English grammar expert. {instruction}
Sentence: "{sentence}"
Task:
1. {rewrite_step}
2. {explain_step}
3. Break down the resulting sentence into an array of objects, each with "word" (string) and {POS_TAG_HINT}.
4. Translate the resulting sentence into natural Hindi.
Respond with ONLY a valid JSON object (no extra text):
{{ "{result_key}": [{example},...], "hindiTranslation": "...", "explanation": "..." }}"""


def build_question_prompt(sentence: str, question_type: str) -> str:
    return _transformation_prompt(
        f'Transform the following sentence into a "{question_type}" type question.',
        sentence,
        (
            "Generate the question from the given sentence.",
            "Explain the grammar rule for forming this type of question in simple language.",
        ),
        "generatedQuestion",
        '{"word":"What","pos":"Pronoun"},{"word":"do","pos":"Auxiliary"}',
    )


def build_modal_rewrite_prompt(sentence: str, modal_verb: str) -> str:
    return _transformation_prompt(
        f'Rewrite the following sentence using the modal verb "{modal_verb}".',
        sentence,
        (
            f'Rewrite the sentence correctly using "{modal_verb}".',
            "Explain the modal verb usage rule in simple language.",
        ),
        "rewrittenSentence",
        '{"word":"He","pos":"Pronoun"},{"word":"can","pos":"Auxiliary"}',
    )


def build_conditional_prompt(sentence: str, conditional: str) -> str:
    return _transformation_prompt(
        f"Transform the following sentence into a {conditional} Conditional sentence.",
        sentence,
        (
            f"Rewrite the sentence as a {conditional} conditional.",
            "Explain the conditional rule applied in simple language.",
        ),
        "transformedSentence",
        '{"word":"If","pos":"Conjunction"},{"word":"I","pos":"Pronoun"}',
    )


def build_article_check_prompt(sentence: str) -> str:
    return _transformation_prompt(
        "Analyze the articles (a, an, the) in the following sentence.",
        sentence,
        (
            "Check if articles are used correctly. If missing or wrong, suggest corrections.",
            "Explain the article rules for each used or suggested article in simple language.",
        ),
        "rewrittenSentence",
        '{"word":"The","pos":"Determiner"},{"word":"cat","pos":"Noun"}',
    )


def build_punctuation_prompt(sentence: str) -> str:
    return _transformation_prompt(
        "Add correct punctuation to the following sentence. The sentence may be missing commas, "
        "periods, question marks, exclamation marks, apostrophes, quotation marks, colons, "
        "semicolons, or capital letters at the start.",
        sentence,
        (
            "Add all missing punctuation marks and fix capitalization.",
            "Explain what punctuation was added and why, referencing punctuation rules.",
        ),
        "rewrittenSentence",
        '{"word":"He","pos":"Pronoun"},{"word":"said","pos":"Verb"},{"word":",","pos":"Punctuation"}',
    )


def build_voice_prompt(sentence: str) -> str:
    return _transformation_prompt(
        "Transform the following sentence to the other grammatical voice "
        "(active to passive or passive to active).",
        sentence,
        ("Transform the voice.", "Explain the rule."),
        "transformedSentence",
        '{"word":"The","pos":"Determiner"}',
    )


def build_speech_prompt(sentence: str) -> str:
    return _transformation_prompt(
        "Transform the following sentence between direct and indirect (reported) speech.",
        sentence,
        ("Transform the speech type.", "Explain the rule."),
        "transformedSentence",
        '{"word":"He","pos":"Pronoun"}',
    )


def build_hindi_tense_prompt(hindi_sentence: str) -> str:
    return f"""You are an expert English teacher who is fluent in Hindi.
Analyze the following Hindi sentence to determine the most appropriate English tense to convey the same meaning.

Hindi Sentence: "{hindi_sentence}"

Task:
1. Identify the most suitable English tense (e.g., "Present Perfect", "Past Indefinite").
2. Provide a clear, concise reasoning for your choice, referencing cues from the Hindi sentence (like "रहा था", "चुका है", etc.).
3. Create a simple, clear example English sentence that uses this tense and reflects the meaning of the Hindi sentence.
4. Break down your example English sentence into an array of objects, with each object having a "word" and its "pos" (Part-of-Speech) tag.
5. Provide the exact key for the English tense (e.g., "PastPerfect") for rule lookup.

Respond with ONLY a JSON object with the following keys: "identifiedEnglishTense", "reasoning", "exampleEnglishSentence", "englishTenseRuleKey".
If the input is not valid Hindi, respond with {{ "error": "The provided text does not appear to be a valid Hindi sentence." }}."""


def build_suggestions_prompt(sentence: str) -> str:
    return f"""You are an AI language assistant. Your task is to rewrite a sentence in three different ways.
The core meaning and tense should remain the same, but the structure, vocabulary, or style should be varied.

Original Sentence: "{sentence}"

Task:
1. Generate exactly three alternative versions of the original sentence.
2. For each new sentence, break it down into an array of objects, where each object has a "word" and a "pos" (Part-of-Speech) tag.
3. Ensure the output is a JSON object with a single key "suggestions", which is an array containing the three tagged sentences.

Example Output Structure:
{{
    "suggestions": [
        [ {{ "word": "The", "pos": "Determiner" }}, {{ "word": "cat", "pos": "Noun" }}, {{ "word": "pursued", "pos": "Verb" }}, {{ "word": "the", "pos": "Determiner" }}, {{ "word": "mouse", "pos": "Noun" }}, {{ "word": ".", "pos": "Punctuation" }} ],
        [ {{ "word": "The", "pos": "Determiner" }}, {{ "word": "mouse", "pos": "Noun" }}, {{ "word": "was", "pos": "Verb" }}, {{ "word": "chased", "pos": "Verb" }}, {{ "word": "by", "pos": "Preposition" }}, {{ "word": "the", "pos": "Determiner" }}, {{ "word": "cat", "pos": "Noun" }}, {{ "word": ".", "pos": "Punctuation" }} ],
        [ {{ "word": "The", "pos": "Determiner" }}, {{ "word": "feline", "pos": "Noun" }}, {{ "word": "ran", "pos": "Verb" }}, {{ "word": "after", "pos": "Preposition" }}, {{ "word": "the", "pos": "Determiner" }}, {{ "word": "rodent", "pos": "Noun" }}, {{ "word": ".", "pos": "Punctuation" }} ]
    ]
}}"""


def build_ocr_prompt(language: OcrLanguage = OcrLanguage.ENGLISH) -> str:
    """Build the text-extraction prompt for a photographed page."""
    if language == OcrLanguage.HINDI:
        script_hint = "The text may be in Hindi (Devanagari script) or English or mixed."
    else:
        script_hint = "The text is likely in English."
    return (
        f"Extract ALL text from this image exactly as it appears. {script_hint} "
        "Return ONLY the extracted text, nothing else. No explanations, no formatting, "
        "no quotes - just the raw text."
    )
