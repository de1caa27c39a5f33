"""
Services layer for SentenceCraft AI.

MODULES:
- ai/: Two-provider AI gateway (Gemini, OpenAI-compatible chat completions)
- grammar/: Prompt compilers and response validation for the grammar lab

STANDALONE SERVICES:
- transliteration: Hindi transliteration suggestions (Google Input Tools)

ARCHITECTURE:
1. Route handler validates the HTTP payload
2. grammar.GrammarService builds the prompt
3. ai.AIGateway picks the provider and performs one call
4. GrammarService decodes and validates the returned JSON
"""
