"""
Hindi Transliteration Client

Fetches Devanagari suggestions for a Roman-script word from Google Input
Tools, the same service the web client's Hindi keyboard uses.

Response format:
    ["SUCCESS", [["namaste", ["नमस्ते", "नमस्टे", ...], [], {...}]]]
"""

import re
from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog

from app.core.config import Settings, get_settings

logger = structlog.get_logger()

# Hindi, transliteration input method, any source script
INPUT_TOOLS_ITC = "hi-t-i0-und"

_WORD_BEFORE_CURSOR = re.compile(r"[a-zA-Z]+$")
_WORD_AFTER_CURSOR = re.compile(r"^[a-zA-Z]+")


class TransliterationError(Exception):
    """Raised when the transliteration service cannot be reached or fails."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


@dataclass
class WordAtCursor:
    """Roman-script word under the cursor and its position in the full text."""
    word: str
    start: int
    end: int


@dataclass
class TransliterationResult:
    word: str
    suggestions: list[str] = field(default_factory=list)


def find_word_at_cursor(text: str, cursor: int) -> WordAtCursor | None:
    """Locate the English word the cursor sits in or directly after."""
    cursor = max(0, min(cursor, len(text)))
    before = _WORD_BEFORE_CURSOR.search(text[:cursor])
    if not before:
        return None

    after = _WORD_AFTER_CURSOR.search(text[cursor:])
    start = cursor - len(before.group(0))
    end = cursor + (len(after.group(0)) if after else 0)
    return WordAtCursor(word=text[start:end], start=start, end=end)


def parse_suggestions(data: Any) -> list[str]:
    """Extract the suggestion list from an Input Tools response."""
    try:
        if data[0] == "SUCCESS" and data[1][0][1]:
            return [s for s in data[1][0][1] if isinstance(s, str)]
    except (IndexError, KeyError, TypeError):
        pass
    return []


class TransliterationClient:
    """Async client for Google Input Tools transliteration."""

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport

    async def suggest(self, word: str) -> TransliterationResult:
        """Get Devanagari suggestions for one Roman-script word."""
        params = {
            "itc": INPUT_TOOLS_ITC,
            "num": self.settings.transliteration_suggestions,
            "text": word,
        }

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self.settings.transliteration_timeout,
            ) as client:
                response = await client.get(self.settings.transliteration_url, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.warning("transliteration_request_failed", word=word, error=str(e))
            raise TransliterationError(str(e) or "Transliteration failed") from e
        except ValueError as e:
            logger.warning("transliteration_invalid_response", word=word, error=str(e))
            raise TransliterationError("Transliteration failed") from e

        suggestions = parse_suggestions(data)
        logger.debug("transliteration_success", word=word, count=len(suggestions))
        return TransliterationResult(word=word, suggestions=suggestions)
