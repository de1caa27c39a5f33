"""
Core models and types for SentenceCraft AI.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


# =============================================================================
# Enums
# =============================================================================


class AIProvider(str, Enum):
    """Which backend LLM service a request targets."""
    PRIMARY_MULTIMODAL = "primary-multimodal"          # Gemini
    CHAT_COMPLETION = "chat-completion-compatible"     # Groq / any OpenAI-compatible API

    @classmethod
    def _missing_(cls, value: object) -> "AIProvider | None":
        # Short names the web client stores alongside the API key
        aliases = {
            "gemini": cls.PRIMARY_MULTIMODAL,
            "groq": cls.CHAT_COMPLETION,
        }
        if isinstance(value, str):
            return aliases.get(value.strip().lower())
        return None


class Modality(str, Enum):
    TEXT = "text"
    VISION = "vision"


class OcrLanguage(str, Enum):
    ENGLISH = "english"
    HINDI = "hindi"


# =============================================================================
# Base Models
# =============================================================================


class BaseSchema(BaseModel):
    """Base schema with common configuration."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
