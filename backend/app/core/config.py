"""
Core configuration and settings for SentenceCraft AI.
"""

import json
from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "SentenceCraft AI"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = Field(default=["http://localhost:9002", "http://localhost:3000"])

    # Gemini (primary multimodal provider) - one model serves text and vision
    gemini_api_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-1.5-flash"

    # OpenAI-compatible chat completions (Groq by default)
    chat_completion_api_url: str = "https://api.groq.com/openai/v1"
    chat_completion_provider_label: str = "Groq"
    chat_completion_model: str = "llama-3.3-70b-versatile"
    chat_completion_vision_model: str = "meta-llama/llama-4-scout-17b-16e-instruct"

    # Shared generation parameters
    ai_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    ai_request_timeout: float = 60.0  # seconds, per provider call

    # Hindi transliteration (Google Input Tools)
    transliteration_url: str = "https://inputtools.google.com/request"
    transliteration_suggestions: int = 5
    transliteration_timeout: float = 10.0

    @property
    def log_json(self) -> bool:
        """JSON logs in production, console renderer while debugging."""
        return not self.debug

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.debug else "INFO"

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v: Any) -> list[str]:
        """Parse CORS origins from JSON string if needed."""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                # If not valid JSON, treat as comma-separated
                return [s.strip() for s in v.split(',')]
        return v

    @field_validator('chat_completion_api_url', 'gemini_api_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Endpoint paths are appended to these URLs."""
        if not v:
            raise ValueError("provider API URL cannot be empty")
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
