"""
Pytest configuration and fixtures for SentenceCraft tests.

Outbound HTTP never leaves the process: the gateway and the transliteration
client are given an httpx.MockTransport that records every request.
"""

import json
from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_transliteration_client
from app.api.main import app
from app.core.config import Settings
from app.services.ai.gateway import AIGateway, get_ai_gateway
from app.services.transliteration import TransliterationClient

Handler = Callable[[httpx.Request], httpx.Response]


class SpyTransport(httpx.MockTransport):
    """MockTransport that keeps every request it was asked to send."""

    def __init__(self, handler: Handler):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def json_body(self, index: int = -1) -> dict[str, Any]:
        return json.loads(self.requests[index].content)


def chat_completion_body(content: str | None) -> dict[str, Any]:
    """Minimal OpenAI-compatible chat completion response."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "llama-3.3-70b-versatile",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


def gemini_body(text: str) -> dict[str, Any]:
    """Minimal generateContent response with one candidate."""
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": "STOP",
            }
        ]
    }


@pytest.fixture
def test_settings() -> Settings:
    """Settings independent of the developer's environment."""
    return Settings(
        _env_file=None,
        gemini_api_url="https://gemini.test/v1beta",
        gemini_model="gemini-1.5-flash",
        chat_completion_api_url="https://chat.test/openai/v1",
        chat_completion_provider_label="Groq",
        chat_completion_model="llama-3.3-70b-versatile",
        chat_completion_vision_model="meta-llama/llama-4-scout-17b-16e-instruct",
        transliteration_url="https://inputtools.test/request",
    )


@pytest.fixture
def spy_factory() -> Callable[[Handler], SpyTransport]:
    return SpyTransport


@pytest.fixture
def chat_reply() -> Callable[[str | None], Handler]:
    """Handler factory: every request gets a chat completion with `content`."""

    def make(content: str | None) -> Handler:
        return lambda request: httpx.Response(200, json=chat_completion_body(content))

    return make


@pytest.fixture
def gemini_reply() -> Callable[[str], Handler]:
    """Handler factory: every request gets a Gemini candidate with `text`."""

    def make(text: str) -> Handler:
        return lambda request: httpx.Response(200, json=gemini_body(text))

    return make


@pytest.fixture
def make_gateway(test_settings: Settings) -> Callable[[SpyTransport], AIGateway]:
    def make(transport: SpyTransport) -> AIGateway:
        return AIGateway(settings=test_settings, transport=transport)

    return make


@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against the ASGI app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def override_upstream(test_settings: Settings):
    """Route the app's AI and transliteration calls through one spy transport.

    Usage:
        spy = override_upstream(handler)
    """

    def install(handler: Handler) -> SpyTransport:
        spy = SpyTransport(handler)
        app.dependency_overrides[get_ai_gateway] = lambda: AIGateway(
            settings=test_settings, transport=spy
        )
        app.dependency_overrides[get_transliteration_client] = lambda: TransliterationClient(
            settings=test_settings, transport=spy
        )
        return spy

    yield install
    app.dependency_overrides.clear()
