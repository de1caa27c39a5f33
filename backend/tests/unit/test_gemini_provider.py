"""
Unit tests for the Gemini provider.
"""

import httpx
import pytest

from app.services.ai.errors import TransportError
from app.services.ai.interface import ProviderResponse
from app.services.ai.providers import GeminiProvider
from app.services.ai.request_builder import build_content_request

pytestmark = pytest.mark.asyncio


@pytest.fixture
def make_provider(test_settings):
    def make(transport) -> GeminiProvider:
        return GeminiProvider(
            api_key="g-key",
            http_client=httpx.AsyncClient(transport=transport),
            settings=test_settings,
        )

    return make


# =========================================================================
# Request shape
# =========================================================================

class TestRequestShape:
    async def test_text_request_asks_for_json(self, make_provider, spy_factory, gemini_reply):
        spy = spy_factory(gemini_reply('{"sentence": []}'))

        await make_provider(spy).generate(build_content_request("Make a sentence"))

        request = spy.requests[0]
        assert str(request.url) == "https://gemini.test/v1beta/models/gemini-1.5-flash:generateContent"
        assert request.headers["x-goog-api-key"] == "g-key"

        body = spy.json_body()
        assert body["contents"] == [{"role": "user", "parts": [{"text": "Make a sentence"}]}]
        assert body["generationConfig"]["responseMimeType"] == "application/json"
        assert body["generationConfig"]["temperature"] == 0.7

    async def test_text_request_without_json_mode(self, make_provider, spy_factory, gemini_reply):
        spy = spy_factory(gemini_reply("hello"))

        await make_provider(spy).generate(build_content_request("Say hi", json_mode=False))

        assert "responseMimeType" not in spy.json_body()["generationConfig"]

    async def test_image_request_carries_inline_data_and_no_json_hint(
        self, make_provider, spy_factory, gemini_reply
    ):
        """Second part carries the MIME type and base64 data byte for byte."""
        image_b64 = "/9j/4AAQSkZJRgABAQAAAQABAAD/2wBDAAgGBgcGBQgHBwcJCQgKDBQNDAsLDBkSEw8U+/=="
        spy = spy_factory(gemini_reply("The cat sat."))

        await make_provider(spy).generate(
            build_content_request("Read this", image_b64, "image/jpeg", json_mode=True)
        )

        body = spy.json_body()
        parts = body["contents"][0]["parts"]
        assert len(parts) == 2
        assert parts[0] == {"text": "Read this"}
        assert parts[1] == {"inlineData": {"mimeType": "image/jpeg", "data": image_b64}}
        assert "responseMimeType" not in body["generationConfig"]


# =========================================================================
# Response handling
# =========================================================================

class TestResponseHandling:
    @pytest.fixture
    def provider(self, make_provider):
        return make_provider(httpx.MockTransport(lambda request: httpx.Response(200)))

    async def test_joins_text_parts_and_skips_thoughts(self, provider):
        raw = {
            "candidates": [
                {
                    "content": {
                        "parts": [
                            {"text": "thinking...", "thought": True},
                            {"text": '{"a":'},
                            {"text": " 1}"},
                        ]
                    }
                }
            ]
        }
        assert provider.completion_text(ProviderResponse(kind="multimodal", raw=raw)) == '{"a": 1}'

    async def test_no_candidates_is_empty_string(self, provider):
        assert provider.completion_text(ProviderResponse(kind="multimodal", raw={})) == ""

    async def test_blocked_prompt_raises(self, provider):
        raw = {"promptFeedback": {"blockReason": "SAFETY"}}

        with pytest.raises(TransportError, match="blocked due to SAFETY"):
            provider.completion_text(ProviderResponse(kind="multimodal", raw=raw))

    async def test_error_message_from_body(self, make_provider, spy_factory):
        spy = spy_factory(
            lambda request: httpx.Response(
                400,
                json={"error": {"code": 400, "message": "API key not valid.", "status": "INVALID_ARGUMENT"}},
            )
        )

        with pytest.raises(TransportError) as exc_info:
            await make_provider(spy).generate(build_content_request("x"))

        assert exc_info.value.message == "API key not valid."
        assert exc_info.value.status_code == 400

    async def test_error_without_message_uses_fallback(self, make_provider, spy_factory):
        spy = spy_factory(lambda request: httpx.Response(503, text="unavailable"))

        with pytest.raises(TransportError) as exc_info:
            await make_provider(spy).generate(build_content_request("x"))

        assert exc_info.value.message == "Gemini API error (503)"
        assert spy.call_count == 1
