"""
Unit tests for the AI gateway.

Every test drives the real providers through a recording MockTransport,
so request bodies are checked exactly as they would go on the wire.
"""

import httpx
import pytest

from app.core.models import AIProvider
from app.services.ai.errors import (
    GENERIC_FAILURE_MESSAGE,
    MissingCredentialError,
    TransportError,
)
from app.services.ai.gateway import resolve_provider

pytestmark = pytest.mark.asyncio

CHAT = "chat-completion-compatible"
GEMINI = "primary-multimodal"


# =========================================================================
# Credentials
# =========================================================================

class TestMissingCredential:
    @pytest.mark.parametrize("api_key", [None, "", "   "])
    @pytest.mark.parametrize("provider", [CHAT, GEMINI])
    async def test_fails_before_any_network_call(
        self, make_gateway, spy_factory, chat_reply, api_key, provider
    ):
        spy = spy_factory(chat_reply("{}"))
        gateway = make_gateway(spy)

        with pytest.raises(MissingCredentialError) as exc_info:
            await gateway.generate(api_key, provider, "Say hi")

        assert spy.call_count == 0
        assert "API Key" in exc_info.value.message


# =========================================================================
# JSON mode
# =========================================================================

class TestJsonMode:
    async def test_chat_text_request_sets_json_object_format(self, make_gateway, spy_factory, chat_reply):
        spy = spy_factory(chat_reply("{}"))

        await make_gateway(spy).generate("k1", CHAT, "Say hi")

        assert spy.json_body()["response_format"]["type"] == "json_object"

    @pytest.mark.parametrize("json_mode", [True, False])
    async def test_chat_image_request_never_sets_format(
        self, make_gateway, spy_factory, chat_reply, json_mode
    ):
        spy = spy_factory(chat_reply("text"))

        await make_gateway(spy).generate(
            "k1", CHAT, "Read this", "QUJDRA==", "image/png", json_mode=json_mode
        )

        assert "response_format" not in spy.json_body()

    async def test_chat_text_request_with_json_mode_off(self, make_gateway, spy_factory, chat_reply):
        spy = spy_factory(chat_reply("text"))

        await make_gateway(spy).generate("k1", CHAT, "Say hi", json_mode=False)

        assert "response_format" not in spy.json_body()

    async def test_gemini_text_request_asks_for_json(self, make_gateway, spy_factory, gemini_reply):
        spy = spy_factory(gemini_reply("{}"))

        await make_gateway(spy).generate("k1", GEMINI, "Say hi")

        assert spy.json_body()["generationConfig"]["responseMimeType"] == "application/json"


# =========================================================================
# Output
# =========================================================================

class TestOutput:
    @pytest.mark.parametrize("provider,reply_fixture", [(CHAT, "chat_reply"), (GEMINI, "gemini_reply")])
    async def test_returns_completion_unmodified(
        self, request, make_gateway, spy_factory, provider, reply_fixture
    ):
        payload = '{"sentence":[{"word":"Hi","pos":"Interjection"}]}'
        reply = request.getfixturevalue(reply_fixture)
        spy = spy_factory(reply(payload))

        text = await make_gateway(spy).generate("k1", provider, "Say hi")

        assert text == payload

    async def test_identical_calls_are_not_cached(self, make_gateway, spy_factory, chat_reply):
        spy = spy_factory(chat_reply('{"x":1}'))
        gateway = make_gateway(spy)

        first = await gateway.generate("k1", CHAT, "Say hi")
        second = await gateway.generate("k1", CHAT, "Say hi")

        assert first == second
        assert spy.call_count == 2

    async def test_empty_completion_is_returned_as_empty_string(self, make_gateway, spy_factory, chat_reply):
        spy = spy_factory(chat_reply(""))
        assert await make_gateway(spy).generate("k1", CHAT, "Say hi") == ""

    async def test_each_call_uses_its_own_credential(self, make_gateway, spy_factory, chat_reply):
        spy = spy_factory(chat_reply("{}"))
        gateway = make_gateway(spy)

        await gateway.generate("key-a", CHAT, "x")
        await gateway.generate("key-b", CHAT, "x")

        assert [r.headers["authorization"] for r in spy.requests] == ["Bearer key-a", "Bearer key-b"]


# =========================================================================
# Modality
# =========================================================================

class TestModality:
    async def test_empty_base64_is_sent_as_text_only(self, make_gateway, spy_factory, chat_reply):
        """MIME type with an empty base64 string counts as no image."""
        spy = spy_factory(chat_reply("{}"))

        await make_gateway(spy).generate("k1", CHAT, "Read this", "", "image/png")

        body = spy.json_body()
        assert body["messages"] == [{"role": "user", "content": "Read this"}]
        assert body["model"] == "llama-3.3-70b-versatile"
        assert body["response_format"] == {"type": "json_object"}

    async def test_model_override_for_text_requests(self, make_gateway, spy_factory, gemini_reply):
        spy = spy_factory(gemini_reply("{}"))

        await make_gateway(spy).generate("k1", GEMINI, "x", model_override="gemini-2.0-flash")

        assert spy.requests[0].url.path.endswith("/models/gemini-2.0-flash:generateContent")


# =========================================================================
# Provider selection
# =========================================================================

class TestResolveProvider:
    @pytest.mark.parametrize(
        "selector,expected",
        [
            (None, AIProvider.PRIMARY_MULTIMODAL),
            ("", AIProvider.PRIMARY_MULTIMODAL),
            ("primary-multimodal", AIProvider.PRIMARY_MULTIMODAL),
            ("chat-completion-compatible", AIProvider.CHAT_COMPLETION),
            ("gemini", AIProvider.PRIMARY_MULTIMODAL),
            ("GROQ", AIProvider.CHAT_COMPLETION),
            ("something-else", AIProvider.PRIMARY_MULTIMODAL),
            (AIProvider.CHAT_COMPLETION, AIProvider.CHAT_COMPLETION),
        ],
    )
    async def test_selector_mapping(self, selector, expected):
        assert resolve_provider(selector) == expected

    async def test_unknown_selector_goes_to_gemini(self, make_gateway, spy_factory, gemini_reply):
        spy = spy_factory(gemini_reply("{}"))

        await make_gateway(spy).generate("k1", "openai", "x")

        assert spy.requests[0].url.host == "gemini.test"


# =========================================================================
# End-to-end scenarios
# =========================================================================

class TestScenarios:
    async def test_chat_text_json_round_trip(self, make_gateway, spy_factory, chat_reply):
        spy = spy_factory(chat_reply('{"x":1}'))

        text = await make_gateway(spy).generate("k1", CHAT, "Say hi", json_mode=True)

        assert text == '{"x":1}'
        assert spy.call_count == 1

    async def test_chat_401_surfaces_provider_message(self, make_gateway, spy_factory):
        spy = spy_factory(
            lambda request: httpx.Response(401, json={"error": {"message": "invalid api key"}})
        )

        with pytest.raises(TransportError) as exc_info:
            await make_gateway(spy).generate("k1", CHAT, "Say hi")

        assert exc_info.value.message == "invalid api key"
        assert str(exc_info.value) == "invalid api key"

    async def test_gemini_image_payload_is_verbatim(self, make_gateway, spy_factory, gemini_reply):
        image_b64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJ+/="
        spy = spy_factory(gemini_reply("Hello world"))

        text = await make_gateway(spy).generate("k1", GEMINI, "Read this", image_b64, "image/png")

        parts = spy.json_body()["contents"][0]["parts"]
        assert len(parts) == 2
        assert parts[1]["inlineData"]["mimeType"] == "image/png"
        assert parts[1]["inlineData"]["data"] == image_b64
        assert text == "Hello world"


# =========================================================================
# Failure normalization
# =========================================================================

class TestFailures:
    async def test_network_error_on_gemini_becomes_transport_error(self, make_gateway, spy_factory):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            await make_gateway(spy_factory(refuse)).generate("k1", GEMINI, "x")

        assert exc_info.value.message == "connection refused"
        assert isinstance(exc_info.value.cause, httpx.ConnectError)

    async def test_undecodable_success_body_gets_generic_message(self, make_gateway, spy_factory):
        spy = spy_factory(lambda request: httpx.Response(200, text="not json"))

        with pytest.raises(TransportError) as exc_info:
            await make_gateway(spy).generate("k1", GEMINI, "x")

        assert exc_info.value.message == GENERIC_FAILURE_MESSAGE
