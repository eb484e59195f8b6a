"""Tests for AI backend selection and the fallback chain."""

import json

import httpx
import pytest

from core.config import GEMINI_MODELS, OPENAI_API_URL, PERPLEXITY_API_URL
from core.exceptions import ConfigurationError, ProviderError, RateLimitError, ValidationError
from data.prompts import SAMPLE_PLAN_TEXT, SYSTEM_PROMPT
from services.ai_provider import detect_provider, generate_plan_text, select_backends


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def _gemini_ok(text):
    return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})


def _chat_ok(text):
    return httpx.Response(200, json={"choices": [{"message": {"content": text}}]})


def test_detect_provider():
    assert detect_provider("sk-abc") == "openai"
    assert detect_provider("pplx-abc") == "perplexity"
    assert detect_provider("AIzaSy123") == "gemini"


def test_gemini_candidates_follow_model_order():
    backends = select_backends("AIzaSy123")
    assert [b.model for b in backends] == GEMINI_MODELS


def test_openai_request_shape():
    seen = []

    def handler(request):
        seen.append(request)
        return _chat_ok(SAMPLE_PLAN_TEXT)

    text = generate_plan_text("sk-test", "ذكر 30 سنة", http_client=_client(handler))
    assert text == SAMPLE_PLAN_TEXT
    request = seen[0]
    assert str(request.url) == OPENAI_API_URL
    assert request.headers["Authorization"] == "Bearer sk-test"
    body = json.loads(request.content)
    assert body["model"] == "gpt-4o-mini"
    assert body["temperature"] == 0.3
    assert body["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert body["messages"][1]["content"].endswith("ذكر 30 سنة")


def test_perplexity_request_shape():
    seen = []

    def handler(request):
        seen.append(request)
        return _chat_ok("الغداء أرز")

    assert generate_plan_text("pplx-test", "data", http_client=_client(handler)) == "الغداء أرز"
    assert str(seen[0].url) == PERPLEXITY_API_URL
    assert json.loads(seen[0].content)["temperature"] == 0.2


def test_chat_provider_error_message_is_passed_through():
    def handler(request):
        return httpx.Response(401, json={"error": {"message": "Incorrect API key provided"}})

    with pytest.raises(ProviderError) as exc_info:
        generate_plan_text("sk-bad", "data", http_client=_client(handler))
    assert exc_info.value.message == "Incorrect API key provided"


def test_gemini_falls_back_to_next_model():
    calls = []

    def handler(request):
        calls.append(request)
        assert request.url.params["key"] == "AIzaKey"
        if len(calls) == 1:
            return httpx.Response(404, json={"error": {"code": 404, "message": "model not found"}})
        return _gemini_ok("العشاء جبنة")

    text = generate_plan_text("AIzaKey", "data", http_client=_client(handler))
    assert text == "العشاء جبنة"
    assert len(calls) == 2
    assert GEMINI_MODELS[1] in str(calls[1].url)
    prompt = json.loads(calls[1].content)["contents"][0]["parts"][0]["text"]
    assert prompt.startswith(SYSTEM_PROMPT)
    assert prompt.endswith("🚀 CLIENT DATA:\ndata")


def test_gemini_rate_limit_aborts_chain():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(429, json={"error": {"code": 429, "status": "RESOURCE_EXHAUSTED", "message": "quota"}})

    with pytest.raises(RateLimitError) as exc_info:
        generate_plan_text("AIzaKey", "data", http_client=_client(handler))
    assert len(calls) == 1
    assert exc_info.value.status_code == 429


def test_gemini_network_error_moves_on():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) < 3:
            raise httpx.ConnectError("connection refused", request=request)
        return _gemini_ok("سعرات 2000")

    assert generate_plan_text("AIzaKey", "data", http_client=_client(handler)) == "سعرات 2000"
    assert len(calls) == 3


def test_all_backends_fail_raises_last_error():
    def handler(request):
        return httpx.Response(500, json={"error": {"code": 500, "message": f"down {request.url.path}"}})

    with pytest.raises(ProviderError) as exc_info:
        generate_plan_text("AIzaKey", "data", http_client=_client(handler))
    assert GEMINI_MODELS[-1] in exc_info.value.message


def test_malformed_response_is_provider_error():
    def handler(request):
        return httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(ProviderError):
        generate_plan_text("sk-test", "data", http_client=_client(handler))


def test_missing_key_and_data_are_rejected():
    with pytest.raises(ConfigurationError):
        generate_plan_text("  ", "data")
    with pytest.raises(ValidationError):
        generate_plan_text("sk-test", "   ")


def test_chat_rate_limit_without_error_body():
    def handler(request):
        return httpx.Response(429, text="Too Many Requests")

    with pytest.raises(RateLimitError):
        generate_plan_text("sk-test", "data", http_client=_client(handler))


def test_gemini_rate_limit_status_without_json_aborts_chain():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(429, text="slow down")

    with pytest.raises(RateLimitError):
        generate_plan_text("AIzaKey", "data", http_client=_client(handler))
    assert len(calls) == 1
