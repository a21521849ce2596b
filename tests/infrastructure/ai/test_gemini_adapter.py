"""Tests for the Gemini adapter."""

import json
from typing import List

import httpx
import pytest
import pytest_asyncio

from veritas.domain.errors import BackendCallError, ConfigurationError
from veritas.domain.ports.ai_provider import GenerationRequest
from veritas.infrastructure.ai.gemini_adapter import (
    GeminiAdapter,
    GeminiConfig,
    is_rate_limit_response,
    resolve_api_key,
)

BASE_URL = "https://generativelanguage.test/v1beta"

SUCCESS_BODY = {
    "candidates": [
        {
            "content": {
                "role": "model",
                "parts": [
                    {"text": "Thinking it over...", "thought": True},
                    {"text": '{"summary": "ok", '},
                    {"text": '"confidenceScore": 90, "sources": [], "claims": []}'},
                ],
            },
            "groundingMetadata": {
                "groundingChunks": [
                    {"web": {"uri": "https://vertexaisearch.example/redirect/1", "title": "nasa.gov"}},
                    {"retrievedContext": {"uri": "gs://bucket/doc"}},
                    {"web": {"uri": "https://vertexaisearch.example/redirect/2"}},
                ]
            },
        }
    ]
}


@pytest.fixture(autouse=True)
def clear_credentials(monkeypatch):
    """Make sure no real credential leaks into the tests."""
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


@pytest.fixture
def captured() -> List[httpx.Request]:
    return []


@pytest_asyncio.fixture
async def make_adapter(captured):
    """Build adapters whose HTTP client answers from a handler."""
    adapters = []

    def factory(handler, api_key="test_key") -> GeminiAdapter:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return handler(request)

        adapter = GeminiAdapter(GeminiConfig(api_key=api_key, base_url=BASE_URL, timeout=5))
        adapter._client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(recording_handler))
        adapters.append(adapter)
        return adapter

    yield factory

    for adapter in adapters:
        await adapter.shutdown()


@pytest.fixture
def request_model() -> GenerationRequest:
    return GenerationRequest(system_instruction="Be a fact-checker.", user_prompt='Analyze: "claim"')


@pytest.mark.asyncio
async def test_generate_success(make_adapter, captured, request_model):
    """Test text parts are joined and web grounding chunks extracted."""
    adapter = make_adapter(lambda request: httpx.Response(200, json=SUCCESS_BODY))

    response = await adapter.generate(request_model)

    assert response.text == '{"summary": "ok", "confidenceScore": 90, "sources": [], "claims": []}'
    assert [chunk.uri for chunk in response.grounding_chunks] == [
        "https://vertexaisearch.example/redirect/1",
        "https://vertexaisearch.example/redirect/2",
    ]
    assert response.grounding_chunks[1].title == ""

    sent = captured[0]
    assert sent.url.path.endswith("/models/gemini-2.5-flash:generateContent")
    assert sent.headers["x-goog-api-key"] == "test_key"
    body = json.loads(sent.content)
    assert body["tools"] == [{"google_search": {}}]
    assert body["system_instruction"]["parts"][0]["text"] == "Be a fact-checker."
    assert body["contents"] == [{"role": "user", "parts": [{"text": 'Analyze: "claim"'}]}]


@pytest.mark.asyncio
async def test_generate_without_grounding(make_adapter, captured):
    """Test the search tool is only sent when requested."""
    adapter = make_adapter(lambda request: httpx.Response(200, json=SUCCESS_BODY))

    await adapter.generate(GenerationRequest(system_instruction="s", user_prompt="u", enable_search_grounding=False))

    assert "tools" not in json.loads(captured[0].content)


@pytest.mark.asyncio
async def test_missing_api_key_fails_before_request(make_adapter, captured, request_model):
    """Test a missing credential is reported without touching the network."""
    adapter = make_adapter(lambda request: httpx.Response(200, json=SUCCESS_BODY), api_key=None)

    with pytest.raises(ConfigurationError):
        await adapter.generate(request_model)

    assert captured == []


@pytest.mark.asyncio
async def test_api_key_resolved_from_environment_at_call_time(make_adapter, captured, request_model, monkeypatch):
    """Test the key is read when the call happens, not when the adapter is built."""
    adapter = make_adapter(lambda request: httpx.Response(200, json=SUCCESS_BODY), api_key=None)
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")

    await adapter.generate(request_model)

    assert captured[0].headers["x-goog-api-key"] == "from-env"


def test_resolve_api_key_prefers_api_key_variable(monkeypatch):
    """Test both accepted variable names, in order."""
    monkeypatch.setenv("GEMINI_API_KEY", "second")
    assert resolve_api_key() == "second"

    monkeypatch.setenv("API_KEY", "first")
    assert resolve_api_key() == "first"
    assert resolve_api_key("explicit") == "explicit"


@pytest.mark.asyncio
async def test_rate_limit_is_flagged(make_adapter, request_model):
    """Test a 429 becomes a rate-limited backend error with the API message."""
    body = {"error": {"code": 429, "message": "Resource has been exhausted.", "status": "RESOURCE_EXHAUSTED"}}
    adapter = make_adapter(lambda request: httpx.Response(429, json=body))

    with pytest.raises(BackendCallError) as exc_info:
        await adapter.generate(request_model)

    assert exc_info.value.is_rate_limited
    assert exc_info.value.status_code == 429
    assert exc_info.value.message == "Resource has been exhausted."


@pytest.mark.asyncio
async def test_server_error_is_not_rate_limited(make_adapter, request_model):
    """Test other HTTP errors are plain backend errors."""
    body = {"error": {"code": 500, "message": "Internal error encountered.", "status": "INTERNAL"}}
    adapter = make_adapter(lambda request: httpx.Response(500, json=body))

    with pytest.raises(BackendCallError) as exc_info:
        await adapter.generate(request_model)

    assert not exc_info.value.is_rate_limited
    assert exc_info.value.message == "Internal error encountered."


@pytest.mark.asyncio
async def test_timeout_is_a_backend_error(make_adapter, request_model):
    """Test a hung call ends as a non-rate-limited backend error."""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    adapter = make_adapter(handler)

    with pytest.raises(BackendCallError) as exc_info:
        await adapter.generate(request_model)

    assert not exc_info.value.is_rate_limited
    assert "timed out" in exc_info.value.message


@pytest.mark.asyncio
async def test_no_candidates_returns_empty_text(make_adapter, request_model):
    """Test a blocked prompt yields an empty response instead of crashing."""
    adapter = make_adapter(lambda request: httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}}))

    response = await adapter.generate(request_model)

    assert response.text == ""
    assert response.grounding_chunks == []


@pytest.mark.parametrize(
    "status,body,expected",
    [
        (429, "", True),
        (400, '{"error": {"status": "RESOURCE_EXHAUSTED"}}', True),
        (403, '{"error": {"message": "Quota exceeded for quota metric"}}', True),
        (500, '{"error": {"message": "Internal error"}}', False),
        (400, '{"error": {"message": "API key not valid"}}', False),
    ],
)
def test_is_rate_limit_response(status, body, expected):
    """Test quota classification from status and body."""
    assert is_rate_limit_response(status, body) is expected


@pytest.mark.asyncio
async def test_provider_properties_and_shutdown():
    """Test provider metadata and lifecycle."""
    adapter = GeminiAdapter(GeminiConfig(api_key="test_key"))
    assert adapter.provider_name == "Gemini"
    assert adapter.capabilities["search_grounding"]
    assert not adapter.is_available

    await adapter.initialize()
    assert adapter.is_available

    await adapter.shutdown()
    assert not adapter.is_available
