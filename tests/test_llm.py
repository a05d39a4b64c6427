"""
Tests for the text-completion client, the generation dispatcher and the
mock completion path
"""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from insight_engine.config import AIConfig
from insight_engine.llm.client import GENERATION_TEMPERATURE, CompletionClient, GenerationResult
from insight_engine.llm.dispatcher import generate_completion
from insight_engine.llm.mock import (
    GENERIC_SUMMARIES,
    MOCK_MODEL,
    MOCK_SUMMARIES,
    Language,
    detect_language,
    generate_mock_completion,
)
from insight_engine.schemas.insights import GenerationMode
from insight_engine.schemas.session import TherapistRole


def completion_response(content, total_tokens=123) -> dict:
    return {
        "choices": [{"message": {"role": "assistant", "content": content}}],
        "usage": {"total_tokens": total_tokens},
    }


@pytest.fixture
def mock_service():
    """Patch the shared HTTP client with one backed by a request handler."""

    def install(handler):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return patch(
            "insight_engine.llm.client.get_shared_client",
            new_callable=AsyncMock,
            return_value=http_client,
        )

    return install


# =============================================================================
# Live client
# =============================================================================

class TestCompletionClient:
    def test_build_payload(self, real_config):
        payload = CompletionClient(real_config).build_payload("system text", "user text")

        assert payload == {
            "model": "test-model",
            "messages": [
                {"role": "system", "content": "system text"},
                {"role": "user", "content": "user text"},
            ],
            "max_tokens": 500,
            "temperature": GENERATION_TEMPERATURE,
        }
        assert GENERATION_TEMPERATURE == 0.7

    async def test_success(self, real_config, mock_service):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=completion_response("Generated text"))

        with mock_service(handler):
            result = await CompletionClient(real_config).complete("sys", "usr")

        assert result.ok
        assert result.text == "Generated text"
        assert result.mode == GenerationMode.REAL
        assert result.model == "test-model"
        assert result.tokens_used == 123
        assert captured["url"] == "https://completions.test/v1/chat/completions"
        assert captured["auth"] == "Bearer test-key"
        assert captured["body"]["messages"][1]["content"] == "usr"

    async def test_missing_usage(self, real_config, mock_service):
        with mock_service(lambda request: httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})):
            result = await CompletionClient(real_config).complete("sys", "usr")

        assert result.ok
        assert result.tokens_used is None

    async def test_non_success_status(self, real_config, mock_service):
        with mock_service(lambda request: httpx.Response(503, text="unavailable")):
            result = await CompletionClient(real_config).complete("sys", "usr")

        assert not result.ok
        assert result.text == ""
        assert result.error == "API error 503: unavailable"
        assert result.mode == GenerationMode.REAL
        assert result.model == "test-model"

    @pytest.mark.parametrize("body", [{"choices": []}, {}, {"choices": "none"}])
    async def test_no_choices(self, real_config, mock_service, body):
        with mock_service(lambda request: httpx.Response(200, json=body)):
            result = await CompletionClient(real_config).complete("sys", "usr")

        assert result.error == "Invalid API response: no choices returned"

    @pytest.mark.parametrize(
        "choice",
        [{}, {"message": {}}, {"message": {"content": None}}, {"message": "text"}],
    )
    async def test_no_content(self, real_config, mock_service, choice):
        with mock_service(lambda request: httpx.Response(200, json={"choices": [choice]})):
            result = await CompletionClient(real_config).complete("sys", "usr")

        assert result.error == "Invalid API response: no content in message"

    async def test_transport_error(self, real_config, mock_service):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused")

        with mock_service(handler):
            result = await CompletionClient(real_config).complete("sys", "usr")

        assert result.error == "Request failed: connection refused"

    async def test_invalid_json_body(self, real_config, mock_service):
        with mock_service(lambda request: httpx.Response(200, text="<html>oops</html>")):
            result = await CompletionClient(real_config).complete("sys", "usr")

        assert result.error.startswith("Request failed:")


# =============================================================================
# Dispatcher
# =============================================================================

class TestGenerateCompletion:
    async def test_mock_mode_makes_no_request(self, mock_config):
        with patch.object(CompletionClient, "complete", new_callable=AsyncMock) as complete:
            result = await generate_completion("sys", "Patient felt calm", mock_config)

        complete.assert_not_awaited()
        assert result.mode == GenerationMode.MOCK
        assert result.model == MOCK_MODEL
        assert result.text == GENERIC_SUMMARIES[Language.ENGLISH]

    async def test_real_mode_delegates(self, real_config):
        expected = GenerationResult(text="live", mode=GenerationMode.REAL, model="test-model")
        with patch.object(CompletionClient, "complete", new_callable=AsyncMock, return_value=expected) as complete:
            result = await generate_completion("sys", "usr", real_config)

        complete.assert_awaited_once_with("sys", "usr")
        assert result == expected

    async def test_real_mode_uses_supplied_client(self, real_config):
        client = CompletionClient(real_config)
        client.complete = AsyncMock(
            return_value=GenerationResult(text="x", mode=GenerationMode.REAL),
        )

        await generate_completion("sys", "usr", real_config, client=client)

        client.complete.assert_awaited_once()


# =============================================================================
# Mock completions
# =============================================================================

class TestMockCompletion:
    def test_detect_language(self):
        assert detect_language("plain English") == Language.ENGLISH
        assert detect_language(None, "", "English", "מטופל") == Language.HEBREW
        assert detect_language() == Language.ENGLISH

    def test_role_template_english(self):
        result = generate_mock_completion("Patient reports stress", TherapistRole.PSYCHIATRIST)

        assert result.text == MOCK_SUMMARIES[TherapistRole.PSYCHIATRIST][Language.ENGLISH]
        assert result.mode == GenerationMode.MOCK
        assert result.error is None

    def test_role_template_hebrew(self):
        result = generate_mock_completion("המטופל מדווח על לחץ", TherapistRole.ART_THERAPIST)

        assert result.text == MOCK_SUMMARIES[TherapistRole.ART_THERAPIST][Language.HEBREW]

    def test_every_role_has_both_languages(self):
        for role in TherapistRole:
            assert set(MOCK_SUMMARIES[role]) == set(Language)
