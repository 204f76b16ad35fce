"""Tests for the lesson generation client.

HTTP is mocked with httpx.MockTransport. Tests verify that the client:
- Raises LessonTransportError with the status on non-2xx responses
- Raises LessonParseError on bodies that are not a LessonPlan
- Raises LessonConfigurationError before sending anything when no key is set
- Sends the composed prompts, schema and generation parameters
"""

import json
from typing import Any

import httpx
import pytest

from coachlab.config.settings import settings
from coachlab.lessons.client import LessonGenerationClient, extract_candidate_text, parse_lesson_plan
from coachlab.lessons.composer import compose_lesson_prompt
from coachlab.lessons.config import comprehensive_config
from coachlab.lessons.errors import (
    RAW_TEXT_PREVIEW_CHARS,
    LessonConfigurationError,
    LessonGenerationError,
    LessonParseError,
    LessonTransportError,
)
from coachlab.lessons.fallback import generate_fallback_lesson

BASE_URL = "https://generation.test/v1beta"


def _envelope(text: str) -> dict[str, Any]:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def _client(handler, api_key: str = "test-key") -> LessonGenerationClient:
    return LessonGenerationClient(
        api_key=api_key,
        model="test-model",
        base_url=BASE_URL,
        timeout_seconds=5.0,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_http_500_raises_transport_error() -> None:
    """Test that a 500 response raises LessonTransportError carrying the status."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="internal error")

    with pytest.raises(LessonTransportError) as exc_info:
        await _client(handler).generate_lesson_plan("Hip Escape Fundamentals", "Brazilian Jiu-Jitsu")

    assert exc_info.value.status == 500
    assert exc_info.value.body == "internal error"
    assert exc_info.value.to_dict() == {"kind": "http_error", "status": 500, "body": "internal error"}


@pytest.mark.asyncio
async def test_not_json_raises_parse_error_and_fallback_recovers() -> None:
    """Test that a non-JSON 200 body raises LessonParseError and the fallback still produces a plan."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="not json")

    with pytest.raises(LessonParseError) as exc_info:
        await _client(handler).generate_lesson_plan("Hip Escape Fundamentals", "Brazilian Jiu-Jitsu", "beginner")

    assert exc_info.value.kind == "parse_error"
    assert exc_info.value.raw_text_preview == "not json"

    plan = generate_fallback_lesson("Hip Escape Fundamentals", "Brazilian Jiu-Jitsu", "beginner", "45 minutes")
    assert len(plan.parts) == 4


@pytest.mark.asyncio
async def test_successful_response_parses_lesson_plan(lesson_payload: dict[str, Any]) -> None:
    """Test that candidate text is parsed into a LessonPlan."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_envelope(json.dumps(lesson_payload)))

    plan = await _client(handler).generate_lesson_plan("Hip Escape Fundamentals", "Brazilian Jiu-Jitsu", "beginner")

    assert plan.title == lesson_payload["title"]
    assert len(plan.parts) == 4
    assert plan.parts[0].sections[0].content[2].text == "Always warm up."


@pytest.mark.asyncio
async def test_candidate_text_that_is_not_json_raises_parse_error() -> None:
    """Test that a valid envelope with non-JSON candidate text raises LessonParseError."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_envelope("Here is your lesson plan!"))

    with pytest.raises(LessonParseError, match="invalid JSON"):
        await _client(handler).generate_lesson_plan("Jab", "Boxing")


@pytest.mark.asyncio
async def test_parseable_but_malformed_plan_raises_parse_error(lesson_payload: dict[str, Any]) -> None:
    """Test that a plan without exactly four parts is rejected."""
    lesson_payload["parts"] = lesson_payload["parts"][:3]

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_envelope(json.dumps(lesson_payload)))

    with pytest.raises(LessonParseError, match="does not match LessonPlan"):
        await _client(handler).generate_lesson_plan("Jab", "Boxing")


@pytest.mark.asyncio
async def test_missing_api_key_raises_before_request() -> None:
    """Test that a missing credential fails without sending any request."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200)

    with pytest.raises(LessonConfigurationError):
        await _client(handler, api_key="").generate_lesson_plan("Jab", "Boxing")

    assert requests == []


@pytest.mark.asyncio
async def test_timeout_raises_transport_error_without_status() -> None:
    """Test that a timeout is reported like a transport failure."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(LessonTransportError) as exc_info:
        await _client(handler).generate_lesson_plan("Jab", "Boxing")

    assert exc_info.value.status is None
    assert "timed out" in str(exc_info.value)


@pytest.mark.asyncio
async def test_connection_error_raises_transport_error() -> None:
    """Test that a connection failure raises LessonTransportError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(LessonGenerationError) as exc_info:
        await _client(handler).generate_lesson_plan("Jab", "Boxing")

    assert isinstance(exc_info.value, LessonTransportError)
    assert exc_info.value.status is None


@pytest.mark.asyncio
async def test_request_body_carries_prompt_schema_and_parameters(lesson_payload: dict[str, Any]) -> None:
    """Test the endpoint, headers and body of the generation request."""
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json=_envelope(json.dumps(lesson_payload)))

    config = comprehensive_config()
    notes = "Elbow to knee before the shrimp."
    await _client(handler).generate_lesson_plan(
        "Hip Escape Fundamentals", "Brazilian Jiu-Jitsu", "beginner", "45 minutes", notes, config
    )

    assert len(captured) == 1
    request = captured[0]
    assert str(request.url) == f"{BASE_URL}/models/test-model:generateContent"
    assert request.headers["x-goog-api-key"] == "test-key"

    body = json.loads(request.content)
    expected = compose_lesson_prompt("Hip Escape Fundamentals", "Brazilian Jiu-Jitsu", "beginner", "45 minutes", notes, config)
    assert body["contents"][0]["parts"][0]["text"] == expected.user_prompt
    assert body["systemInstruction"]["parts"][0]["text"] == expected.system_instruction
    assert body["generationConfig"]["responseMimeType"] == "application/json"
    assert body["generationConfig"]["responseSchema"] == expected.schema
    assert body["generationConfig"]["temperature"] == settings.lesson_temperature
    assert body["generationConfig"]["maxOutputTokens"] == settings.lesson_max_output_tokens
    assert body["generationConfig"]["topP"] == settings.lesson_top_p
    assert body["generationConfig"]["topK"] == settings.lesson_top_k


def test_extract_candidate_text_requires_candidates() -> None:
    """Test that an envelope without candidates raises LessonParseError."""
    with pytest.raises(LessonParseError, match="no candidate text"):
        extract_candidate_text({"candidates": []})


def test_extract_candidate_text_rejects_empty_text() -> None:
    """Test that blank candidate text raises LessonParseError."""
    with pytest.raises(LessonParseError, match="empty"):
        extract_candidate_text(_envelope("   "))


def test_parse_lesson_plan_strips_code_fence(lesson_payload: dict[str, Any]) -> None:
    """Test that a fenced JSON payload still parses."""
    plan = parse_lesson_plan("```json\n" + json.dumps(lesson_payload) + "\n```")
    assert plan.sport == "Brazilian Jiu-Jitsu"


def test_parse_error_preview_is_truncated() -> None:
    """Test that long raw output is truncated in the error preview."""
    raw = "x" * (RAW_TEXT_PREVIEW_CHARS + 100)
    with pytest.raises(LessonParseError) as exc_info:
        parse_lesson_plan(raw)

    preview = exc_info.value.raw_text_preview
    assert preview.endswith("...")
    assert len(preview) == RAW_TEXT_PREVIEW_CHARS + 3


def test_client_strips_trailing_slash_from_base_url() -> None:
    """Test that the endpoint is built without a double slash."""
    client = LessonGenerationClient(api_key="k", model="m", base_url="https://generation.test/v1beta/")
    assert client.endpoint == "https://generation.test/v1beta/models/m:generateContent"
