"""Generation client for schema-constrained lesson plans.

Performs exactly one generateContent request against the generative text
service and returns a LessonPlan, or raises. No retries and no fallback here:
the caller decides what to do with a LessonGenerationError.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from coachlab.config.settings import settings
from coachlab.lessons.composer import ComposedPrompt, compose_lesson_prompt
from coachlab.lessons.config import EnhancedLessonConfig, default_config
from coachlab.lessons.errors import LessonConfigurationError, LessonParseError, LessonTransportError
from coachlab.lessons.schemas import LessonLevel, LessonPlan


def extract_candidate_text(envelope: Any) -> str:
    """Pull the first candidate's text payload out of a provider envelope.

    Args:
        envelope: Decoded response body

    Returns:
        The model's raw text output

    Raises:
        LessonParseError: If the envelope has no candidate text
    """
    try:
        parts = envelope["candidates"][0]["content"]["parts"]
        text = parts[0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise LessonParseError(json.dumps(envelope, default=str), f"response has no candidate text ({type(e).__name__}: {e})") from e

    if not isinstance(text, str) or not text.strip():
        raise LessonParseError(str(text), "candidate text is empty")
    return text


def _strip_code_fence(text: str) -> str:
    stripped = text.strip()
    if stripped.startswith("```") and stripped.endswith("```"):
        stripped = stripped[3:-3].strip()
        if stripped.lower().startswith("json"):
            stripped = stripped[4:]
    return stripped.strip()


def parse_lesson_plan(text: str) -> LessonPlan:
    """Parse model output into a LessonPlan.

    Structure, types and enum values are checked by the model; count and
    length hints from the response schema are not re-checked.

    Raises:
        LessonParseError: If the text is not JSON or not a LessonPlan
    """
    try:
        payload = json.loads(_strip_code_fence(text))
    except json.JSONDecodeError as e:
        raise LessonParseError(text, f"invalid JSON ({e.msg} at line {e.lineno} column {e.colno})") from e

    try:
        return LessonPlan.model_validate(payload)
    except ValidationError as e:
        raise LessonParseError(text, f"payload does not match LessonPlan ({e.error_count()} errors: {e.errors()[0]['msg']})") from e


class LessonGenerationClient:
    """Client for the generative text service's generateContent endpoint."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Service API key. If not provided, reads from settings.
            model: Model name. If not provided, reads from settings.
            base_url: API base URL. If not provided, reads from settings.
            timeout_seconds: Request timeout. If not provided, reads from settings.
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.api_key = (settings.gemini_api_key if api_key is None else api_key).strip()
        self.model = model or settings.lesson_model
        self.base_url = (base_url or settings.lesson_api_base_url).rstrip("/")
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else settings.lesson_request_timeout_seconds
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    @staticmethod
    def generation_parameters() -> dict[str, float | int]:
        """Fixed sampling parameters for a generation call."""
        return {
            "temperature": settings.lesson_temperature,
            "maxOutputTokens": settings.lesson_max_output_tokens,
            "topP": settings.lesson_top_p,
            "topK": settings.lesson_top_k,
        }

    def build_request_body(self, prompt: ComposedPrompt) -> dict[str, Any]:
        """Build the generateContent request body for a composed prompt."""
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": prompt.user_prompt}],
                }
            ],
            "systemInstruction": {
                "parts": [{"text": prompt.system_instruction}],
            },
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": prompt.schema,
                **self.generation_parameters(),
            },
        }

    async def _post(self, body: dict[str, Any]) -> httpx.Response:
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                return await client.post(self.endpoint, json=body, headers=headers)
        except httpx.TimeoutException as e:
            raise LessonTransportError(
                status=None,
                body="",
                message=f"Generation request timed out after {self.timeout_seconds}s: {type(e).__name__}",
            ) from e
        except httpx.RequestError as e:
            raise LessonTransportError(
                status=None,
                body="",
                message=f"Generation request failed: {type(e).__name__}: {e}",
            ) from e

    async def generate_lesson_plan(
        self,
        topic: str,
        sport: str,
        level: LessonLevel | str = LessonLevel.INTERMEDIATE,
        duration: str = "45 minutes",
        detailed_instructions: str | None = None,
        config: EnhancedLessonConfig | None = None,
    ) -> LessonPlan:
        """Generate a lesson plan with one request to the generation service.

        Args:
            topic: Lesson topic
            sport: Sport name
            level: Athlete level
            duration: Free-form total duration
            detailed_instructions: Optional instructor notes
            config: Detail config; defaults to the masterclass preset

        Returns:
            Parsed LessonPlan

        Raises:
            LessonConfigurationError: If no API key is configured (no request is sent)
            LessonTransportError: On non-2xx response, timeout or connection failure
            LessonParseError: If the response cannot be parsed into a LessonPlan
        """
        if not self.api_key:
            raise LessonConfigurationError(
                "GEMINI_API_KEY is not set. Please configure it in your .env file or environment variables."
            )

        config = config or default_config()
        prompt = compose_lesson_prompt(topic, sport, level, duration, detailed_instructions, config)
        body = self.build_request_body(prompt)

        logger.info(
            "Requesting AI lesson plan",
            model=self.model,
            sport=sport,
            level=str(level),
            detail_level=config.detail_level.value,
        )
        logger.debug(
            "Lesson generation prompt",
            system_prompt=prompt.system_instruction,
            user_prompt=prompt.user_prompt,
        )

        response = await self._post(body)

        if not response.is_success:
            logger.warning("Generation service returned an error", status=response.status_code)
            raise LessonTransportError(status=response.status_code, body=response.text)

        try:
            envelope = response.json()
        except ValueError as e:
            raise LessonParseError(response.text, "response body is not JSON") from e

        plan = parse_lesson_plan(extract_candidate_text(envelope))
        logger.info(
            "AI lesson plan generated",
            title=plan.title,
            sections=sum(len(part.sections) for part in plan.parts),
            blocks=plan.block_count,
        )
        return plan
