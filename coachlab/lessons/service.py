"""Lesson generation service.

Caller-level orchestration around the pipeline components:
cache lookup → generation client (when enabled) → fallback generator on any
LessonGenerationError. The client itself never falls back; this is the one
place that decides to.
"""

from __future__ import annotations

from typing import Literal

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from coachlab.config.settings import settings
from coachlab.lessons.cache import LessonCache, build_cache_key
from coachlab.lessons.client import LessonGenerationClient
from coachlab.lessons.config import DetailLevel, config_for
from coachlab.lessons.errors import LessonGenerationError
from coachlab.lessons.fallback import generate_fallback_lesson
from coachlab.lessons.renderer import render_lesson_markdown
from coachlab.lessons.schemas import LessonLevel, LessonPlan

LessonSource = Literal["ai", "fallback", "cache"]


def _default_detail_level() -> DetailLevel:
    return DetailLevel(settings.lesson_default_detail_level)


class LessonRequest(BaseModel):
    """Validated parameters for one lesson generation."""

    model_config = ConfigDict(frozen=True)

    topic: str = Field(min_length=1, description="Lesson topic")
    sport: str = Field(min_length=1, description="Sport name or alias")
    level: LessonLevel = Field(default=LessonLevel.INTERMEDIATE, description="Athlete level")
    duration: str = Field(default="45 minutes", description="Free-form total duration")
    detailed_instructions: str | None = Field(default=None, description="Optional instructor notes")
    detail_level: DetailLevel = Field(default_factory=_default_detail_level, description="Detail preset")

    @field_validator("topic", "sport", mode="before")
    @classmethod
    def strip_names(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("level", "detail_level", mode="before")
    @classmethod
    def normalize_enum_case(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("detailed_instructions")
    @classmethod
    def blank_instructions_to_none(cls, value: str | None) -> str | None:
        return value if value and value.strip() else None


class LessonGenerationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    plan: LessonPlan
    source: LessonSource
    error: dict[str, str | int | None] | None = Field(
        default=None,
        description="Error that triggered the fallback, if any",
    )

    @property
    def used_fallback(self) -> bool:
        return self.source == "fallback"


class LessonGenerationService:
    """Generates lesson plans, falling back to offline generation on failure."""

    def __init__(
        self,
        client: LessonGenerationClient | None = None,
        cache: LessonCache | None = None,
        ai_enabled: bool | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            client: Generation client. If not provided, one is built from settings.
            cache: Optional lesson cache; nothing is cached without one.
            ai_enabled: Whether to call the generation service. If not provided, reads from settings.
        """
        self.client = client or LessonGenerationClient()
        self.cache = cache
        self._ai_enabled = ai_enabled

    @property
    def ai_enabled(self) -> bool:
        if self._ai_enabled is None:
            return settings.lesson_ai_enabled
        return self._ai_enabled

    def _read_cache(self, key: str) -> LessonPlan | None:
        if self.cache is None:
            return None
        try:
            return self.cache.get(key)
        except Exception as e:
            logger.warning("Lesson cache read failed (non-fatal)", error=str(e))
            return None

    def _write_cache(self, key: str, plan: LessonPlan) -> None:
        if self.cache is None:
            return
        try:
            self.cache.set(key, plan)
        except Exception as e:
            logger.warning("Lesson cache write failed (non-fatal)", error=str(e))

    @staticmethod
    def _fallback(request: LessonRequest) -> LessonPlan:
        return generate_fallback_lesson(
            request.topic,
            request.sport,
            request.level,
            request.duration,
            request.detailed_instructions,
        )

    async def generate(self, request: LessonRequest) -> LessonGenerationResult:
        """Generate a lesson plan for a request.

        Never raises for a valid request: generation failures are logged and
        answered with the fallback plan.

        Args:
            request: Validated lesson request

        Returns:
            LessonGenerationResult with the plan and where it came from
        """
        cache_key = build_cache_key(
            request.topic,
            request.sport,
            request.level.value,
            request.duration,
            request.detailed_instructions,
            request.detail_level.value,
        )
        cached = self._read_cache(cache_key)
        if cached is not None:
            logger.info("Lesson plan served from cache", sport=request.sport, topic=request.topic)
            return LessonGenerationResult(plan=cached, source="cache")

        if not self.ai_enabled:
            logger.info("AI lesson generation disabled, using fallback", sport=request.sport)
            return LessonGenerationResult(plan=self._fallback(request), source="fallback")

        try:
            plan = await self.client.generate_lesson_plan(
                topic=request.topic,
                sport=request.sport,
                level=request.level,
                duration=request.duration,
                detailed_instructions=request.detailed_instructions,
                config=config_for(request.detail_level),
            )
        except LessonGenerationError as e:
            logger.warning(
                "AI lesson generation failed, using fallback",
                error_kind=e.kind,
                error=str(e),
                sport=request.sport,
            )
            return LessonGenerationResult(plan=self._fallback(request), source="fallback", error=e.to_dict())

        self._write_cache(cache_key, plan)
        return LessonGenerationResult(plan=plan, source="ai")


# Shared by the module-level helpers below
_SERVICE: LessonGenerationService | None = None


def get_lesson_service() -> LessonGenerationService:
    """Get or create the shared lesson generation service.

    Returns:
        Service built from settings, without a cache
    """
    global _SERVICE
    if _SERVICE is None:
        _SERVICE = LessonGenerationService()
    return _SERVICE


async def generate_lesson(
    topic: str,
    sport: str,
    level: LessonLevel | str = LessonLevel.INTERMEDIATE,
    duration: str = "45 minutes",
    detailed_instructions: str | None = None,
    detail_level: DetailLevel | str | None = None,
) -> LessonGenerationResult:
    """Generate a lesson plan with the shared service.

    Raises:
        pydantic.ValidationError: If topic or sport is empty
    """
    request = LessonRequest(
        topic=topic,
        sport=sport,
        level=level,
        duration=duration,
        detailed_instructions=detailed_instructions,
        detail_level=detail_level or _default_detail_level(),
    )
    return await get_lesson_service().generate(request)


async def generate_lesson_markdown(
    topic: str,
    sport: str,
    level: LessonLevel | str = LessonLevel.INTERMEDIATE,
    duration: str = "45 minutes",
    detailed_instructions: str | None = None,
    detail_level: DetailLevel | str | None = None,
) -> str:
    """Generate a lesson plan and render it as markdown."""
    result = await generate_lesson(topic, sport, level, duration, detailed_instructions, detail_level)
    return render_lesson_markdown(result.plan)
