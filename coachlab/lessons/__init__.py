"""Lesson generation pipeline.

Flow: caller parameters → prompt composer → generation client → LessonPlan,
or the fallback generator when the client fails → markdown renderer.
"""

from coachlab.lessons.composer import ComposedPrompt, compose_lesson_prompt
from coachlab.lessons.config import DetailLevel, EnhancedLessonConfig, config_for
from coachlab.lessons.errors import (
    LessonConfigurationError,
    LessonGenerationError,
    LessonParseError,
    LessonTransportError,
)
from coachlab.lessons.fallback import generate_fallback_lesson
from coachlab.lessons.renderer import render_lesson_markdown
from coachlab.lessons.schemas import ContentBlock, ContentBlockType, LessonLevel, LessonPart, LessonPlan, LessonSection

__all__ = [
    "ComposedPrompt",
    "ContentBlock",
    "ContentBlockType",
    "DetailLevel",
    "EnhancedLessonConfig",
    "LessonConfigurationError",
    "LessonGenerationError",
    "LessonLevel",
    "LessonParseError",
    "LessonPart",
    "LessonPlan",
    "LessonSection",
    "LessonTransportError",
    "compose_lesson_prompt",
    "config_for",
    "generate_fallback_lesson",
    "render_lesson_markdown",
]
