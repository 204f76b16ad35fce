"""Prompt composer for lesson generation.

Builds the system instruction (coach persona plus content mandates), the
user instruction (topic, sport, level, duration and optional instructor
notes) and the response schema. Pure: no I/O beyond the one-time template
load, and identical inputs always give identical output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from coachlab.lessons.config import EnhancedLessonConfig, default_config
from coachlab.lessons.prompts.loader import load_prompt
from coachlab.lessons.schema_builder import build_response_schema
from coachlab.lessons.schemas import LessonLevel

# Category templates appended to the system instruction, in this order
_SYSTEM_CATEGORY_PROMPTS: tuple[tuple[str, str], ...] = (
    ("include_competition_application", "competition_application"),
    ("include_physiology_explanations", "physiology"),
    ("include_mental_training_aspects", "mental_training"),
)

# Category templates appended to the user instruction, in this order
_USER_CATEGORY_PROMPTS: tuple[tuple[str, str], ...] = (
    ("include_advanced_variations", "advanced_variations"),
    ("include_troubleshooting_guides", "troubleshooting"),
    ("include_recovery_protocols", "recovery"),
)


@dataclass(frozen=True)
class ComposedPrompt:
    system_instruction: str
    user_prompt: str
    schema: dict[str, Any]


def _category_blocks(config: EnhancedLessonConfig, categories: tuple[tuple[str, str], ...]) -> str:
    blocks = [load_prompt(prompt_name).strip() for flag, prompt_name in categories if getattr(config, flag)]
    if not blocks:
        return ""
    return "\n" + "\n\n".join(blocks) + "\n"


def build_system_instruction(sport: str, level: LessonLevel | str, config: EnhancedLessonConfig) -> str:
    """Build the coach persona and content mandates for the given config."""
    return load_prompt("system_instruction").format(
        sport=sport,
        level=str(level),
        detail_level=config.detail_level.value,
        word_target_minimum=config.word_target_minimum,
        optional_sections=_category_blocks(config, _SYSTEM_CATEGORY_PROMPTS),
    )


def build_user_prompt(
    topic: str,
    sport: str,
    level: LessonLevel | str,
    duration: str,
    detailed_instructions: str | None,
    config: EnhancedLessonConfig,
) -> str:
    """Build the lesson-specific instruction.

    Instructor notes, when present, are embedded verbatim between fixed
    delimiter lines together with the expansion requirements.
    """
    instructor_notes = ""
    if detailed_instructions and detailed_instructions.strip():
        instructor_notes = "\n" + load_prompt("instructor_notes").format(detailed_instructions=detailed_instructions)

    return load_prompt("user_prompt").format(
        topic=topic,
        sport=sport,
        level=str(level),
        duration=duration,
        detail_level=config.detail_level.value.upper(),
        instructor_notes=instructor_notes,
        requirement_addenda=_category_blocks(config, _USER_CATEGORY_PROMPTS),
    )


def compose_lesson_prompt(
    topic: str,
    sport: str,
    level: LessonLevel | str,
    duration: str,
    detailed_instructions: str | None = None,
    config: EnhancedLessonConfig | None = None,
) -> ComposedPrompt:
    """Compose the full generation payload.

    topic and sport are not validated here; LessonRequest rejects empty values
    at the service boundary.

    Args:
        topic: Lesson topic (e.g., "Hip Escape Fundamentals")
        sport: Sport name
        level: Athlete level
        duration: Free-form total duration (e.g., "45 minutes")
        detailed_instructions: Optional instructor notes to expand upon
        config: Detail config; defaults to the masterclass preset

    Returns:
        ComposedPrompt with system instruction, user prompt and schema
    """
    config = config or default_config()
    return ComposedPrompt(
        system_instruction=build_system_instruction(sport, level, config),
        user_prompt=build_user_prompt(topic, sport, level, duration, detailed_instructions, config),
        schema=build_response_schema(config),
    )
