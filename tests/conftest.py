"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

from collections.abc import Iterator
from typing import Any

import pytest
from loguru import logger

from coachlab.lessons.schemas import LessonPlan


def _part(number: int, title: str, blocks: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "partTitle": f"Part {number}: {title}",
        "description": f"{title} for the lesson",
        "duration": "10 minutes",
        "sections": [{"sectionTitle": f"{title} Section", "content": blocks}],
    }


@pytest.fixture
def lesson_payload() -> dict[str, Any]:
    """Wire-format lesson plan covering every content block kind."""
    return {
        "title": "Brazilian Jiu-Jitsu: Hip Escape Fundamentals",
        "objective": "Athletes will perform a hip escape from bottom side control with correct frames.",
        "duration": "40 minutes",
        "sport": "Brazilian Jiu-Jitsu",
        "level": "beginner",
        "parts": [
            _part(
                1,
                "Warm-up",
                [
                    {"type": "paragraph", "text": "Today's focus is the hip escape."},
                    {"type": "exercise", "text": "Shrimping lines across the mat.", "duration": "3 minutes"},
                    {"type": "safety_note", "text": "Always warm up."},
                ],
            ),
            _part(
                2,
                "Technical Instruction",
                [
                    {"type": "heading", "text": "Hip Escape Breakdown", "level": 2},
                    {"type": "technique_step", "text": "Frame on the hip and the neck.", "focus_area": "frames"},
                    {"type": "biomechanical_analysis", "text": "Force travels from the planted foot."},
                    {"type": "common_mistake", "text": "Pushing with straight arms."},
                ],
            ),
            _part(
                3,
                "Practice",
                [
                    {"type": "progression_drill", "text": "Solo shrimp, then partner shrimp.", "intensity": "low"},
                    {"type": "coaching_cue", "text": "Hips away, then knee in."},
                    {"type": "list_item", "text": "Keep elbows tight"},
                    {"type": "list_item", "text": "Stay on your side"},
                ],
            ),
            _part(
                4,
                "Application",
                [
                    {"type": "assessment_criteria", "text": "Recovers guard 3 times out of 5."},
                    {"type": "paragraph", "text": "Review the hip escape."},
                ],
            ),
        ],
    }


@pytest.fixture
def sample_plan(lesson_payload: dict[str, Any]) -> LessonPlan:
    """Parsed lesson plan built from lesson_payload."""
    return LessonPlan.model_validate(lesson_payload)


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Capture loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
