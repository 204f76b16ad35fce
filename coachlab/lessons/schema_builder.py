"""Response schema for schema-constrained lesson generation.

DETAIL_LEVEL_BOUNDS is the single source of truth for how many sections and
content blocks a lesson may contain and how long each block's text must be.
The JSON schema sent to the generation service is assembled from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from coachlab.lessons.config import DetailLevel, EnhancedLessonConfig
from coachlab.lessons.schemas import (
    LESSON_PART_COUNT,
    BlockDifficulty,
    BlockIntensity,
    ContentBlockType,
    LessonLevel,
)


@dataclass(frozen=True)
class LessonSchemaBounds:
    min_sections: int
    max_sections: int
    min_content_blocks: int
    max_content_blocks: int
    min_block_text_length: int


DETAIL_LEVEL_BOUNDS: dict[DetailLevel, LessonSchemaBounds] = {
    DetailLevel.COMPREHENSIVE: LessonSchemaBounds(
        min_sections=4,
        max_sections=6,
        min_content_blocks=10,
        max_content_blocks=20,
        min_block_text_length=40,
    ),
    DetailLevel.EXPERT: LessonSchemaBounds(
        min_sections=5,
        max_sections=8,
        min_content_blocks=12,
        max_content_blocks=25,
        min_block_text_length=60,
    ),
    DetailLevel.MASTERCLASS: LessonSchemaBounds(
        min_sections=6,
        max_sections=10,
        min_content_blocks=15,
        max_content_blocks=30,
        min_block_text_length=80,
    ),
}


def bounds_for(detail_level: DetailLevel | str) -> LessonSchemaBounds:
    """Get structural bounds for a detail level."""
    return DETAIL_LEVEL_BOUNDS[DetailLevel(detail_level)]


def _string(description: str, min_length: int | None = None, enum: list[str] | None = None) -> dict[str, Any]:
    prop: dict[str, Any] = {"type": "string", "description": description}
    if min_length is not None:
        prop["minLength"] = min_length
    if enum is not None:
        prop["enum"] = enum
    return prop


def _array(items: dict[str, Any], min_items: int, max_items: int) -> dict[str, Any]:
    return {"type": "array", "minItems": min_items, "maxItems": max_items, "items": items}


def _object(properties: dict[str, Any], required: list[str]) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": required,
        "propertyOrdering": list(properties),
    }


def _content_block_schema(bounds: LessonSchemaBounds) -> dict[str, Any]:
    return _object(
        {
            "type": _string(
                "Type of content - use technique_step for detailed execution steps, "
                "biomechanical_analysis for scientific explanation",
                enum=[kind.value for kind in ContentBlockType],
            ),
            "text": _string(
                "DETAILED content text. For techniques include precise execution details. "
                "For exercises include exact timing/reps. For analysis include scientific principles.",
                min_length=bounds.min_block_text_length,
            ),
            "level": {
                "type": "integer",
                "minimum": 1,
                "maximum": 4,
                "description": "Heading level (1-4, only for heading type)",
            },
            "duration": _string("Specific time duration for exercises (e.g., '3 minutes', '8-10 reps', '45 seconds')"),
            "difficulty": _string(
                "Specific difficulty level for this element",
                enum=[difficulty.value for difficulty in BlockDifficulty],
            ),
            "intensity": _string(
                "Training intensity level for exercises and drills",
                enum=[intensity.value for intensity in BlockIntensity],
            ),
            "focus_area": _string("Primary focus area (e.g., 'hip mechanics', 'grip positioning', 'timing development')"),
        },
        required=["type", "text"],
    )


def build_response_schema(config: EnhancedLessonConfig) -> dict[str, Any]:
    """Build the JSON schema describing a LessonPlan for the given config.

    Args:
        config: Generation config; only detail_level affects the schema

    Returns:
        JSON schema dict (fresh object on every call)
    """
    bounds = bounds_for(config.detail_level)

    section_schema = _object(
        {
            "sectionTitle": _string(
                "Specific and descriptive section title (e.g., 'Biomechanical Analysis', "
                "'Progressive Drilling Sequence', 'Advanced Troubleshooting')",
                min_length=8,
            ),
            "content": _array(
                _content_block_schema(bounds),
                min_items=bounds.min_content_blocks,
                max_items=bounds.max_content_blocks,
            ),
        },
        required=["sectionTitle", "content"],
    )

    part_schema = _object(
        {
            "partTitle": _string("Descriptive title of this lesson part with clear focus indication", min_length=10),
            "description": _string(
                "Comprehensive description of this part's purpose, methodology, and learning outcomes",
                min_length=40,
            ),
            "duration": _string("Duration for this part"),
            "sections": _array(section_schema, min_items=bounds.min_sections, max_items=bounds.max_sections),
        },
        required=["partTitle", "description", "duration", "sections"],
    )

    return _object(
        {
            "title": _string("Comprehensive and descriptive lesson title", min_length=10),
            "objective": _string(
                "Detailed learning objective with measurable outcomes and skill development goals",
                min_length=50,
            ),
            "duration": _string("Total lesson duration"),
            "sport": _string("Sport being taught"),
            "level": _string("Skill level", enum=[level.value for level in LessonLevel]),
            "parts": _array(part_schema, min_items=LESSON_PART_COUNT, max_items=LESSON_PART_COUNT),
        },
        required=["title", "objective", "duration", "sport", "level", "parts"],
    )
