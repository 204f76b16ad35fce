"""Lesson plan schema.

Immutable pydantic models for the structured lesson the generation service
must produce. Field aliases match the wire format (partTitle, sectionTitle),
so a LessonPlan parses straight from the model output and serializes back to
the same shape for storage.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

LESSON_PART_COUNT = 4

# Prefix of the paragraph block that carries instructor notes verbatim
INSTRUCTOR_NOTES_LABEL = "Instructor's Detailed Technique Notes:"


class LessonLevel(StrEnum):
    """Athlete skill level a lesson is written for."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class BlockDifficulty(StrEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class BlockIntensity(StrEnum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VARIABLE = "variable"


class ContentBlockType(StrEnum):
    """Known content block kinds."""

    PARAGRAPH = "paragraph"
    LIST_ITEM = "list_item"
    HEADING = "heading"
    EXERCISE = "exercise"
    SAFETY_NOTE = "safety_note"
    TECHNIQUE_STEP = "technique_step"
    COACHING_CUE = "coaching_cue"
    COMMON_MISTAKE = "common_mistake"
    BIOMECHANICAL_ANALYSIS = "biomechanical_analysis"
    PROGRESSION_DRILL = "progression_drill"
    ASSESSMENT_CRITERIA = "assessment_criteria"


class _LessonModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ContentBlock(_LessonModel):
    """Smallest unit of lesson content.

    type is kept as a plain string: unknown kinds are accepted here and
    rendered as paragraphs downstream.
    """

    type: str = Field(min_length=1, description="Content block kind, normally a ContentBlockType value")
    text: str = Field(min_length=1, description="Block text")
    level: int | None = Field(default=None, ge=1, le=4, description="Heading level (headings only)")
    duration: str | None = Field(default=None, description="Time or rep prescription, e.g. '2 minutes'")
    difficulty: BlockDifficulty | None = Field(default=None, description="Difficulty of this element")
    intensity: BlockIntensity | None = Field(default=None, description="Training intensity of this element")
    focus_area: str | None = Field(default=None, description="Primary focus, e.g. 'hip mechanics'")


class LessonSection(_LessonModel):
    section_title: str = Field(alias="sectionTitle", min_length=1, description="Section title")
    content: tuple[ContentBlock, ...] = Field(min_length=1, description="Ordered content blocks")


class LessonPart(_LessonModel):
    part_title: str = Field(alias="partTitle", min_length=1, description="Part title")
    description: str = Field(description="Purpose of this part")
    duration: str = Field(description="Duration of this part")
    sections: tuple[LessonSection, ...] = Field(min_length=1, description="Ordered sections")


class LessonPlan(_LessonModel):
    """Complete lesson plan: always exactly four parts.

    Parts run warm-up, technical instruction, practice, application/recovery.
    """

    title: str = Field(min_length=1, description="Lesson title")
    objective: str = Field(min_length=1, description="Learning objective")
    duration: str = Field(description="Total lesson duration, free-form")
    sport: str = Field(description="Sport being taught")
    level: LessonLevel = Field(description="Skill level")
    parts: tuple[LessonPart, ...] = Field(
        min_length=LESSON_PART_COUNT,
        max_length=LESSON_PART_COUNT,
        description="The four lesson phases in order",
    )

    def iter_blocks(self):
        """Yield every content block in document order."""
        for part in self.parts:
            for section in part.sections:
                yield from section.content

    @property
    def block_count(self) -> int:
        return sum(1 for _ in self.iter_blocks())

    def to_wire(self) -> dict:
        """Serialize with wire field names, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
