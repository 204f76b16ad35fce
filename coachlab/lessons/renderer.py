"""Markdown rendering for lesson plans.

Turns a LessonPlan into one formatted text document: a bordered header, the
objective, one block per part and section, boxed callouts for the structured
block kinds, and a closing footer. Rendering is presentational only: every
content block appears in the output, in input order.
"""

from __future__ import annotations

import textwrap
from collections.abc import Iterable

from coachlab.lessons.schemas import (
    INSTRUCTOR_NOTES_LABEL,
    ContentBlock,
    ContentBlockType,
    LessonPart,
    LessonPlan,
    LessonSection,
)

BOX_WIDTH = 60
BOX_INNER_WIDTH = BOX_WIDTH - 4

INSTRUCTOR_NOTES_MARKER = "INSTRUCTOR'S DETAILED TECHNIQUE NOTES"
KEY_POINTS_MARKER = "**KEY POINTS:**"

CALLOUT_MARKERS: dict[str, str] = {
    ContentBlockType.EXERCISE: "EXERCISE",
    ContentBlockType.SAFETY_NOTE: "SAFETY NOTE",
    ContentBlockType.TECHNIQUE_STEP: "TECHNIQUE STEP",
    ContentBlockType.COACHING_CUE: "COACHING CUE",
    ContentBlockType.COMMON_MISTAKE: "COMMON MISTAKE",
    ContentBlockType.BIOMECHANICAL_ANALYSIS: "BIOMECHANICAL ANALYSIS",
    ContentBlockType.PROGRESSION_DRILL: "PROGRESSION DRILL",
    ContentBlockType.ASSESSMENT_CRITERIA: "ASSESSMENT CRITERIA",
}

_SEPARATOR = "━" * BOX_WIDTH


def wrap_text(text: str, width: int = BOX_INNER_WIDTH) -> list[str]:
    """Word-wrap text, keeping explicit line breaks.

    Words are never split unless a single token is wider than the line, in
    which case it continues on the next line.
    """
    lines: list[str] = []
    for paragraph in text.split("\n"):
        wrapped = textwrap.wrap(paragraph, width=width, break_long_words=True, break_on_hyphens=False)
        lines.extend(wrapped or [""])
    return lines


def _box(label: str, lines: Iterable[str]) -> list[str]:
    top = f"┌─ {label} " + "─" * max(BOX_WIDTH - len(label) - 5, 0) + "┐"
    body = [f"│ {line.ljust(BOX_INNER_WIDTH)} │" for line in lines]
    bottom = "└" + "─" * (BOX_WIDTH - 2) + "┘"
    return [top, *body, bottom]


def _double_box(lines: Iterable[str]) -> list[str]:
    top = "╔" + "═" * (BOX_WIDTH - 2) + "╗"
    body = [f"║ {line.ljust(BOX_INNER_WIDTH)} ║" for line in lines]
    bottom = "╚" + "═" * (BOX_WIDTH - 2) + "╝"
    return [top, *body, bottom]


def _metadata_lines(block: ContentBlock) -> list[str]:
    metadata = (
        ("Duration", block.duration),
        ("Difficulty", block.difficulty),
        ("Intensity", block.intensity),
        ("Focus", block.focus_area),
    )
    lines: list[str] = []
    for label, value in metadata:
        if value:
            lines.extend(wrap_text(f"{label}: {value}"))
    return lines


def _render_callout(block: ContentBlock, marker: str) -> list[str]:
    lines = wrap_text(block.text)
    metadata = _metadata_lines(block)
    if metadata:
        lines.append("")
        lines.extend(metadata)
    return [*_box(marker, lines), ""]


def _render_heading(block: ContentBlock) -> list[str]:
    level = block.level or 1
    return ["#" * min(level + 3, 6) + " " + block.text, ""]


def _render_paragraph(block: ContentBlock) -> list[str]:
    if block.text.startswith(INSTRUCTOR_NOTES_LABEL):
        notes = block.text[len(INSTRUCTOR_NOTES_LABEL):].lstrip("\n")
        return [*_box(INSTRUCTOR_NOTES_MARKER, wrap_text(notes)), ""]
    return [block.text, ""]


def _render_key_points(items: list[ContentBlock]) -> list[str]:
    lines = [KEY_POINTS_MARKER]
    lines.extend(f"{index}. {item.text}" for index, item in enumerate(items, start=1))
    lines.append("")
    return lines


def render_block(block: ContentBlock) -> list[str]:
    """Render one non-list content block; unknown kinds render as paragraphs."""
    marker = CALLOUT_MARKERS.get(block.type)
    if marker is not None:
        return _render_callout(block, marker)
    if block.type == ContentBlockType.HEADING:
        return _render_heading(block)
    return _render_paragraph(block)


def _render_section(section: LessonSection) -> list[str]:
    lines = [f"### {section.section_title}", ""]
    pending_items: list[ContentBlock] = []
    for block in section.content:
        if block.type == ContentBlockType.LIST_ITEM:
            pending_items.append(block)
            continue
        if pending_items:
            lines.extend(_render_key_points(pending_items))
            pending_items = []
        lines.extend(render_block(block))
    if pending_items:
        lines.extend(_render_key_points(pending_items))
    return lines


def _render_part(part: LessonPart) -> list[str]:
    lines = [
        f"## {part.part_title.upper()}",
        "",
        f"**Duration:** {part.duration}",
        "",
        f"**Overview:** {part.description}",
        "",
    ]
    for section in part.sections:
        lines.extend(_render_section(section))
    return lines


def _render_header(plan: LessonPlan) -> list[str]:
    header = wrap_text(plan.title.upper())
    header.append("")
    header.extend(wrap_text(f"Sport: {plan.sport}"))
    header.extend(wrap_text(f"Level: {plan.level.value.capitalize()}"))
    header.extend(wrap_text(f"Duration: {plan.duration}"))
    return [*_double_box(header), ""]


def _render_footer(plan: LessonPlan) -> list[str]:
    footer = [
        "END OF LESSON",
        "",
        *wrap_text(f"{len(plan.parts)} parts | {plan.block_count} content blocks"),
        *wrap_text("Review the key points and coaching cues before the next session."),
    ]
    return _double_box(footer)


def render_lesson_markdown(plan: LessonPlan) -> str:
    """Render a lesson plan as a formatted markdown document.

    Args:
        plan: Lesson plan to render

    Returns:
        Markdown text ending with a newline
    """
    lines = _render_header(plan)
    lines.extend(["## LESSON OBJECTIVE", "", plan.objective, ""])

    for part in plan.parts:
        lines.extend([_SEPARATOR, ""])
        lines.extend(_render_part(part))

    lines.extend([_SEPARATOR, ""])
    lines.extend(_render_footer(plan))
    return "\n".join(lines) + "\n"
