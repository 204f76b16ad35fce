"""Tests for fallback lesson generation (no network).

Tests verify that the fallback generator:
- Always returns exactly four parts
- Includes the topic verbatim in the title and block texts
- Embeds instructor notes verbatim
- Is deterministic
- Splits the lesson duration across parts
"""

import re

import pytest

from coachlab.lessons.fallback import (
    DEFAULT_DURATION_MINUTES,
    MIN_LESSON_MINUTES,
    generate_fallback_lesson,
    parse_duration_minutes,
    split_duration,
)
from coachlab.lessons.schemas import INSTRUCTOR_NOTES_LABEL, ContentBlockType, LessonLevel, LessonPlan
from coachlab.lessons.sport_content import get_sport_content, has_sport_content, normalize_sport_name

SPORTS = ["bjj", "Wrestling", "Boxing", "mma", "Baseball", "Basketball", "Football", "Soccer", "Curling"]


def test_hip_escape_scenario() -> None:
    """Test the reference fallback scenario."""
    plan = generate_fallback_lesson("Hip Escape Fundamentals", "Brazilian Jiu-Jitsu", "beginner", "45 minutes")

    assert "Hip Escape Fundamentals" in plan.title
    assert len(plan.parts) == 4
    assert plan.level == LessonLevel.BEGINNER
    assert plan.duration == "45 minutes"


@pytest.mark.parametrize("sport", SPORTS)
@pytest.mark.parametrize("level", list(LessonLevel))
def test_four_parts_and_topic_in_blocks(sport: str, level: LessonLevel) -> None:
    """Test structure and topic fidelity for every sport table and level."""
    topic = "Pressure Passing"
    plan = generate_fallback_lesson(topic, sport, level, "60 minutes")

    assert len(plan.parts) == 4
    assert any(topic in block.text for block in plan.iter_blocks())
    assert all(part.sections for part in plan.parts)


def test_title_uses_display_sport_name() -> None:
    """Test that sport aliases are normalized in the title and sport field."""
    plan = generate_fallback_lesson("Hip Escape Fundamentals", "bjj", "beginner", "45 minutes")

    assert plan.title == "Brazilian Jiu-Jitsu: Hip Escape Fundamentals"
    assert plan.sport == "Brazilian Jiu-Jitsu"


def test_instructor_notes_embedded_verbatim() -> None:
    """Test that notes appear unchanged in exactly one labeled paragraph block."""
    notes = "Frame on the hip first.\n  Then shrimp, and bring the knee through!"
    plan = generate_fallback_lesson("Hip Escape Fundamentals", "bjj", "beginner", "45 minutes", notes)

    note_blocks = [block for block in plan.iter_blocks() if notes in block.text]
    assert len(note_blocks) == 1
    assert note_blocks[0].type == ContentBlockType.PARAGRAPH
    assert note_blocks[0].text == f"{INSTRUCTOR_NOTES_LABEL}\n{notes}"


@pytest.mark.parametrize("notes", [None, "", "   "])
def test_blank_notes_add_no_block(notes: str | None) -> None:
    """Test that missing notes do not add an instructor notes block."""
    plan = generate_fallback_lesson("Jab", "Boxing", "beginner", "30 minutes", notes)
    assert not any(block.text.startswith(INSTRUCTOR_NOTES_LABEL) for block in plan.iter_blocks())


def test_output_is_deterministic() -> None:
    """Test that identical inputs give identical plans."""
    args = ("Double Leg Takedown", "Wrestling", "advanced", "75 minutes", "Level change before the step.")
    assert generate_fallback_lesson(*args).to_wire() == generate_fallback_lesson(*args).to_wire()


def test_part_durations_sum_to_total() -> None:
    """Test that part durations add up to the lesson duration."""
    plan = generate_fallback_lesson("Jab", "Boxing", "intermediate", "45 minutes")
    minutes = [int(re.match(r"\d+", part.duration).group()) for part in plan.parts]

    assert sum(minutes) == 45


def test_level_changes_drill_intensity() -> None:
    """Test that drilling prescriptions depend on the athlete level."""
    beginner = generate_fallback_lesson("Jab", "Boxing", "beginner", "45 minutes")
    advanced = generate_fallback_lesson("Jab", "Boxing", "advanced", "45 minutes")

    beginner_drills = [block for block in beginner.iter_blocks() if block.type == ContentBlockType.PROGRESSION_DRILL]
    advanced_drills = [block for block in advanced.iter_blocks() if block.type == ContentBlockType.PROGRESSION_DRILL]
    assert beginner_drills[0].text != advanced_drills[0].text
    assert beginner_drills[-1].intensity == "low"
    assert advanced_drills[-1].intensity == "high"


def test_level_is_case_insensitive() -> None:
    """Test that level strings are matched case-insensitively."""
    plan = generate_fallback_lesson("Jab", "Boxing", "Advanced", "45 minutes")
    assert plan.level == LessonLevel.ADVANCED


def test_plan_round_trips_through_wire_format() -> None:
    """Test that a fallback plan survives JSON storage."""
    plan = generate_fallback_lesson("Hip Escape Fundamentals", "bjj", "beginner", "45 minutes", "Notes")
    restored = LessonPlan.model_validate_json(plan.model_dump_json(by_alias=True, exclude_none=True))

    assert restored.to_wire() == plan.to_wire()


def test_topic_with_braces_is_kept() -> None:
    """Test that templated text does not reinterpret braces in the topic."""
    plan = generate_fallback_lesson("Guard {Retention}", "bjj", "beginner", "45 minutes")
    assert any("Guard {Retention}" in block.text for block in plan.iter_blocks())


@pytest.mark.parametrize(
    ("duration", "expected"),
    [
        ("45 minutes", 45),
        ("90 min", 90),
        ("1 hour", 60),
        ("1.5 hours", 90),
        ("1 hour 30", 90),
        ("1 hour 30 minutes", 90),
        ("2h", 120),
        ("1h15", 75),
        ("2 minutes", MIN_LESSON_MINUTES),
        ("about an hour", DEFAULT_DURATION_MINUTES),
        ("", DEFAULT_DURATION_MINUTES),
        ("0 minutes", DEFAULT_DURATION_MINUTES),
    ],
)
def test_parse_duration_minutes(duration: str, expected: int) -> None:
    """Test that hours and minutes are read, with a default when there is no number."""
    assert parse_duration_minutes(duration) == expected


@pytest.mark.parametrize("total", [4, 5, 7, 30, 45, 60, 91])
def test_split_duration_sums_to_total(total: int) -> None:
    """Test that the four-part split always sums to the total with no empty part."""
    parts = split_duration(total)

    assert sum(parts) == total
    assert min(parts) >= 1


def test_split_duration_rejects_too_short_lesson() -> None:
    """Test that a total below one minute per part is rejected."""
    with pytest.raises(ValueError):
        split_duration(MIN_LESSON_MINUTES - 1)


@pytest.mark.parametrize(
    ("duration", "total"),
    [("1 hour", 60), ("1 hour 30", 90), ("5 minutes", 5)],
)
def test_part_durations_are_never_empty(duration: str, total: int) -> None:
    """Test that every part gets time and the parts add up for hour and short durations."""
    plan = generate_fallback_lesson("Hip Escape", "bjj", "beginner", duration)
    part_durations = [part.duration for part in plan.parts]

    assert "0 minutes" not in part_durations
    assert sum(int(re.match(r"\d+", value).group()) for value in part_durations) == total
    assert plan.duration == duration


def test_normalize_sport_name() -> None:
    """Test alias normalization and pass-through for unknown sports."""
    assert normalize_sport_name("bjj") == "Brazilian Jiu-Jitsu"
    assert normalize_sport_name(" MMA ") == "MMA"
    assert normalize_sport_name("american football") == "Football"
    assert normalize_sport_name("Curling") == "Curling"


def test_unknown_sport_uses_generic_content() -> None:
    """Test that sports without a table get the generic template."""
    assert not has_sport_content("Curling")
    assert has_sport_content("bjj")
    assert get_sport_content("Curling") == get_sport_content("Underwater Hockey")
    assert get_sport_content("bjj") != get_sport_content("Curling")
