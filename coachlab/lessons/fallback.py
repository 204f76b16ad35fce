"""Fallback lesson generation.

Deterministic, network-free lesson generation used when the generation
service fails or is disabled. Produces a complete four-part LessonPlan from
hand-authored templates with the caller's topic, sport, level and duration
substituted in.
"""

import re
from dataclasses import dataclass

from loguru import logger

from coachlab.lessons.schemas import (
    INSTRUCTOR_NOTES_LABEL,
    BlockDifficulty,
    BlockIntensity,
    ContentBlock,
    ContentBlockType,
    LessonLevel,
    LessonPart,
    LessonPlan,
    LessonSection,
)
from coachlab.lessons.sport_content import SportContent, get_sport_content, has_sport_content, normalize_sport_name

DEFAULT_DURATION_MINUTES = 60

# One minute per part
MIN_LESSON_MINUTES = 4

_HOURS_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*(?:hours?|hrs?|h)(?![a-z])", re.IGNORECASE)
_NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?")

# Share of the total lesson time per part, in percent
_PART_SHARES = (15, 40, 30, 15)


@dataclass(frozen=True)
class _DrillProfile:
    resistance: str
    repetitions: str
    rounds: str
    intensity: BlockIntensity
    difficulty: BlockDifficulty


_DRILL_PROFILES: dict[LessonLevel, _DrillProfile] = {
    LessonLevel.BEGINNER: _DrillProfile(
        resistance="a fully cooperative partner",
        repetitions="10 slow repetitions each side",
        rounds="3 rounds of 1 minute",
        intensity=BlockIntensity.LOW,
        difficulty=BlockDifficulty.BEGINNER,
    ),
    LessonLevel.INTERMEDIATE: _DrillProfile(
        resistance="progressive partner resistance from 25% to 50%",
        repetitions="12 repetitions each side at game speed",
        rounds="4 rounds of 2 minutes",
        intensity=BlockIntensity.MODERATE,
        difficulty=BlockDifficulty.INTERMEDIATE,
    ),
    LessonLevel.ADVANCED: _DrillProfile(
        resistance="live partner resistance at 75% to 100%",
        repetitions="15 repetitions each side chained with a follow-up",
        rounds="5 rounds of 3 minutes",
        intensity=BlockIntensity.HIGH,
        difficulty=BlockDifficulty.ADVANCED,
    ),
}


def parse_duration_minutes(duration: str) -> int:
    """Extract total minutes from a free-form duration.

    Hours are converted to minutes, and a bare number after an hour count is
    read as extra minutes ("1 hour 30" is 90). Without an hour unit the first
    number is taken as minutes.

    Args:
        duration: Free-form duration (e.g., "45 minutes", "1.5 hours", "1 hour 30")

    Returns:
        Total minutes, at least MIN_LESSON_MINUTES, or DEFAULT_DURATION_MINUTES
        when no number is found or it is zero
    """
    text = duration or ""
    hours = _HOURS_PATTERN.search(text)
    if hours is not None:
        minutes = round(float(hours.group(1)) * 60)
        extra = _NUMBER_PATTERN.search(text, hours.end())
        if extra is not None:
            minutes += round(float(extra.group()))
    else:
        number = _NUMBER_PATTERN.search(text)
        minutes = round(float(number.group())) if number is not None else 0

    if minutes <= 0:
        return DEFAULT_DURATION_MINUTES
    return max(minutes, MIN_LESSON_MINUTES)


def split_duration(total_minutes: int) -> tuple[int, int, int, int]:
    """Split total minutes across the four parts.

    Every part gets at least one minute and the parts always sum to the total;
    technical instruction absorbs the difference.

    Raises:
        ValueError: If total_minutes is smaller than MIN_LESSON_MINUTES
    """
    if total_minutes < MIN_LESSON_MINUTES:
        raise ValueError(f"Lesson needs at least {MIN_LESSON_MINUTES} minutes, got {total_minutes}")
    minutes = [max(total_minutes * share // 100, 1) for share in _PART_SHARES]
    minutes[1] = total_minutes - (minutes[0] + minutes[2] + minutes[3])
    return minutes[0], minutes[1], minutes[2], minutes[3]


def _block(kind: ContentBlockType, text: str, **metadata: object) -> ContentBlock:
    return ContentBlock(type=kind.value, text=text, **metadata)


def _warmup_part(topic: str, sport: str, content: SportContent, minutes: int) -> LessonPart:
    warmup_blocks = [
        _block(
            ContentBlockType.PARAGRAPH,
            f"Today's focus is {topic}. This warm-up prepares the joints, muscles and movement patterns "
            f"that {topic} depends on, so every drill later in the session starts from a ready body.",
        ),
    ]
    warmup_blocks.extend(
        _block(
            ContentBlockType.EXERCISE,
            item.format(topic=topic),
            intensity=BlockIntensity.LOW,
            focus_area="movement preparation",
        )
        for item in content.warmup
    )
    warmup_blocks.append(
        _block(
            ContentBlockType.SAFETY_NOTE,
            "Always warm up before technical work. Stop any exercise that causes sharp pain and tell the "
            "coach about previous injuries before drilling starts.",
        )
    )

    setup_blocks = [
        _block(
            ContentBlockType.COACHING_CUE,
            f"Move with intent: every warm-up repetition should look like the opening of {topic}.",
            focus_area="movement quality",
        ),
    ]
    setup_blocks.extend(_block(ContentBlockType.LIST_ITEM, item.format(topic=topic)) for item in content.setup)

    return LessonPart(
        part_title="Part 1: Warm-up and Movement Preparation",
        description=(
            f"Raise body temperature and rehearse the {sport} movement patterns used in {topic}, "
            "so athletes start technical work focused and injury-resistant."
        ),
        duration=f"{minutes} minutes",
        sections=(
            LessonSection(section_title="Dynamic Warm-up", content=tuple(warmup_blocks)),
            LessonSection(section_title=f"Setup Checklist for {topic}", content=tuple(setup_blocks)),
        ),
    )


def _technique_part(
    topic: str,
    sport: str,
    level: LessonLevel,
    content: SportContent,
    minutes: int,
    detailed_instructions: str | None,
) -> LessonPart:
    profile = _DRILL_PROFILES[level]
    breakdown = (
        _block(ContentBlockType.HEADING, f"Technique Breakdown: {topic}", level=2),
        _block(
            ContentBlockType.TECHNIQUE_STEP,
            "Step 1, initial position: " + content.initial_movement.format(topic=topic),
            difficulty=profile.difficulty,
            focus_area="positioning",
        ),
        _block(
            ContentBlockType.TECHNIQUE_STEP,
            "Step 2, reading the moment: " + content.transition.format(topic=topic),
            difficulty=profile.difficulty,
            focus_area="timing",
        ),
        _block(
            ContentBlockType.TECHNIQUE_STEP,
            "Step 3, applying force: " + content.force_application.format(topic=topic),
            difficulty=profile.difficulty,
            focus_area="power generation",
        ),
        _block(
            ContentBlockType.TECHNIQUE_STEP,
            "Step 4, follow-through: " + content.follow_through.format(topic=topic),
            difficulty=profile.difficulty,
            focus_area="control",
        ),
        _block(
            ContentBlockType.BIOMECHANICAL_ANALYSIS,
            f"Efficient {topic} transfers force from the ground through the hips and trunk before the limbs "
            "finish the movement. A stable base shortens the lever the opponent can use against you, and "
            "keeping the spine neutral lets the large muscle groups do the work.",
            focus_area="kinetic chain",
        ),
    )

    mistakes = [
        _block(
            ContentBlockType.COMMON_MISTAKE,
            f"{mistake}. Correction: {correction}.",
            focus_area="error correction",
        )
        for mistake, correction in content.common_mistakes
    ]
    mistakes.append(
        _block(
            ContentBlockType.COACHING_CUE,
            f"Slow is smooth: perform {topic} at half speed until the positions are correct, then add speed.",
        )
    )

    sections = [
        LessonSection(section_title="Step-by-Step Technique", content=breakdown),
        LessonSection(section_title="Common Mistakes and Corrections", content=tuple(mistakes)),
    ]
    if detailed_instructions and detailed_instructions.strip():
        sections.append(
            LessonSection(
                section_title="Instructor's Technique Notes",
                content=(
                    _block(ContentBlockType.PARAGRAPH, f"{INSTRUCTOR_NOTES_LABEL}\n{detailed_instructions}"),
                ),
            )
        )

    return LessonPart(
        part_title="Part 2: Technical Instruction",
        description=(
            f"Break {topic} into its key phases with {sport}-specific positioning, timing and force "
            "application, and correct the errors athletes make most often."
        ),
        duration=f"{minutes} minutes",
        sections=tuple(sections),
    )


def _practice_part(topic: str, level: LessonLevel, minutes: int) -> LessonPart:
    profile = _DRILL_PROFILES[level]
    progression = (
        _block(
            ContentBlockType.PROGRESSION_DRILL,
            f"Stage 1, isolated repetition: drill {topic} against {profile.resistance}, "
            f"{profile.repetitions}, pausing at each phase to check position.",
            duration="5 minutes",
            intensity=BlockIntensity.LOW,
            difficulty=profile.difficulty,
        ),
        _block(
            ContentBlockType.PROGRESSION_DRILL,
            f"Stage 2, flow drilling: link the setup and {topic} into one continuous movement, "
            "switching sides every repetition.",
            duration="5 minutes",
            intensity=BlockIntensity.MODERATE,
            difficulty=profile.difficulty,
        ),
        _block(
            ContentBlockType.PROGRESSION_DRILL,
            f"Stage 3, reaction drilling: the partner gives a cue and you respond with {topic} immediately.",
            duration="5 minutes",
            intensity=profile.intensity,
            difficulty=profile.difficulty,
        ),
    )
    partner = (
        _block(
            ContentBlockType.EXERCISE,
            f"Partner practice: {profile.rounds} working {topic} from the starting position, "
            "resetting after each successful repetition.",
            duration=profile.rounds,
            intensity=profile.intensity,
            focus_area="application under resistance",
        ),
        _block(
            ContentBlockType.COACHING_CUE,
            "Partners give feedback after every round: one thing that worked and one thing to fix.",
        ),
        _block(
            ContentBlockType.SAFETY_NOTE,
            "Control the speed of every repetition and release immediately when your partner taps or calls stop.",
        ),
    )
    return LessonPart(
        part_title="Part 3: Progressive Practice",
        description=(
            f"Build {topic} from isolated repetitions to resisted partner work, "
            f"matched to a {level.value} level of intensity."
        ),
        duration=f"{minutes} minutes",
        sections=(
            LessonSection(section_title="Progressive Drilling Sequence", content=progression),
            LessonSection(section_title="Partner Practice", content=partner),
        ),
    )


def _application_part(topic: str, sport: str, level: LessonLevel, minutes: int) -> LessonPart:
    profile = _DRILL_PROFILES[level]
    application = (
        _block(
            ContentBlockType.EXERCISE,
            f"Situational sparring: start each round in the position that sets up {topic} "
            f"and work {profile.rounds} with the goal of applying it.",
            duration=profile.rounds,
            intensity=profile.intensity,
            focus_area="live application",
        ),
        _block(
            ContentBlockType.ASSESSMENT_CRITERIA,
            f"Athlete sets up {topic} from a balanced base without telegraphing the movement.",
        ),
        _block(
            ContentBlockType.ASSESSMENT_CRITERIA,
            f"Athlete completes {topic} and finishes in a controlled position at least 3 times out of 5.",
        ),
    )
    review = (
        _block(
            ContentBlockType.EXERCISE,
            "Cool-down: light movement followed by static stretches for hips, shoulders and back, "
            "30 seconds per stretch.",
            duration="5 minutes",
            intensity=BlockIntensity.LOW,
        ),
        _block(
            ContentBlockType.PARAGRAPH,
            f"Review: summarize the key phases of {topic}, the most common mistake seen today, "
            f"and where it fits in a {sport} match or game.",
        ),
        _block(ContentBlockType.LIST_ITEM, f"Visualize {topic} for 5 minutes before the next session"),
        _block(ContentBlockType.LIST_ITEM, "Note one question about today's technique to bring to the next class"),
        _block(ContentBlockType.LIST_ITEM, "Hydrate and prioritize sleep for recovery"),
    )
    return LessonPart(
        part_title="Part 4: Live Application and Recovery",
        description=(
            f"Apply {topic} in live situations, assess progress against clear criteria, "
            "and finish with a structured cool-down and review."
        ),
        duration=f"{minutes} minutes",
        sections=(
            LessonSection(section_title="Live Application", content=application),
            LessonSection(section_title="Cool-down and Review", content=review),
        ),
    )


def generate_fallback_lesson(
    topic: str,
    sport: str,
    level: LessonLevel | str,
    duration: str,
    detailed_instructions: str | None = None,
) -> LessonPlan:
    """Generate a complete lesson plan without calling any external service.

    Output is fully deterministic for fixed inputs. The topic appears verbatim
    in the title and in block texts; instructor notes, when provided, are
    embedded verbatim in one paragraph block prefixed with
    INSTRUCTOR_NOTES_LABEL.

    Args:
        topic: Lesson topic
        sport: Sport name or alias (e.g., 'bjj')
        level: Athlete level
        duration: Free-form total duration (e.g., "45 minutes")
        detailed_instructions: Optional instructor notes

    Returns:
        LessonPlan with exactly four parts
    """
    lesson_level = LessonLevel(str(level).lower())
    display_sport = normalize_sport_name(sport)
    content = get_sport_content(display_sport)
    warmup_min, technique_min, practice_min, application_min = split_duration(parse_duration_minutes(duration))

    logger.info(
        "Generating fallback lesson",
        sport=display_sport,
        level=lesson_level.value,
        sport_specific=has_sport_content(display_sport),
        has_instructor_notes=bool(detailed_instructions and detailed_instructions.strip()),
    )

    plan = LessonPlan(
        title=f"{display_sport}: {topic}",
        objective=(
            f"Athletes will understand and perform {topic} with correct positioning, timing and control, "
            f"apply it against {_DRILL_PROFILES[lesson_level].resistance}, and identify and correct the most "
            f"common errors at a {lesson_level.value} level."
        ),
        duration=duration,
        sport=display_sport,
        level=lesson_level,
        parts=(
            _warmup_part(topic, display_sport, content, warmup_min),
            _technique_part(topic, display_sport, lesson_level, content, technique_min, detailed_instructions),
            _practice_part(topic, lesson_level, practice_min),
            _application_part(topic, display_sport, lesson_level, application_min),
        ),
    )
    logger.debug("Fallback lesson generated", blocks=plan.block_count)
    return plan
