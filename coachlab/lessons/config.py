"""Lesson generation configuration presets.

EnhancedLessonConfig is never persisted: it only shapes the prompt and the
response schema sent to the generation service. Presets are ordered so each
one raises the word target and adds content categories on top of the
previous one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class DetailLevel(StrEnum):
    """Named detail presets, in increasing order."""

    COMPREHENSIVE = "comprehensive"
    EXPERT = "expert"
    MASTERCLASS = "masterclass"


DETAIL_LEVEL_ORDER: tuple[DetailLevel, ...] = (
    DetailLevel.COMPREHENSIVE,
    DetailLevel.EXPERT,
    DetailLevel.MASTERCLASS,
)


@dataclass(frozen=True)
class EnhancedLessonConfig:
    detail_level: DetailLevel
    word_target_minimum: int
    include_competition_application: bool = False
    include_physiology_explanations: bool = False
    include_troubleshooting_guides: bool = False
    include_advanced_variations: bool = False
    include_recovery_protocols: bool = False
    include_mental_training_aspects: bool = False

    def included_categories(self) -> tuple[str, ...]:
        """Names of the optional content categories this config requests."""
        flags = (
            ("competition_application", self.include_competition_application),
            ("physiology", self.include_physiology_explanations),
            ("troubleshooting", self.include_troubleshooting_guides),
            ("advanced_variations", self.include_advanced_variations),
            ("recovery", self.include_recovery_protocols),
            ("mental_training", self.include_mental_training_aspects),
        )
        return tuple(name for name, enabled in flags if enabled)


def comprehensive_config() -> EnhancedLessonConfig:
    return EnhancedLessonConfig(
        detail_level=DetailLevel.COMPREHENSIVE,
        word_target_minimum=2500,
        include_physiology_explanations=True,
        include_troubleshooting_guides=True,
    )


def expert_config() -> EnhancedLessonConfig:
    return EnhancedLessonConfig(
        detail_level=DetailLevel.EXPERT,
        word_target_minimum=3000,
        include_competition_application=True,
        include_physiology_explanations=True,
        include_troubleshooting_guides=True,
        include_advanced_variations=True,
    )


def masterclass_config() -> EnhancedLessonConfig:
    return EnhancedLessonConfig(
        detail_level=DetailLevel.MASTERCLASS,
        word_target_minimum=4000,
        include_competition_application=True,
        include_physiology_explanations=True,
        include_troubleshooting_guides=True,
        include_advanced_variations=True,
        include_recovery_protocols=True,
        include_mental_training_aspects=True,
    )


_PRESETS = {
    DetailLevel.COMPREHENSIVE: comprehensive_config,
    DetailLevel.EXPERT: expert_config,
    DetailLevel.MASTERCLASS: masterclass_config,
}


def config_for(detail_level: DetailLevel | str) -> EnhancedLessonConfig:
    """Get the preset for a detail level name.

    Args:
        detail_level: DetailLevel or its string value (case-insensitive)

    Returns:
        The matching preset

    Raises:
        ValueError: If the name is not a known detail level
    """
    try:
        level = DetailLevel(str(detail_level).lower().strip())
    except ValueError as e:
        valid = ", ".join(level.value for level in DETAIL_LEVEL_ORDER)
        raise ValueError(f"Unknown detail level '{detail_level}'. Valid levels are: {valid}") from e
    return _PRESETS[level]()


def default_config() -> EnhancedLessonConfig:
    """Preset used when the caller does not pass one (the most detailed)."""
    return masterclass_config()
