"""Prompt template loader.

Templates live next to this module as versioned .txt files
(e.g. "system_instruction.v1.txt"). All prompt loading goes through
load_prompt(); each file is read once per process.
"""

from functools import cache
from pathlib import Path

from loguru import logger

PROMPTS_DIR = Path(__file__).parent
PROMPT_VERSION = "v1"


def prompt_filename(name: str, version: str = PROMPT_VERSION) -> str:
    """Build the versioned filename for a prompt name."""
    return f"{name}.{version}.txt"


@cache
def load_prompt(name: str, version: str = PROMPT_VERSION) -> str:
    """Load a prompt template.

    Args:
        name: Prompt name without version or extension (e.g., "user_prompt")
        version: Template version

    Returns:
        Prompt content as string

    Raises:
        FileNotFoundError: If prompt file doesn't exist
    """
    prompt_path = PROMPTS_DIR / prompt_filename(name, version)
    if not prompt_path.exists():
        raise FileNotFoundError(f"Prompt file not found: {prompt_path}")
    logger.debug(f"Loaded prompt template: {prompt_path.name}")
    return prompt_path.read_text(encoding="utf-8")
