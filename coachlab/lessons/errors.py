"""Error types for lesson generation.

The generation client raises these and never falls back on its own.
Callers (see service.py) decide whether to use the fallback generator.
"""

RAW_TEXT_PREVIEW_CHARS = 500


class LessonGenerationError(Exception):
    """Base exception for lesson generation failures."""

    kind = "generation_error"

    def to_dict(self) -> dict[str, str | int | None]:
        return {"kind": self.kind, "message": str(self)}


class LessonConfigurationError(LessonGenerationError):
    """Raised when the generation client is not configured (e.g. missing API key).

    Raised before any network call is attempted.
    """

    kind = "configuration_error"


class LessonTransportError(LessonGenerationError):
    """Raised on a non-2xx response, timeout or connection failure.

    status is None when no HTTP response was received.
    """

    kind = "http_error"

    def __init__(self, status: int | None, body: str, message: str | None = None):
        self.status = status
        self.body = body
        self.message = message or f"Generation service returned HTTP {status}: {body[:RAW_TEXT_PREVIEW_CHARS]}"
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str | int | None]:
        return {"kind": self.kind, "status": self.status, "body": self.body}


class LessonParseError(LessonGenerationError):
    """Raised when the returned payload is not valid JSON or not a LessonPlan."""

    kind = "parse_error"

    def __init__(self, raw_text: str, reason: str):
        self.raw_text_preview = preview_text(raw_text)
        self.reason = reason
        super().__init__(f"Failed to parse lesson plan: {reason}")

    def to_dict(self) -> dict[str, str | int | None]:
        return {"kind": self.kind, "reason": self.reason, "raw_text_preview": self.raw_text_preview}


def preview_text(raw_text: str, limit: int = RAW_TEXT_PREVIEW_CHARS) -> str:
    """Truncate raw model output for diagnostics."""
    if len(raw_text) <= limit:
        return raw_text
    return raw_text[:limit] + "..."
