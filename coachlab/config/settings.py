from loguru import logger
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DETAIL_LEVELS = ("comprehensive", "expert", "masterclass")


class Settings(BaseSettings):
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY"),
        description="API key for the generative text service",
    )
    lesson_model: str = Field(default="gemini-2.0-flash", validation_alias="LESSON_MODEL")
    lesson_api_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        validation_alias="LESSON_API_BASE_URL",
    )
    lesson_request_timeout_seconds: float = Field(default=60.0, validation_alias="LESSON_REQUEST_TIMEOUT_SECONDS")
    lesson_temperature: float = Field(default=0.7, validation_alias="LESSON_TEMPERATURE")
    lesson_max_output_tokens: int = Field(default=8192, validation_alias="LESSON_MAX_OUTPUT_TOKENS")
    lesson_top_p: float = Field(default=0.95, validation_alias="LESSON_TOP_P")
    lesson_top_k: int = Field(default=40, validation_alias="LESSON_TOP_K")
    lesson_ai_enabled: bool = Field(
        default=True,
        validation_alias="LESSON_AI_ENABLED",
        description="Call the generative service; when false every lesson comes from the fallback generator",
    )
    lesson_default_detail_level: str = Field(default="masterclass", validation_alias="LESSON_DEFAULT_DETAIL_LEVEL")
    redis_url: str = Field(default="redis://localhost:6379/0", validation_alias="REDIS_URL")
    lesson_cache_ttl_seconds: int = Field(default=7 * 24 * 60 * 60, validation_alias="LESSON_CACHE_TTL_SECONDS")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("lesson_default_detail_level")
    @classmethod
    def validate_detail_level(cls, value: str) -> str:
        """Validate the default detail level against the known presets."""
        lower_value = value.lower().strip()
        if lower_value not in _DETAIL_LEVELS:
            logger.warning(
                f"Invalid LESSON_DEFAULT_DETAIL_LEVEL '{value}'. Valid levels are: {', '.join(_DETAIL_LEVELS)}. "
                "Defaulting to masterclass."
            )
            return "masterclass"
        return lower_value

    @field_validator("lesson_api_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


settings = Settings()
