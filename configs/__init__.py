"""Config module initialization."""
from .settings import (
    # LLM configuration
    FALLBACK_BACKOFF_SECONDS,
    MAX_OUTPUT_TOKENS,
    GEMINI_TEMPERATURE,
    GEMINI_TOP_P,
    GEMINI_TOP_K,
    REQUEST_TIMEOUT_SECONDS,
    GENERATION_TIMEOUT_SECONDS,
    STRICT_MODEL_RESOLUTION,
    # System settings
    MAX_QUESTIONS_PER_REQUEST,
    LOG_LEVEL,
    VERBOSE,
    ALLOWED_ORIGINS,
    # Validation constants
    DIFFICULTY_LEVELS,
    DEFAULT_QUESTION_TYPE,
    # Helpers
    ConfigurationError,
    get_default_api_key,
    validate_configuration,
)

__all__ = [
    # LLM configuration
    "FALLBACK_BACKOFF_SECONDS",
    "MAX_OUTPUT_TOKENS",
    "GEMINI_TEMPERATURE",
    "GEMINI_TOP_P",
    "GEMINI_TOP_K",
    "REQUEST_TIMEOUT_SECONDS",
    "GENERATION_TIMEOUT_SECONDS",
    "STRICT_MODEL_RESOLUTION",
    # System settings
    "MAX_QUESTIONS_PER_REQUEST",
    "LOG_LEVEL",
    "VERBOSE",
    "ALLOWED_ORIGINS",
    # Validation constants
    "DIFFICULTY_LEVELS",
    "DEFAULT_QUESTION_TYPE",
    # Helpers
    "ConfigurationError",
    "get_default_api_key",
    "validate_configuration",
]
