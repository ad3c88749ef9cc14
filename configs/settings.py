"""
Configuration management for the TechQuiz question generator.

This module handles all configuration loading and validation.
Values come from the environment (optionally a .env file). API keys for
generation are supplied per request by the caller; the *_API_KEY variables
below are only a convenience fallback for the CLI.
"""
import os
from typing import Optional
from dotenv import load_dotenv

# interpolate=False prevents $VAR expansion in values (API keys may contain $)
load_dotenv(interpolate=False)


# =============================================================================
# CONFIGURATION VALIDATION
# =============================================================================

class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_float(key: str, default: str) -> float:
    raw = os.getenv(key, default)
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got: {raw!r}")


def _get_int(key: str, default: str) -> int:
    raw = os.getenv(key, default)
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got: {raw!r}")


def _get_bool(key: str, default: str = "false") -> bool:
    return os.getenv(key, default).strip().lower() == "true"


PLACEHOLDER_KEYS = [
    "your_google_api_key_here",
    "your_gemini_api_key_here",
    "your_mistral_api_key_here",
    "",
    None,
]


def get_default_api_key(provider: str) -> Optional[str]:
    """
    Return the API key configured in the environment for a provider.

    Placeholder values from .env.example count as not configured.
    """
    if provider == "gemini":
        key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    elif provider == "mistral":
        key = os.getenv("MISTRAL_API_KEY")
    else:
        raise ConfigurationError(f"Unknown LLM provider: {provider}")

    if key in PLACEHOLDER_KEYS:
        return None
    return key.strip()


def validate_configuration() -> dict:
    """
    Validate all configuration and return validated config dict.

    Returns:
        Dictionary with validated configuration values

    Raises:
        ConfigurationError: If any value is out of range
    """
    errors = []
    config = {
        "fallback_backoff_seconds": FALLBACK_BACKOFF_SECONDS,
        "max_output_tokens": MAX_OUTPUT_TOKENS,
        "request_timeout_seconds": REQUEST_TIMEOUT_SECONDS,
        "generation_timeout_seconds": GENERATION_TIMEOUT_SECONDS,
        "max_questions_per_request": MAX_QUESTIONS_PER_REQUEST,
        "log_level": LOG_LEVEL,
    }

    if FALLBACK_BACKOFF_SECONDS < 0:
        errors.append("FALLBACK_BACKOFF_SECONDS must not be negative")
    if MAX_OUTPUT_TOKENS <= 0:
        errors.append("MAX_OUTPUT_TOKENS must be positive")
    if REQUEST_TIMEOUT_SECONDS <= 0:
        errors.append("REQUEST_TIMEOUT_SECONDS must be positive")
    if GENERATION_TIMEOUT_SECONDS <= 0:
        errors.append("GENERATION_TIMEOUT_SECONDS must be positive")
    if MAX_QUESTIONS_PER_REQUEST < 1:
        errors.append("MAX_QUESTIONS_PER_REQUEST must be at least 1")
    if LOG_LEVEL not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        errors.append(f"LOG_LEVEL must be a standard logging level, got: {LOG_LEVEL}")

    if errors:
        error_msg = "\n\nConfiguration Errors:\n" + "\n".join(f"  • {e}" for e in errors)
        raise ConfigurationError(error_msg)

    return config


# =============================================================================
# LLM CONFIGURATION
# =============================================================================

# Delay between fallback attempts within one provider's catalog
FALLBACK_BACKOFF_SECONDS = _get_float("FALLBACK_BACKOFF_SECONDS", "1.0")

# Gemini generation settings (fixed sampling for reproducible question sets)
MAX_OUTPUT_TOKENS = _get_int("MAX_OUTPUT_TOKENS", "8192")
GEMINI_TEMPERATURE = _get_float("GEMINI_TEMPERATURE", "0.3")
GEMINI_TOP_P = 1.0
GEMINI_TOP_K = 1

# Per-attempt transport timeout and whole-generation deadline
REQUEST_TIMEOUT_SECONDS = _get_float("REQUEST_TIMEOUT_SECONDS", "60")
GENERATION_TIMEOUT_SECONDS = _get_float("GENERATION_TIMEOUT_SECONDS", "120")

# Reject model selections no resolution rule recognizes instead of passing them through
STRICT_MODEL_RESOLUTION = _get_bool("STRICT_MODEL_RESOLUTION")

# =============================================================================
# SYSTEM SETTINGS
# =============================================================================

MAX_QUESTIONS_PER_REQUEST = _get_int("MAX_QUESTIONS_PER_REQUEST", "20")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
VERBOSE = _get_bool("VERBOSE")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

# =============================================================================
# VALIDATION CONSTANTS (HARDCODED - DO NOT MAKE CONFIGURABLE)
# =============================================================================

DIFFICULTY_LEVELS = ("Easy", "Medium", "Hard")
DEFAULT_QUESTION_TYPE = "short_answer"
