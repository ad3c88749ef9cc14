"""
LLM Router module.

Handles provider selection, model resolution and same-provider fallback
chains. Supports Gemini and Mistral.
"""

from .catalog import (
    Provider,
    ProviderConfig,
    GenerationRequest,
    AttemptRecord,
    MODEL_CATALOG,
    catalog_for,
)
from .errors import (
    ErrorKind,
    EmptyReason,
    LLMError,
    UnsupportedProviderError,
    TransportError,
    EmptyResponseError,
    ParseError,
    DeadlineExceededError,
    redact_secret,
)
from .resolver import (
    resolve_provider,
    require_provider,
    resolve_model,
    next_fallback_model,
)
from .adapters import (
    ProviderAdapter,
    GeminiAdapter,
    MistralAdapter,
    get_adapter,
    call_provider,
)
from .fallback import FallbackExecutor, generate_with_fallback

__all__ = [
    # Data models
    "Provider",
    "ProviderConfig",
    "GenerationRequest",
    "AttemptRecord",
    "MODEL_CATALOG",
    "catalog_for",
    # Errors
    "ErrorKind",
    "EmptyReason",
    "LLMError",
    "UnsupportedProviderError",
    "TransportError",
    "EmptyResponseError",
    "ParseError",
    "DeadlineExceededError",
    "redact_secret",
    # Resolution
    "resolve_provider",
    "require_provider",
    "resolve_model",
    "next_fallback_model",
    # Adapters
    "ProviderAdapter",
    "GeminiAdapter",
    "MistralAdapter",
    "get_adapter",
    "call_provider",
    # Fallback
    "FallbackExecutor",
    "generate_with_fallback",
]
