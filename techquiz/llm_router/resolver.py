"""
Map loose model selections ("Mistral Small", "gemini", "google") to a
provider and a canonical model id.
"""

import logging
from typing import Optional

from .catalog import Provider, catalog_for
from .errors import UnsupportedProviderError

logger = logging.getLogger(__name__)


# Ordered: the first matching substring wins
MODEL_RULES = (
    ("mistral-small", "mistral-small-latest"),
    ("mistral-medium", "mistral-medium-latest"),
    ("mistral-large", "mistral-large-latest"),
    ("mistral", "mistral-small-latest"),
    ("gemini", "gemini-2.5-flash"),
    ("google", "gemini-2.5-flash"),
)


def resolve_provider(selection: str) -> Optional[Provider]:
    """Case-insensitive substring match; None when no provider is named."""
    lower = (selection or "").lower()

    if "mistral" in lower:
        return Provider.MISTRAL
    if "gemini" in lower or "google" in lower:
        return Provider.GEMINI
    return None


def require_provider(selection: str) -> Provider:
    """Like resolve_provider() but raises on unrecognized input."""
    provider = resolve_provider(selection)
    if provider is None:
        raise UnsupportedProviderError(f"Unsupported AI model: {selection}")
    return provider


def resolve_model(selection: str, strict: bool = False) -> str:
    """
    Canonical model id for a selection string.

    Unrecognized selections are returned unchanged (and reach the provider
    API as-is) unless strict is set, in which case they are rejected.
    """
    lower = (selection or "").lower()

    for needle, model in MODEL_RULES:
        if needle in lower:
            return model

    if strict:
        raise UnsupportedProviderError(f"Unrecognized model selection: {selection}")

    logger.warning("No model rule matched %r, passing selection through unchanged", selection)
    return selection


def next_fallback_model(provider: Provider, current_model: str) -> Optional[str]:
    """Next model after current_model in the same provider's catalog, if any."""
    models = catalog_for(provider)
    try:
        index = models.index(current_model)
    except ValueError:
        return None

    if index < len(models) - 1:
        return models[index + 1]
    return None
