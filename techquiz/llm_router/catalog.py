"""
Provider catalog and request data models.

The model catalog is fixed in code: its ordering IS the fallback order
(first = most capable, later = cheaper / more available).
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Tuple


# ============================================================
# PROVIDERS
# ============================================================

class Provider(str, Enum):
    """Supported hosted generation providers."""
    GEMINI = "gemini"
    MISTRAL = "mistral"


MODEL_CATALOG: Dict[Provider, Tuple[str, ...]] = {
    Provider.GEMINI: (
        "gemini-2.5-flash",
        "gemini-1.5-flash",
        "gemini-1.5-pro",
    ),
    Provider.MISTRAL: (
        "mistral-large-latest",
        "mistral-medium-latest",
        "mistral-small-latest",
    ),
}


def catalog_for(provider: Provider) -> Tuple[str, ...]:
    """Ordered fallback sequence for one provider."""
    return MODEL_CATALOG[Provider(provider)]


# ============================================================
# DATA MODELS
# ============================================================

@dataclass(frozen=True)
class ProviderConfig:
    """
    Credentials and target for a single generation attempt.

    Immutable: falling back to another model produces a new value through
    with_model(). The API key is excluded from repr so it cannot leak into
    logs or tracebacks.
    """
    api_key: str = field(repr=False)
    provider: Provider
    model: str

    def with_model(self, model: str) -> "ProviderConfig":
        return replace(self, model=model)


@dataclass(frozen=True)
class GenerationRequest:
    """Prompt pair sent to a provider."""
    prompt: str
    system_prompt: Optional[str] = None


@dataclass
class AttemptRecord:
    """Outcome of one attempt in a fallback sequence."""
    attempt: int
    max_attempts: int
    provider: Provider
    model: str
    status: str  # "success" | "failed"
    error_kind: Optional[str] = None
    reason: Optional[str] = None
    elapsed_ms: float = 0.0

    def to_dict(self) -> Dict[str, object]:
        return {
            "attempt": self.attempt,
            "max_attempts": self.max_attempts,
            "provider": self.provider.value,
            "model": self.model,
            "status": self.status,
            "error_kind": self.error_kind,
            "reason": self.reason,
            "elapsed_ms": round(self.elapsed_ms, 1),
        }
