"""
Typed failures for the provider router.

Every error carries a kind tag plus the provider/model it came from, so a
caller can render a diagnostic without parsing messages. Messages are
scrubbed of the API key before they are stored.
"""

from enum import Enum
from typing import Optional

from .catalog import Provider


class ErrorKind(str, Enum):
    """Failure categories surfaced by the router."""
    UNSUPPORTED_PROVIDER = "unsupported_provider"
    TRANSPORT = "transport"
    EMPTY_RESPONSE = "empty_response"
    PARSE = "parse"
    DEADLINE = "deadline"


class EmptyReason(str, Enum):
    """Why a provider answered without usable text."""
    MAX_TOKENS = "max_tokens"
    SAFETY = "safety"
    NO_CONTENT = "no_content"


REDACTED = "***"


def redact_secret(message: str, secret: Optional[str]) -> str:
    """Replace every occurrence of the secret in a message."""
    if not message or not secret:
        return message
    secret = secret.strip()
    if len(secret) < 4:
        return message
    return message.replace(secret, REDACTED)


class LLMError(Exception):
    """Base exception for router errors."""

    kind: ErrorKind = ErrorKind.TRANSPORT
    retryable: bool = False

    def __init__(
        self,
        message: str,
        provider: Optional[Provider] = None,
        model: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.model = model
        # Filled in by callers that ran a fallback sequence
        self.attempts: list = []

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "provider": self.provider.value if self.provider else None,
            "model": self.model,
            "message": self.message,
            "retryable": self.retryable,
        }


class UnsupportedProviderError(LLMError):
    """Raised when a model selection maps to no known provider (input error)."""
    kind = ErrorKind.UNSUPPORTED_PROVIDER
    retryable = False


class TransportError(LLMError):
    """Raised when the network/HTTP layer or the SDK call fails."""
    kind = ErrorKind.TRANSPORT
    retryable = True

    def __init__(
        self,
        message: str,
        provider: Optional[Provider] = None,
        model: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, provider, model)
        self.status_code = status_code

    @property
    def is_auth_failure(self) -> bool:
        if self.status_code == 401:
            return True
        lowered = self.message.lower()
        return "401" in lowered or "unauthorized" in lowered or "invalid_api_key" in lowered


class EmptyResponseError(LLMError):
    """
    Raised when a provider returned no usable text.

    Retried through fallback: a different model may not hit the same
    token limit or filter.
    """
    kind = ErrorKind.EMPTY_RESPONSE
    retryable = True

    def __init__(
        self,
        message: str,
        reason: EmptyReason = EmptyReason.NO_CONTENT,
        provider: Optional[Provider] = None,
        model: Optional[str] = None,
    ):
        super().__init__(message, provider, model)
        self.reason = reason

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["reason"] = self.reason.value
        return data


class ParseError(LLMError):
    """Raised when no JSON payload can be recovered from model text."""
    kind = ErrorKind.PARSE
    retryable = False


class DeadlineExceededError(LLMError):
    """Raised when the caller's deadline ran out before the sequence finished."""
    kind = ErrorKind.DEADLINE
    retryable = False
