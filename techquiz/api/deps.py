"""
Shared dependencies for the TechQuiz API.

Provides:
- Structured logging
- Singleton orchestrator (created once, reused per request)
- Mapping from router errors to HTTP errors
"""

from typing import Optional

from fastapi import HTTPException, status

from configs import GENERATION_TIMEOUT_SECONDS
from techquiz.llm_router import (
    DeadlineExceededError,
    LLMError,
    UnsupportedProviderError,
    redact_secret,
)
from techquiz.orchestrator import QuestionOrchestrator
from techquiz.utils import setup_logging


logger = setup_logging()


# =============================================================================
# SINGLETON ORCHESTRATOR
# =============================================================================

_orchestrator: Optional[QuestionOrchestrator] = None


def get_orchestrator() -> QuestionOrchestrator:
    """Get or create the singleton orchestrator instance."""
    global _orchestrator
    if _orchestrator is None:
        logger.info("Creating singleton QuestionOrchestrator")
        _orchestrator = QuestionOrchestrator(deadline_seconds=GENERATION_TIMEOUT_SECONDS)
    return _orchestrator


def reset_orchestrator() -> None:
    """Reset the orchestrator (useful for testing)."""
    global _orchestrator
    _orchestrator = None


# =============================================================================
# ERROR MAPPING
# =============================================================================

def http_error_for(error: LLMError, api_key: Optional[str] = None) -> HTTPException:
    """
    Convert a router error into an HTTPException.

    Input errors become 400, deadline 504, everything coming back from the
    provider (transport, empty response, unparseable output) 502.
    """
    if isinstance(error, UnsupportedProviderError):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(error, DeadlineExceededError):
        status_code = status.HTTP_504_GATEWAY_TIMEOUT
    else:
        status_code = status.HTTP_502_BAD_GATEWAY

    detail = error.to_dict()
    detail["message"] = redact_secret(detail["message"], api_key)
    detail["attempts"] = [
        {**a, "reason": redact_secret(a.get("reason"), api_key)} for a in error.attempts
    ]
    return HTTPException(status_code=status_code, detail=detail)
