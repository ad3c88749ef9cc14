"""
Provider adapters.

PURPOSE:
========
Gemini and Mistral expose different request shapes and different ways of
saying "no text came back". Each adapter turns one provider into the same
call shape:

    adapter.call(config, prompt, system_prompt) -> str

and raises typed errors (TransportError / EmptyResponseError) instead of
returning None, so the fallback executor can decide what to do next.

ARCHITECTURE:
=============
- ProviderAdapter: the interface (one method, no shared state)
- GeminiAdapter: single-turn request with token cap and fixed sampling
- MistralAdapter: chat request, string or segmented content
- get_adapter(provider): registry lookup keyed by the Provider enum

Both adapters go through LiteLLM with the caller's key passed per call.
The key is never written to os.environ.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from litellm import completion

from configs import (
    MAX_OUTPUT_TOKENS,
    GEMINI_TEMPERATURE,
    GEMINI_TOP_P,
    GEMINI_TOP_K,
    REQUEST_TIMEOUT_SECONDS,
)

from .catalog import Provider, ProviderConfig
from .errors import (
    EmptyReason,
    EmptyResponseError,
    TransportError,
    UnsupportedProviderError,
    redact_secret,
)

logger = logging.getLogger(__name__)

# Finish reasons as reported by LiteLLM (normalized) or by Gemini itself
MAX_TOKEN_FINISH_REASONS = {"length", "max_tokens"}
SAFETY_FINISH_REASONS = {"content_filter", "safety", "recitation", "blocklist", "prohibited_content"}


# ============================================================
# HELPERS
# ============================================================

def build_messages(prompt: str, system_prompt: Optional[str] = None) -> List[Dict[str, str]]:
    """Single user turn with an optional leading system message."""
    messages = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": prompt})
    return messages


def content_to_text(content: Any) -> str:
    """
    Flatten message content to text.

    Content is either a plain string or a list of segments; segments may be
    strings, dicts with a "text" key, or objects with a .text attribute.
    Non-text segments contribute nothing.
    """
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, (list, tuple)):
        parts = []
        for segment in content:
            if isinstance(segment, str):
                parts.append(segment)
            elif isinstance(segment, dict):
                parts.append(segment.get("text") or "")
            else:
                parts.append(getattr(segment, "text", None) or "")
        return "".join(parts)
    return ""


def _first_choice(response: Any) -> Optional[Any]:
    choices = getattr(response, "choices", None)
    if not choices:
        return None
    return choices[0]


def _wrap_transport_error(exc: Exception, config: ProviderConfig) -> TransportError:
    provider_name = config.provider.value.title()
    message = redact_secret(f"{provider_name} API error: {exc}", config.api_key)
    return TransportError(
        message,
        provider=config.provider,
        model=config.model,
        status_code=getattr(exc, "status_code", None),
    )


# ============================================================
# INTERFACE
# ============================================================

class ProviderAdapter(ABC):
    """
    One provider behind the common call shape.

    Raises:
        TransportError: the SDK / HTTP call itself failed
        EmptyResponseError: the call succeeded but produced no text
    """

    provider: Provider

    @abstractmethod
    def call(
        self,
        config: ProviderConfig,
        prompt: str,
        system_prompt: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> str:
        pass

    def route(self, model: str) -> str:
        """LiteLLM model route, e.g. "gemini/gemini-2.5-flash"."""
        return f"{self.provider.value}/{model}"


# ============================================================
# GEMINI ADAPTER
# ============================================================

class GeminiAdapter(ProviderAdapter):
    """
    Gemini single-turn generation.

    Empty results are split into three causes so the caller can tell a
    truncated answer from a filtered one from a plain empty payload.
    """

    provider = Provider.GEMINI

    def call(
        self,
        config: ProviderConfig,
        prompt: str,
        system_prompt: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> str:
        logger.debug("Calling Gemini API with model %s", config.model)

        try:
            response = completion(
                model=self.route(config.model),
                messages=build_messages(prompt, system_prompt),
                api_key=config.api_key,
                max_tokens=MAX_OUTPUT_TOKENS,
                temperature=GEMINI_TEMPERATURE,
                top_p=GEMINI_TOP_P,
                top_k=GEMINI_TOP_K,
                timeout=timeout or REQUEST_TIMEOUT_SECONDS,
            )
        except Exception as e:
            raise _wrap_transport_error(e, config) from e

        choice = _first_choice(response)
        finish_reason = str(getattr(choice, "finish_reason", "") or "").lower()
        message = getattr(choice, "message", None)
        text = content_to_text(getattr(message, "content", None))

        logger.debug("Gemini finish_reason=%s length=%d", finish_reason or "n/a", len(text))

        if not text.strip():
            if finish_reason in MAX_TOKEN_FINISH_REASONS:
                raise EmptyResponseError(
                    "Response exceeded max tokens. The prompt or expected output is too large. "
                    "Try reducing complexity.",
                    reason=EmptyReason.MAX_TOKENS,
                    provider=config.provider,
                    model=config.model,
                )
            if finish_reason in SAFETY_FINISH_REASONS:
                raise EmptyResponseError(
                    "Response blocked by safety filter. Try rephrasing your prompt.",
                    reason=EmptyReason.SAFETY,
                    provider=config.provider,
                    model=config.model,
                )
            raise EmptyResponseError(
                "Empty response from Gemini API",
                reason=EmptyReason.NO_CONTENT,
                provider=config.provider,
                model=config.model,
            )

        return text


# ============================================================
# MISTRAL ADAPTER
# ============================================================

class MistralAdapter(ProviderAdapter):
    """Mistral chat completion."""

    provider = Provider.MISTRAL

    def call(
        self,
        config: ProviderConfig,
        prompt: str,
        system_prompt: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> str:
        logger.debug("Calling Mistral API with model %s", config.model)

        try:
            response = completion(
                model=self.route(config.model),
                messages=build_messages(prompt, system_prompt),
                api_key=config.api_key,
                timeout=timeout or REQUEST_TIMEOUT_SECONDS,
            )
        except Exception as e:
            raise _wrap_transport_error(e, config) from e

        choice = _first_choice(response)
        if choice is None:
            raise EmptyResponseError(
                "No choices in Mistral response",
                reason=EmptyReason.NO_CONTENT,
                provider=config.provider,
                model=config.model,
            )

        message = getattr(choice, "message", None)
        text = content_to_text(getattr(message, "content", None))
        if not text:
            raise EmptyResponseError(
                "Empty content in Mistral response",
                reason=EmptyReason.NO_CONTENT,
                provider=config.provider,
                model=config.model,
            )

        logger.debug("Mistral response received, length=%d", len(text))
        return text


# ============================================================
# REGISTRY
# ============================================================

ADAPTERS: Dict[Provider, ProviderAdapter] = {
    Provider.GEMINI: GeminiAdapter(),
    Provider.MISTRAL: MistralAdapter(),
}


def get_adapter(provider: Provider) -> ProviderAdapter:
    try:
        return ADAPTERS[Provider(provider)]
    except (KeyError, ValueError):
        raise UnsupportedProviderError(f"Unsupported provider: {provider}")


def call_provider(
    config: ProviderConfig,
    prompt: str,
    system_prompt: Optional[str] = None,
    timeout: Optional[float] = None,
) -> str:
    """Single attempt against config.model, no fallback."""
    return get_adapter(config.provider).call(config, prompt, system_prompt, timeout=timeout)
