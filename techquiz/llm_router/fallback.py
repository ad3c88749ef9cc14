"""
Same-provider fallback executor.

FALLBACK CHAIN (DETERMINISTIC):
================================
Attempts walk the provider's catalog from the configured model towards the
end of the list:

    gemini-2.5-flash -> gemini-1.5-flash -> gemini-1.5-pro
    mistral-large-latest -> mistral-medium-latest -> mistral-small-latest

- The provider never changes during a sequence.
- At most len(catalog) attempts; a model is never tried twice.
- The first success returns immediately (no backoff, no further calls).
- A fixed backoff separates attempts.
- When the catalog runs out, the last underlying error is re-raised.
- UnsupportedProviderError is an input error and is never retried.

An optional deadline bounds the whole sequence (network time plus backoff).
"""

import logging
import time
from typing import Callable, Dict, List, Optional

from configs import FALLBACK_BACKOFF_SECONDS, REQUEST_TIMEOUT_SECONDS

from .adapters import ProviderAdapter, get_adapter
from .catalog import AttemptRecord, ProviderConfig, catalog_for
from .errors import DeadlineExceededError, LLMError, UnsupportedProviderError, redact_secret
from .resolver import next_fallback_model

logger = logging.getLogger(__name__)


class FallbackExecutor:
    """
    Runs one generation with same-provider model fallback.

    The executor keeps the trail of the most recent sequence in
    last_attempts and the configuration that produced the answer in
    last_config. Create one executor per logical request.
    """

    def __init__(
        self,
        backoff_seconds: float = FALLBACK_BACKOFF_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        adapters: Optional[Dict] = None,
        request_timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self.backoff_seconds = backoff_seconds
        self.request_timeout = request_timeout
        self._sleep = sleep
        self._clock = clock
        self._adapters = adapters
        self.last_attempts: List[AttemptRecord] = []
        self.last_config: Optional[ProviderConfig] = None

    def _adapter_for(self, config: ProviderConfig) -> ProviderAdapter:
        if self._adapters is not None:
            adapter = self._adapters.get(config.provider)
            if adapter is None:
                raise UnsupportedProviderError(
                    f"Unsupported provider: {config.provider}", model=config.model
                )
            return adapter
        return get_adapter(config.provider)

    def _remaining(self, deadline_at: Optional[float]) -> Optional[float]:
        if deadline_at is None:
            return None
        return deadline_at - self._clock()

    def _attempt_timeout(self, remaining: Optional[float]) -> Optional[float]:
        # A single attempt never gets more than the per-request timeout
        if remaining is None:
            return None
        return min(remaining, self.request_timeout)

    def generate(
        self,
        config: ProviderConfig,
        prompt: str,
        system_prompt: Optional[str] = None,
        deadline_seconds: Optional[float] = None,
    ) -> str:
        """
        Generate text, falling back through config.provider's catalog.

        Args:
            config: Provider, starting model and API key
            prompt: User prompt
            system_prompt: Optional system instruction
            deadline_seconds: Optional budget for the whole sequence

        Returns:
            Raw response text from the first model that answered

        Raises:
            UnsupportedProviderError: config.provider has no adapter
            DeadlineExceededError: the budget ran out first
            LLMError: the last attempt's error once the catalog is exhausted
        """
        adapter = self._adapter_for(config)
        max_attempts = len(catalog_for(config.provider))
        deadline_at = None if deadline_seconds is None else self._clock() + deadline_seconds

        self.last_attempts = []
        self.last_config = None
        current = config
        attempt = 0

        while attempt < max_attempts:
            remaining = self._remaining(deadline_at)
            if remaining is not None and remaining <= 0:
                raise DeadlineExceededError(
                    f"Deadline of {deadline_seconds}s exceeded before attempting "
                    f"{current.provider.value} - {current.model}",
                    provider=current.provider,
                    model=current.model,
                )

            attempt += 1
            log_extra = {
                "provider": current.provider.value,
                "model": current.model,
                "attempt": attempt,
                "max_attempts": max_attempts,
            }
            logger.info(
                "Attempt %d/%d: using %s - %s",
                attempt, max_attempts, current.provider.value, current.model,
                extra=log_extra,
            )

            started = self._clock()
            try:
                text = adapter.call(
                    current, prompt, system_prompt, timeout=self._attempt_timeout(remaining)
                )
            except UnsupportedProviderError:
                raise
            except LLMError as e:
                reason = redact_secret(e.message, current.api_key)
                self.last_attempts.append(AttemptRecord(
                    attempt=attempt,
                    max_attempts=max_attempts,
                    provider=current.provider,
                    model=current.model,
                    status="failed",
                    error_kind=e.kind.value,
                    reason=reason,
                    elapsed_ms=(self._clock() - started) * 1000,
                ))
                logger.warning(
                    "Failed with %s - %s: %s",
                    current.provider.value, current.model, reason,
                    extra={**log_extra, "error_kind": e.kind.value},
                )

                if attempt >= max_attempts:
                    logger.error(
                        "All %d attempts exhausted for %s",
                        max_attempts, config.provider.value, extra=log_extra,
                    )
                    raise

                next_model = next_fallback_model(current.provider, current.model)
                if next_model is None:
                    logger.error(
                        "No fallback model available for %s after %s",
                        current.provider.value, current.model, extra=log_extra,
                    )
                    raise

                remaining = self._remaining(deadline_at)
                if remaining is not None and remaining <= self.backoff_seconds:
                    raise DeadlineExceededError(
                        f"Deadline of {deadline_seconds}s exceeded after "
                        f"{current.provider.value} - {current.model} failed: {reason}",
                        provider=current.provider,
                        model=current.model,
                    ) from e

                logger.info(
                    "Trying fallback: %s - %s",
                    current.provider.value, next_model, extra=log_extra,
                )
                self._sleep(self.backoff_seconds)
                current = current.with_model(next_model)
                continue

            self.last_attempts.append(AttemptRecord(
                attempt=attempt,
                max_attempts=max_attempts,
                provider=current.provider,
                model=current.model,
                status="success",
                elapsed_ms=(self._clock() - started) * 1000,
            ))
            self.last_config = current
            logger.info(
                "Success with %s - %s", current.provider.value, current.model, extra=log_extra
            )
            return text

        # Only reachable with an empty catalog
        raise LLMError(
            f"Failed to get response from {config.provider.value} models",
            provider=config.provider,
            model=config.model,
        )

    def get_attempts(self) -> List[Dict[str, object]]:
        """Attempt trail of the most recent sequence as plain dicts."""
        return [record.to_dict() for record in self.last_attempts]


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def generate_with_fallback(
    config: ProviderConfig,
    prompt: str,
    system_prompt: Optional[str] = None,
    deadline_seconds: Optional[float] = None,
) -> str:
    """Generate text with same-provider fallback using default settings."""
    return FallbackExecutor().generate(
        config, prompt, system_prompt, deadline_seconds=deadline_seconds
    )
