"""
Conftest for TechQuiz tests.

Ensures the project root is on sys.path so 'techquiz', 'configs' and the
top-level 'cli' module resolve without an install, and provides fakes for
the provider layer so no test touches the network.
"""

import os
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add project root to sys.path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# Set environment BEFORE any app imports
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("STRICT_MODEL_RESOLUTION", "false")

from techquiz.llm_router import FallbackExecutor, Provider, ProviderAdapter  # noqa: E402


class ScriptedAdapter(ProviderAdapter):
    """
    Adapter whose outcome per model is fixed up front.

    outcomes maps model id -> response text or an exception instance.
    Models not listed return default_text.
    """

    def __init__(self, provider, outcomes=None, default_text="[]", on_call=None):
        self.provider = provider
        self.outcomes = outcomes or {}
        self.default_text = default_text
        self.on_call = on_call
        self.calls = []

    def call(self, config, prompt, system_prompt=None, timeout=None):
        self.calls.append({
            "model": config.model,
            "provider": config.provider,
            "api_key": config.api_key,
            "prompt": prompt,
            "system_prompt": system_prompt,
            "timeout": timeout,
        })
        if self.on_call:
            self.on_call()
        outcome = self.outcomes.get(config.model, self.default_text)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def models_called(self):
        return [c["model"] for c in self.calls]


class FakeClock:
    """Monotonic clock under test control; sleep() advances it."""

    def __init__(self, start=100.0):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def scripted_adapter():
    """Factory for ScriptedAdapter instances."""
    return ScriptedAdapter


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def make_executor(fake_clock):
    """Executor wired to the given adapters and a fake clock (no real sleeping)."""
    def _make(*adapters, backoff_seconds=1.0):
        return FallbackExecutor(
            backoff_seconds=backoff_seconds,
            sleep=fake_clock.sleep,
            clock=fake_clock,
            adapters={adapter.provider: adapter for adapter in adapters},
        )
    return _make


@pytest.fixture
def llm_response():
    """Build an object shaped like a LiteLLM ModelResponse."""
    def _make(content, finish_reason="stop", choices=True):
        if not choices:
            return SimpleNamespace(choices=[])
        message = SimpleNamespace(content=content, role="assistant")
        return SimpleNamespace(
            choices=[SimpleNamespace(message=message, finish_reason=finish_reason, index=0)]
        )
    return _make

