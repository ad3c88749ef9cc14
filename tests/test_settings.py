"""Tests for environment-driven configuration helpers."""
import pytest

from configs import ConfigurationError, get_default_api_key, validate_configuration


def test_gemini_key_prefers_gemini_variable(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", " gem-key ")
    monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
    assert get_default_api_key("gemini") == "gem-key"


def test_gemini_key_falls_back_to_google_variable(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
    assert get_default_api_key("gemini") == "google-key"


def test_placeholder_key_counts_as_missing(monkeypatch):
    monkeypatch.setenv("MISTRAL_API_KEY", "your_mistral_api_key_here")
    assert get_default_api_key("mistral") is None


def test_unset_key_is_none(monkeypatch):
    monkeypatch.delenv("MISTRAL_API_KEY", raising=False)
    assert get_default_api_key("mistral") is None


def test_unknown_provider_raises():
    with pytest.raises(ConfigurationError):
        get_default_api_key("openai")


def test_default_configuration_is_valid():
    config = validate_configuration()
    assert config["fallback_backoff_seconds"] == 1.0
    assert config["max_output_tokens"] == 8192
