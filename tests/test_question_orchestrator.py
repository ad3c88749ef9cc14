"""Tests for the question orchestrator (fallback executor wired to scripted adapters)."""
import json
from unittest.mock import patch

import pytest

from techquiz.llm_router import (
    FallbackExecutor,
    MODEL_CATALOG,
    ParseError,
    Provider,
    TransportError,
    UnsupportedProviderError,
)
from techquiz.orchestrator import QuestionOrchestrator
from techquiz.orchestrator.question_orchestrator import RecordValidationError

API_KEY = "  AIzaORCHESTRATORKEY  "

MCQ_RECORD = {
    "question": "Which AWS service runs code without servers?",
    "options": {"A": "EC2", "B": "Lambda", "C": "S3", "D": "RDS"},
    "correct_answer": "b",
    "topic": "AWS",
    "difficulty": "hard",
}

TECH_RECORD = {
    "question": "Explain cold starts in AWS Lambda.",
    "topic": "AWS",
    "difficulty": "EASY",
    "tech_stack": "aws, LAMBDA",
}


@pytest.fixture
def orchestrator_for(scripted_adapter):
    """Build an orchestrator whose executors talk to the given scripted adapters."""
    def _make(*adapters, deadline_seconds=None):
        registry = {adapter.provider: adapter for adapter in adapters}
        return QuestionOrchestrator(
            executor_factory=lambda: FallbackExecutor(sleep=lambda s: None, adapters=registry),
            strict_models=False,
            deadline_seconds=deadline_seconds,
        )
    return _make


# =============================================================================
# CONFIG
# =============================================================================

def test_build_config_strips_key_and_resolves_model(orchestrator_for):
    config = orchestrator_for().build_config("mistral-medium", API_KEY)

    assert config.provider == Provider.MISTRAL
    assert config.model == "mistral-medium-latest"
    assert config.api_key == "AIzaORCHESTRATORKEY"


@pytest.mark.parametrize("key", ["", "   ", None])
def test_build_config_requires_key(orchestrator_for, key):
    with pytest.raises(ValueError, match="API key is required"):
        orchestrator_for().build_config("gemini", key)


def test_unknown_selection_is_rejected_before_any_call(scripted_adapter, orchestrator_for):
    adapter = scripted_adapter(Provider.GEMINI)

    with pytest.raises(UnsupportedProviderError):
        orchestrator_for(adapter).generate_mcqs("AWS", "Easy", "gpt-4o", API_KEY)

    assert adapter.calls == []


def test_strict_mode_rejects_unmatched_model():
    orchestrator = QuestionOrchestrator(strict_models=True)
    assert orchestrator.build_config("google", "key-1234").model == "gemini-2.5-flash"
    with pytest.raises(UnsupportedProviderError):
        orchestrator.build_config("openai", "key-1234")


# =============================================================================
# MCQ
# =============================================================================

def test_generate_mcqs_normalizes_records(scripted_adapter, orchestrator_for):
    text = "Here are your questions:\n" + json.dumps([MCQ_RECORD]) + "\nEnjoy!"
    adapter = scripted_adapter(Provider.GEMINI, default_text=text)

    batch = orchestrator_for(adapter).generate_mcqs("AWS", "Hard", "Gemini", API_KEY, count=1)

    assert batch.provider == "gemini"
    assert batch.model == "gemini-2.5-flash"
    question = batch.questions[0]
    assert question["correct_answer"] == "B"
    assert question["difficulty"] == "Hard"
    assert question["tech_stack"] == "AWS"
    assert question["question_type"] == "mcq"
    assert adapter.calls[0]["api_key"] == "AIzaORCHESTRATORKEY"
    assert "AWS" in adapter.calls[0]["prompt"]


def test_generate_mcqs_defaults_missing_fields(scripted_adapter, orchestrator_for):
    record = {k: v for k, v in MCQ_RECORD.items() if k not in ("topic", "difficulty")}
    adapter = scripted_adapter(Provider.MISTRAL, default_text=json.dumps(record))

    batch = orchestrator_for(adapter).generate_mcqs(
        "Docker", "Easy", "mistral-small", API_KEY, tech_stack="Docker, Compose"
    )

    question = batch.questions[0]
    assert question["topic"] == "Docker"
    assert question["difficulty"] == "Medium"
    assert question["tech_stack"] == "Docker, Compose"


def test_generate_mcqs_rejects_bad_answer_letter(scripted_adapter, orchestrator_for):
    record = dict(MCQ_RECORD, correct_answer="E")
    adapter = scripted_adapter(Provider.GEMINI, default_text=json.dumps([record]))

    with pytest.raises(RecordValidationError) as excinfo:
        orchestrator_for(adapter).generate_mcqs("AWS", "Hard", "gemini", API_KEY)

    assert "Question 1" in excinfo.value.message
    assert "correct_answer" in excinfo.value.message


def test_generate_mcqs_rejects_missing_option(scripted_adapter, orchestrator_for):
    record = dict(MCQ_RECORD, options={"A": "1", "B": "2", "C": "3"})
    adapter = scripted_adapter(Provider.GEMINI, default_text=json.dumps([record]))

    with pytest.raises(RecordValidationError):
        orchestrator_for(adapter).generate_mcqs("AWS", "Hard", "gemini", API_KEY)


def test_non_object_record_is_rejected(scripted_adapter, orchestrator_for):
    adapter = scripted_adapter(Provider.GEMINI, default_text='["just a string"]')

    with pytest.raises(RecordValidationError, match="not a JSON object"):
        orchestrator_for(adapter).generate_mcqs("AWS", "Hard", "gemini", API_KEY)


def test_prose_only_response_is_parse_error(scripted_adapter, orchestrator_for):
    adapter = scripted_adapter(Provider.GEMINI, default_text="Sorry, I cannot help with that.")

    with pytest.raises(ParseError) as excinfo:
        orchestrator_for(adapter).generate_mcqs("AWS", "Hard", "gemini", API_KEY)

    # The successful provider call is still on the trail
    assert [a["status"] for a in excinfo.value.attempts] == ["success"]


def test_invalid_count_is_rejected(orchestrator_for):
    with pytest.raises(ValueError):
        orchestrator_for().generate_mcqs("AWS", "Hard", "gemini", API_KEY, count=0)


# =============================================================================
# FALLBACK REPORTING
# =============================================================================

def test_batch_reports_fallback_model_and_attempts(scripted_adapter, orchestrator_for):
    models = MODEL_CATALOG[Provider.GEMINI]
    adapter = scripted_adapter(
        Provider.GEMINI,
        {models[0]: TransportError("503 overloaded")},
        default_text=json.dumps([MCQ_RECORD]),
    )

    batch = orchestrator_for(adapter).generate_mcqs("AWS", "Hard", "gemini", API_KEY)

    assert batch.model == models[1]
    assert [a["status"] for a in batch.attempts] == ["failed", "success"]


def test_invalid_record_after_fallback_keeps_attempt_trail(scripted_adapter, orchestrator_for):
    models = MODEL_CATALOG[Provider.GEMINI]
    record = dict(MCQ_RECORD, options={"A": "only one"})
    adapter = scripted_adapter(
        Provider.GEMINI,
        {models[0]: TransportError("503 overloaded")},
        default_text=json.dumps([record]),
    )

    with pytest.raises(RecordValidationError) as excinfo:
        orchestrator_for(adapter).generate_mcqs("AWS", "Hard", "gemini", API_KEY)

    assert [a["status"] for a in excinfo.value.attempts] == ["failed", "success"]
    assert excinfo.value.model == models[1]


def test_exhausted_fallback_attaches_attempts(scripted_adapter, orchestrator_for):
    models = MODEL_CATALOG[Provider.MISTRAL]
    adapter = scripted_adapter(Provider.MISTRAL, {m: TransportError(f"down {m}") for m in models})

    with pytest.raises(TransportError) as excinfo:
        orchestrator_for(adapter).generate_technical_questions("AWS", "Easy", "mistral-large", API_KEY)

    assert [a["model"] for a in excinfo.value.attempts] == list(models)


# =============================================================================
# TECHNICAL
# =============================================================================

def test_generate_technical_normalizes_records(scripted_adapter, orchestrator_for):
    adapter = scripted_adapter(Provider.MISTRAL, default_text=json.dumps([TECH_RECORD, TECH_RECORD]))

    batch = orchestrator_for(adapter).generate_technical_questions(
        "AWS", "Easy", "mistral", API_KEY, count=2
    )

    assert len(batch.questions) == 2
    question = batch.questions[0]
    assert question["difficulty"] == "Easy"
    assert question["tech_stack"] == "Aws, Lambda"
    assert question["question_type"] == "short_answer"
    assert batch.model == "mistral-small-latest"


def test_generate_technical_applies_overrides(scripted_adapter, orchestrator_for):
    adapter = scripted_adapter(Provider.GEMINI, default_text=json.dumps([TECH_RECORD]))

    batch = orchestrator_for(adapter).generate_technical_questions(
        "AWS", "Easy", "gemini", API_KEY, tech_stack="python, DJANGO", question_type="scenario"
    )

    question = batch.questions[0]
    assert question["tech_stack"] == "Python, Django"
    assert question["question_type"] == "scenario"


def test_generate_technical_rejects_topic_mismatch(scripted_adapter, orchestrator_for):
    record = dict(TECH_RECORD, topic="Azure")
    adapter = scripted_adapter(Provider.GEMINI, default_text=json.dumps([record]))

    with pytest.raises(RecordValidationError, match="does not match requested topic"):
        orchestrator_for(adapter).generate_technical_questions("AWS", "Easy", "gemini", API_KEY)


@pytest.mark.parametrize("difficulty", [None, "", "Impossible"])
def test_generate_technical_rejects_bad_difficulty(scripted_adapter, orchestrator_for, difficulty):
    record = dict(TECH_RECORD, difficulty=difficulty)
    adapter = scripted_adapter(Provider.GEMINI, default_text=json.dumps([record]))

    with pytest.raises(RecordValidationError, match="ifficulty"):
        orchestrator_for(adapter).generate_technical_questions("AWS", "Easy", "gemini", API_KEY)


# =============================================================================
# PREFLIGHT
# =============================================================================

def test_test_model_makes_single_call():
    with patch(
        "techquiz.orchestrator.question_orchestrator.call_provider",
        return_value="  Connection OK \n",
    ) as mock_call:
        result = QuestionOrchestrator().test_model("mistral-large", "mst-key-1234")

    assert result == {
        "provider": "mistral",
        "model": "mistral-large-latest",
        "response": "Connection OK",
    }
    assert mock_call.call_count == 1
    config = mock_call.call_args.args[0]
    assert config.api_key == "mst-key-1234"


def test_test_model_propagates_provider_failure():
    failure = TransportError("401 Unauthorized", provider=Provider.GEMINI, model="gemini-2.5-flash")
    with patch("techquiz.orchestrator.question_orchestrator.call_provider", side_effect=failure):
        with pytest.raises(TransportError):
            QuestionOrchestrator().test_model("gemini", "bad-key-1234")
