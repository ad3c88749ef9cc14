"""
Question generation orchestrator.

PIPELINE:
=========
1. Resolve the model selection to a provider (unknown -> input error)
2. Resolve the canonical model id
3. Run the prompt through the same-provider fallback executor
4. Extract the JSON array from the raw text
5. Normalize and validate each record

Records are returned to the caller; nothing is persisted here.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import ValidationError

from configs import (
    GENERATION_TIMEOUT_SECONDS,
    REQUEST_TIMEOUT_SECONDS,
    STRICT_MODEL_RESOLUTION,
)
from techquiz.llm_router import (
    FallbackExecutor,
    GenerationRequest,
    LLMError,
    ParseError,
    ProviderConfig,
    call_provider,
    require_provider,
    resolve_model,
)
from techquiz.models import MCQuestion, QuestionBatch, TechnicalQuestion

from .json_utils import extract_json_array
from .prompts import PREFLIGHT_PROMPT, SYSTEM_PROMPTS, mcq_prompt, technical_prompt

logger = logging.getLogger(__name__)


class RecordValidationError(ParseError):
    """Raised when a generated record does not have the expected shape."""
    pass


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        problems.append(f"{location}: {err.get('msg')}" if location else err.get("msg", ""))
    return "; ".join(problems)


class QuestionOrchestrator:
    """
    Generates MCQ and technical interview questions.

    Args:
        executor_factory: Builds a fresh FallbackExecutor per request
        strict_models: Reject selections no resolution rule recognizes
        deadline_seconds: Budget for each whole fallback sequence
    """

    def __init__(
        self,
        executor_factory: Callable[[], FallbackExecutor] = FallbackExecutor,
        strict_models: bool = STRICT_MODEL_RESOLUTION,
        deadline_seconds: Optional[float] = GENERATION_TIMEOUT_SECONDS,
    ):
        self.executor_factory = executor_factory
        self.strict_models = strict_models
        self.deadline_seconds = deadline_seconds

    # ============================================================
    # CONFIG
    # ============================================================

    def build_config(self, selection: str, api_key: str) -> ProviderConfig:
        """Turn a UI model selection and a raw key into a ProviderConfig."""
        if not api_key or not api_key.strip():
            raise ValueError("API key is required")

        provider = require_provider(selection)
        model = resolve_model(selection, strict=self.strict_models)
        return ProviderConfig(api_key=api_key.strip(), provider=provider, model=model)

    # ============================================================
    # GENERATION
    # ============================================================

    def _generate_records(
        self,
        selection: str,
        api_key: str,
        request: GenerationRequest,
    ) -> Tuple[List[Any], ProviderConfig, List[Dict[str, Any]]]:
        config = self.build_config(selection, api_key)
        executor = self.executor_factory()

        try:
            text = executor.generate(
                config,
                request.prompt,
                request.system_prompt,
                deadline_seconds=self.deadline_seconds,
            )
            records = extract_json_array(text)
        except LLMError as e:
            e.attempts = executor.get_attempts()
            raise

        final_config = executor.last_config or config
        attempts = executor.get_attempts()
        if not isinstance(records, list):
            error = RecordValidationError(
                f"Expected a JSON array of questions, got {type(records).__name__}",
                provider=final_config.provider,
                model=final_config.model,
            )
            error.attempts = attempts
            raise error
        return records, final_config, attempts

    def _invalid_record(
        self,
        index: int,
        detail: str,
        config: ProviderConfig,
        attempts: List[Dict[str, Any]],
    ) -> RecordValidationError:
        error = RecordValidationError(
            f"Question {index + 1} is invalid: {detail}",
            provider=config.provider,
            model=config.model,
        )
        error.attempts = attempts
        return error

    def generate_mcqs(
        self,
        topic: str,
        difficulty: str,
        selection: str,
        api_key: str,
        count: int = 1,
        tech_stack: Optional[str] = None,
    ) -> QuestionBatch:
        """Generate multiple-choice questions (options A-D, one correct letter)."""
        if count < 1:
            raise ValueError("count must be at least 1")

        records, config, attempts = self._generate_records(
            selection,
            api_key,
            GenerationRequest(mcq_prompt(topic, difficulty, count, tech_stack), SYSTEM_PROMPTS["mcq"]),
        )

        questions = []
        for index, raw in enumerate(records):
            if not isinstance(raw, dict):
                raise self._invalid_record(index, "not a JSON object", config, attempts)
            raw.setdefault("topic", topic)
            if tech_stack:
                raw["tech_stack"] = tech_stack
            raw["tech_stack"] = raw.get("tech_stack") or raw.get("topic")
            try:
                questions.append(MCQuestion.model_validate(raw).model_dump())
            except ValidationError as e:
                raise self._invalid_record(index, _describe_validation_error(e), config, attempts)

        self._log_count_mismatch("MCQ", count, len(questions))
        return QuestionBatch(
            questions=questions,
            provider=config.provider.value,
            model=config.model,
            attempts=attempts,
        )

    def generate_technical_questions(
        self,
        topic: str,
        difficulty: str,
        selection: str,
        api_key: str,
        count: int = 1,
        tech_stack: Optional[str] = None,
        question_type: Optional[str] = None,
    ) -> QuestionBatch:
        """
        Generate short-answer technical questions.

        Every record must carry exactly the requested topic and a valid
        difficulty; the batch is rejected otherwise.
        """
        if count < 1:
            raise ValueError("count must be at least 1")

        records, config, attempts = self._generate_records(
            selection,
            api_key,
            GenerationRequest(
                technical_prompt(topic, difficulty, count, tech_stack, question_type),
                SYSTEM_PROMPTS["technical"],
            ),
        )

        questions = []
        for index, raw in enumerate(records):
            if not isinstance(raw, dict):
                raise self._invalid_record(index, "not a JSON object", config, attempts)
            if tech_stack:
                raw["tech_stack"] = tech_stack
            if question_type:
                raw["question_type"] = question_type
            if raw.get("topic") != topic:
                raise self._invalid_record(
                    index,
                    f'AI generated topic "{raw.get("topic")}" does not match requested topic "{topic}"',
                    config,
                    attempts,
                )
            try:
                questions.append(TechnicalQuestion.model_validate(raw).model_dump())
            except ValidationError as e:
                raise self._invalid_record(index, _describe_validation_error(e), config, attempts)

        self._log_count_mismatch("technical", count, len(questions))
        return QuestionBatch(
            questions=questions,
            provider=config.provider.value,
            model=config.model,
            attempts=attempts,
        )

    def _log_count_mismatch(self, label: str, requested: int, received: int) -> None:
        if requested != received:
            logger.warning("Requested %d %s question(s), model returned %d", requested, label, received)

    # ============================================================
    # PREFLIGHT
    # ============================================================

    def test_model(self, selection: str, api_key: str) -> Dict[str, str]:
        """
        Single call against the selected model, no fallback.

        Used to check a key and model before a long generation run.
        """
        config = self.build_config(selection, api_key)
        logger.info("Preflight test for %s - %s", config.provider.value, config.model)

        text = call_provider(
            config,
            PREFLIGHT_PROMPT,
            SYSTEM_PROMPTS["preflight"],
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
        return {
            "provider": config.provider.value,
            "model": config.model,
            "response": text.strip(),
        }
