"""Orchestrator module initialization."""

from .json_utils import JSONExtractionError, extract_json_array, find_json_span
from .prompts import SYSTEM_PROMPTS, PREFLIGHT_PROMPT, mcq_prompt, technical_prompt
from .question_orchestrator import QuestionOrchestrator, RecordValidationError

__all__ = [
    "QuestionOrchestrator",
    "RecordValidationError",
    "JSONExtractionError",
    "extract_json_array",
    "find_json_span",
    "SYSTEM_PROMPTS",
    "PREFLIGHT_PROMPT",
    "mcq_prompt",
    "technical_prompt",
]
