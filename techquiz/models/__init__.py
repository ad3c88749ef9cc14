"""Models module initialization."""
from .questions import (
    MCQOptions,
    MCQuestion,
    TechnicalQuestion,
    QuestionBatch,
    normalize_difficulty,
    normalize_tech_stack,
)

__all__ = [
    "MCQOptions",
    "MCQuestion",
    "TechnicalQuestion",
    "QuestionBatch",
    "normalize_difficulty",
    "normalize_tech_stack",
]
