"""
Pydantic models for generated question records.

Models return loosely shaped JSON; these models normalize what can be
normalized (difficulty casing, tech stack casing, answer letter) and
reject what cannot.
"""
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from configs import DIFFICULTY_LEVELS, DEFAULT_QUESTION_TYPE


def normalize_difficulty(value: Optional[str]) -> Optional[str]:
    """'hARD' -> 'Hard'; None when the value is not a known level."""
    if not value or not isinstance(value, str):
        return None
    value = value.strip()
    normalized = value[:1].upper() + value[1:].lower()
    return normalized if normalized in DIFFICULTY_LEVELS else None


def normalize_tech_stack(value: Optional[str]) -> Optional[str]:
    """'aws, LAMBDA' -> 'Aws, Lambda'."""
    if not value:
        return None
    parts = [p.strip() for p in value.split(",")]
    return ", ".join(p[:1].upper() + p[1:].lower() for p in parts if p)


# ============================================================
# MCQ
# ============================================================

class MCQOptions(BaseModel):
    """The four answer options of an MCQ."""
    A: str = Field(min_length=1)
    B: str = Field(min_length=1)
    C: str = Field(min_length=1)
    D: str = Field(min_length=1)


class MCQuestion(BaseModel):
    """A multiple-choice question."""
    question: str = Field(min_length=1, description="Question text")
    options: MCQOptions
    correct_answer: Literal["A", "B", "C", "D"]
    topic: str = Field(min_length=1)
    difficulty: str = Field(default="Medium")
    tech_stack: Optional[str] = None
    question_type: Literal["mcq"] = "mcq"

    @field_validator("correct_answer", mode="before")
    @classmethod
    def _answer_letter(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("difficulty", mode="before")
    @classmethod
    def _default_difficulty(cls, v):
        # Unknown or missing difficulty falls back to Medium
        return normalize_difficulty(v) or "Medium"


# ============================================================
# TECHNICAL (SHORT ANSWER)
# ============================================================

class TechnicalQuestion(BaseModel):
    """A short-answer technical interview question."""
    question: str = Field(min_length=1, description="Question text")
    topic: str = Field(min_length=1)
    difficulty: str
    tech_stack: Optional[str] = None
    question_type: str = Field(default=DEFAULT_QUESTION_TYPE)

    @field_validator("difficulty", mode="before")
    @classmethod
    def _strict_difficulty(cls, v):
        if not v:
            raise ValueError("Difficulty is missing from AI response.")
        normalized = normalize_difficulty(v)
        if normalized is None:
            raise ValueError(f"Invalid difficulty received from AI: {v}")
        return normalized

    @field_validator("tech_stack", mode="before")
    @classmethod
    def _stack_casing(cls, v):
        return normalize_tech_stack(v)

    @field_validator("question_type", mode="before")
    @classmethod
    def _question_type_default(cls, v):
        return v or DEFAULT_QUESTION_TYPE


class QuestionBatch(BaseModel):
    """Records produced by one generation call plus how they were produced."""
    questions: List[dict] = Field(default_factory=list)
    provider: str
    model: str
    attempts: List[dict] = Field(default_factory=list)
