"""
Pydantic schemas for the TechQuiz API.

Request bodies accept the camelCase field names the original web client
sends (selectedAIModel, apiKey, numberOfQuestions, techStack, questionType)
as well as snake_case.
"""

from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field

from configs import MAX_QUESTIONS_PER_REQUEST


# ============================================================
# REQUEST MODELS
# ============================================================

class ModelSelectionRequest(BaseModel):
    """Request body for POST /models/test."""
    selected_ai_model: str = Field(
        ..., min_length=1, alias="selectedAIModel",
        description="Loose model selection, e.g. 'Mistral Small' or 'gemini'"
    )
    api_key: str = Field(..., min_length=1, alias="apiKey", repr=False)

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {"selectedAIModel": "gemini", "apiKey": "AIza..."}
            ]
        }
    }


class GenerateMCQRequest(ModelSelectionRequest):
    """Request body for POST /generate/mcq."""
    topic: str = Field(..., min_length=1, description="Question topic")
    difficulty: str = Field(..., min_length=1, description="Easy, Medium or Hard")
    number_of_questions: int = Field(
        1, ge=1, le=MAX_QUESTIONS_PER_REQUEST, alias="numberOfQuestions"
    )
    tech_stack: Optional[str] = Field(None, alias="techStack")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "topic": "Networking",
                    "difficulty": "Medium",
                    "selectedAIModel": "mistral-small",
                    "apiKey": "...",
                    "numberOfQuestions": 3,
                    "techStack": "AWS",
                }
            ]
        }
    }


class GenerateTechnicalRequest(GenerateMCQRequest):
    """Request body for POST /generate/technical-questions."""
    question_type: Optional[str] = Field(None, alias="questionType")


# ============================================================
# RESPONSE MODELS
# ============================================================

class AttemptAPI(BaseModel):
    """One attempt of a fallback sequence."""
    attempt: int
    max_attempts: int
    provider: str
    model: str
    status: str
    error_kind: Optional[str] = None
    reason: Optional[str] = None
    elapsed_ms: float = 0.0


class MCQResponse(BaseModel):
    """Response body for POST /generate/mcq."""
    message: str
    mcqs: List[Dict[str, Any]]
    requested_questions: int
    provider: str
    model: str = Field(..., description="Model that produced the answer")
    attempts: List[AttemptAPI] = Field(default_factory=list)


class TechnicalQuestionsResponse(BaseModel):
    """Response body for POST /generate/technical-questions."""
    message: str
    questions: List[Dict[str, Any]]
    requested_questions: int
    provider: str
    model: str = Field(..., description="Model that produced the answer")
    attempts: List[AttemptAPI] = Field(default_factory=list)


class PreflightResponse(BaseModel):
    """Successful preflight response."""
    success: bool = True
    message: str
    provider: str
    model: str


class PreflightFailure(BaseModel):
    """Failed preflight response."""
    success: bool = False
    error: str
    provider: Optional[str] = None
    details: Optional[str] = None


class ModelCatalogResponse(BaseModel):
    """Fallback order per provider."""
    providers: Dict[str, List[str]]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    providers: List[str]
