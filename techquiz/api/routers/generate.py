"""
Generation router: produces interview questions.

Endpoints:
- POST /generate/mcq                  - multiple-choice questions
- POST /generate/technical-questions  - short-answer technical questions
"""

import asyncio
from fastapi import APIRouter, HTTPException, status

from configs import GENERATION_TIMEOUT_SECONDS
from techquiz.llm_router import LLMError

from ..schemas import (
    GenerateMCQRequest, GenerateTechnicalRequest,
    MCQResponse, TechnicalQuestionsResponse,
)
from ..deps import get_orchestrator, http_error_for, logger


router = APIRouter(prefix="/generate", tags=["Generate"])


async def _run(func, api_key: str, **kwargs):
    """
    Run a blocking orchestrator call in a worker thread under the
    generation timeout, translating failures into HTTP errors.
    """
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(func, api_key=api_key, **kwargs),
            timeout=GENERATION_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError:
        logger.error("Generation timed out after %ss", GENERATION_TIMEOUT_SECONDS)
        raise HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail={
                "kind": "deadline",
                "message": f"Generation timed out after {GENERATION_TIMEOUT_SECONDS} seconds",
            },
        )
    except LLMError as e:
        logger.warning("Generation failed [%s]: %s", e.kind.value, e.message)
        raise http_error_for(e, api_key)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/mcq", response_model=MCQResponse, status_code=status.HTTP_201_CREATED)
async def generate_mcq(request: GenerateMCQRequest):
    """Generate multiple-choice questions for a topic and difficulty."""
    orchestrator = get_orchestrator()
    batch = await _run(
        orchestrator.generate_mcqs,
        api_key=request.api_key,
        topic=request.topic,
        difficulty=request.difficulty,
        selection=request.selected_ai_model,
        count=request.number_of_questions,
        tech_stack=request.tech_stack,
    )
    return MCQResponse(
        message="MCQs generated successfully",
        mcqs=batch.questions,
        requested_questions=request.number_of_questions,
        provider=batch.provider,
        model=batch.model,
        attempts=batch.attempts,
    )


@router.post(
    "/technical-questions",
    response_model=TechnicalQuestionsResponse,
    status_code=status.HTTP_201_CREATED,
)
async def generate_technical_questions(request: GenerateTechnicalRequest):
    """Generate short-answer technical interview questions."""
    orchestrator = get_orchestrator()
    batch = await _run(
        orchestrator.generate_technical_questions,
        api_key=request.api_key,
        topic=request.topic,
        difficulty=request.difficulty,
        selection=request.selected_ai_model,
        count=request.number_of_questions,
        tech_stack=request.tech_stack,
        question_type=request.question_type,
    )
    return TechnicalQuestionsResponse(
        message="Technical questions generated successfully",
        questions=batch.questions,
        requested_questions=request.number_of_questions,
        provider=batch.provider,
        model=batch.model,
        attempts=batch.attempts,
    )
