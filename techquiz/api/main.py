"""
TechQuiz FastAPI Application.

This module provides the REST API layer for the question generator.
All provider and parsing logic is delegated to the orchestrator.

Endpoints:
- POST /generate/mcq - Generate multiple-choice questions
- POST /generate/technical-questions - Generate short-answer questions
- POST /models/test - Preflight check for a model selection and key
- GET /models - Model catalog in fallback order
- GET /health - Health check
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from configs import ALLOWED_ORIGINS, validate_configuration
from techquiz import __version__

from .deps import logger
from .routers import generate_router, models_router, system_router


# ============================================================
# APP LIFECYCLE
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    config = validate_configuration()
    logger.info(
        "TechQuiz API started (backoff=%ss, generation timeout=%ss)",
        config["fallback_backoff_seconds"],
        config["generation_timeout_seconds"],
    )
    yield
    logger.info("TechQuiz API shutting down.")


# ============================================================
# FASTAPI APP
# ============================================================

app = FastAPI(
    title="TechQuiz API",
    description="Technical interview question generator with same-provider model fallback",
    version=__version__,
    lifespan=lifespan
)

# CORS for the web client - configurable via environment
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(system_router)
app.include_router(models_router)
app.include_router(generate_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
