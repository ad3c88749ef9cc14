"""
System router: health check.

Endpoints:
- GET /health - Health check (always available)
"""

from fastapi import APIRouter

from techquiz import __version__
from techquiz.llm_router import Provider

from ..schemas import HealthResponse


router = APIRouter(tags=["System"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Report API status and the providers this build supports."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        providers=[provider.value for provider in Provider],
    )
