"""
Models router: catalog listing and preflight connectivity test.

Endpoints:
- GET  /models       - fallback order per provider
- POST /models/test  - one call against the selected model (no fallback)
"""

import asyncio
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from configs import REQUEST_TIMEOUT_SECONDS
from techquiz.llm_router import (
    MODEL_CATALOG,
    EmptyResponseError,
    LLMError,
    TransportError,
    UnsupportedProviderError,
    redact_secret,
    resolve_provider,
)

from ..schemas import (
    ModelSelectionRequest, ModelCatalogResponse,
    PreflightResponse, PreflightFailure,
)
from ..deps import get_orchestrator, logger


router = APIRouter(prefix="/models", tags=["Models"])


def _failure(status_code: int, error: str, provider=None, details=None) -> JSONResponse:
    body = PreflightFailure(error=error, provider=provider, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.get("", response_model=ModelCatalogResponse)
async def list_models():
    """Models per provider, in fallback order."""
    return ModelCatalogResponse(
        providers={provider.value: list(models) for provider, models in MODEL_CATALOG.items()}
    )


@router.post(
    "/test",
    response_model=PreflightResponse,
    responses={400: {"model": PreflightFailure}, 401: {"model": PreflightFailure},
               500: {"model": PreflightFailure}},
)
async def test_model(request: ModelSelectionRequest):
    """
    Preflight check for a model selection and API key.

    Returns 401 when the provider rejects the key, 400 for an unknown
    model selection and 500 for any other provider failure.
    """
    logger.info("[PREFLIGHT TEST] Testing model: %s", request.selected_ai_model)
    provider = resolve_provider(request.selected_ai_model)
    provider_name = provider.value if provider else None

    try:
        result = await asyncio.wait_for(
            asyncio.to_thread(
                get_orchestrator().test_model,
                request.selected_ai_model,
                request.api_key,
            ),
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
    except UnsupportedProviderError:
        return _failure(
            status.HTTP_400_BAD_REQUEST,
            f"Unsupported model: {request.selected_ai_model}",
        )
    except ValueError as e:
        return _failure(status.HTTP_400_BAD_REQUEST, str(e), provider=provider_name)
    except asyncio.TimeoutError:
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"No answer within {REQUEST_TIMEOUT_SECONDS} seconds",
            provider=provider_name,
            details="API connection failed",
        )
    except EmptyResponseError:
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "No response from AI provider. Please check your API key and try again.",
            provider=provider_name,
        )
    except TransportError as e:
        logger.error("[PREFLIGHT TEST] API error: %s", e.message)
        if e.is_auth_failure:
            return _failure(
                status.HTTP_401_UNAUTHORIZED,
                "Your API key is invalid or expired. Please check your credentials.",
                provider=provider_name,
                details="Authentication failed (401)",
            )
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            redact_secret(e.message, request.api_key),
            provider=provider_name,
            details="API connection failed",
        )
    except LLMError as e:
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            redact_secret(e.message, request.api_key),
            provider=provider_name,
        )

    logger.info("[PREFLIGHT TEST] Success! Provider %s is working.", result["provider"])
    return PreflightResponse(
        message=f"{result['provider']} API connection successful",
        provider=result["provider"],
        model=result["model"],
    )
