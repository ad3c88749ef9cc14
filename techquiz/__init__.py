"""
TechQuiz Backend Package

This package contains the technical interview question generator:
- llm_router: Provider resolution, adapters and same-provider fallback
- orchestrator: Prompting, JSON extraction and record normalization
- models: Question record schemas
- api: FastAPI application
- utils: Logging setup
"""

from techquiz.llm_router import (
    Provider,
    ProviderConfig,
    generate_with_fallback,
)
from techquiz.orchestrator import (
    QuestionOrchestrator,
    extract_json_array,
)

__version__ = "1.0.0"

__all__ = [
    "Provider",
    "ProviderConfig",
    "generate_with_fallback",
    "QuestionOrchestrator",
    "extract_json_array",
    "__version__",
]
