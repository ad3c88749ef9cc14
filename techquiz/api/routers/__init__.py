"""API routers."""
from .generate import router as generate_router
from .models import router as models_router
from .system import router as system_router

__all__ = ["generate_router", "models_router", "system_router"]
