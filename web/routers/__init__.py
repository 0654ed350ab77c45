"""API routers."""

from .health import router as health_router
from .knowledge import router as knowledge_router

__all__ = ["knowledge_router", "health_router"]
