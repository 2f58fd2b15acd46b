"""API package"""

from .health import router as health_router
from .v1 import api_router

__all__ = ["api_router", "health_router"]
