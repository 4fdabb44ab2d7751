"""API v1 package."""

from .chat import router as chat_router
from .automations import router as automations_router

__all__ = ["chat_router", "automations_router"]
