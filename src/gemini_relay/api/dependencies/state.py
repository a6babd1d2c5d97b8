"""
Application state shared with request handlers.

The lifespan in ``api.main`` fills ``app_state`` once at startup; handlers
reach it only through the dependency functions below, which tests override.
"""

from typing import Any, Dict

from fastapi import HTTPException

from ...config import Settings
from ...models.dispatcher import InferenceDispatcher

# Global application state
app_state: Dict[str, Any] = {}


def get_settings() -> Settings:
    """FastAPI dependency to get the process settings."""
    return app_state["settings"]


def get_dispatcher() -> InferenceDispatcher:
    """FastAPI dependency to get the inference dispatcher from app state."""
    dispatcher = app_state.get("dispatcher")
    if dispatcher is None:
        raise HTTPException(status_code=503, detail="Inference dispatcher not initialized")
    return dispatcher
