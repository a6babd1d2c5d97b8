"""
Health check endpoints for monitoring and diagnostics.
"""

import time
from fastapi import APIRouter

from ..models.common import HealthStatus
from ..dependencies.state import app_state
from ... import __version__

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()

@router.get("/", response_model=HealthStatus)
async def health_check():
    """
    Basic health check endpoint.

    Reports uptime, whether the dispatcher is wired up and its call statistics.
    Does not contact the model API.
    """
    uptime = time.time() - _server_start_time
    dispatcher = app_state.get("dispatcher")
    settings = app_state.get("settings")

    dependencies = {}
    stats = {}
    if dispatcher is not None:
        dependencies["dispatcher"] = f"Available ({dispatcher.model})"
        stats = dispatcher.get_stats()
    else:
        dependencies["dispatcher"] = "Not initialized"

    if settings is not None:
        upload_dir = settings.upload_dir
        dependencies["upload_dir"] = "Available" if upload_dir.is_dir() else f"Missing ({upload_dir})"

    return HealthStatus(
        status="healthy" if dispatcher is not None else "degraded",
        version=__version__,
        uptime=uptime,
        dependencies=dependencies,
        stats=stats,
    )

@router.get("/ready")
async def readiness_check():
    """
    Readiness probe for container deployments.

    Returns ``ready: true`` only once the lifespan has built the dispatcher.
    """
    if app_state.get("dispatcher") is None:
        return {"ready": False, "reason": "Inference dispatcher not initialized"}

    return {"ready": True, "message": "Service ready to handle requests"}
