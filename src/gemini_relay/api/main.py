"""
FastAPI application entry point.

Builds the app, wires the routers and turns pipeline errors into the
``{"error": <message>}`` responses clients expect.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .routers import generation, health
from .dependencies.state import app_state
from .. import __version__
from ..config import Settings, load_settings
from ..errors import RelayError, ValidationError
from ..models.dispatcher import InferenceDispatcher

logger = logging.getLogger(__name__)


def _build_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Validate the settings, build the shared dispatcher once at startup
        and release the model client at shutdown.
        """
        resolved = settings.validate()
        resolved.upload_dir.mkdir(parents=True, exist_ok=True)

        app_state["settings"] = resolved
        app_state["dispatcher"] = InferenceDispatcher.from_settings(resolved)
        logger.info(f"Gemini API server is running at http://localhost:{resolved.port}")

        yield  # Server runs here

        logger.info("Shutting down Gemini API server...")
        dispatcher = app_state.get("dispatcher")
        if dispatcher is not None:
            await dispatcher.aclose()
        app_state.clear()

    return lifespan


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    if isinstance(exc, ValidationError):
        logger.info(f"Rejected {request.url.path}: {exc.message}")
    else:
        logger.error(f"Error handling {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"Invalid request: {location + ': ' if location else ''}{first.get('msg', 'malformed input')}"
    else:
        message = "Invalid request."
    logger.info(f"Rejected {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"error": message})


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=getattr(exc, "headers", None))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Factory function to create and configure the FastAPI application.

    Without ``settings`` they are loaded here, once, so CORS and the lifespan
    see the same configuration. They are validated only at startup, which lets
    the module-level ``app`` be imported without a configured environment.
    """
    if settings is None:
        settings = load_settings(validate=False)

    app = FastAPI(
        title="Gemini Relay API",
        description="Forwards text prompts, images and documents to a Gemini model",
        version=__version__,
        lifespan=_build_lifespan(settings),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RelayError, relay_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(generation.router, tags=["generation"])

    @app.get("/")
    async def root():
        """Root endpoint with basic API information."""
        return {
            "name": "Gemini Relay API",
            "version": __version__,
            "status": "operational",
            "endpoints": {
                "health": "/health",
                "generate_text": "/generate-text",
                "generate_from_image": "/generate-from-image",
                "generate_from_document": "/generate-from-document",
                "docs": "/docs",
            }
        }

    return app

# Create the FastAPI app instance
app = create_app()
