#!/usr/bin/env python3
"""
Server launcher for the Gemini Relay API.

Loads settings (config/config.yaml, .env and the environment) once and starts
uvicorn with them. For production, run behind a proper ASGI deployment.
"""

import logging
import sys
from pathlib import Path

import uvicorn

# Add src to Python path so imports work without an install
project_root = Path(__file__).parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

from gemini_relay.config import load_settings  # noqa: E402
from gemini_relay.api.main import create_app  # noqa: E402

if __name__ == "__main__":
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("Starting Gemini Relay API Server")
    print(f"Model: {settings.model}")
    print(f"Upload directory: {settings.upload_dir.resolve()}")
    print(f"API documentation at: http://localhost:{settings.port}/docs")
    print("\n" + "="*50 + "\n")

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
