from __future__ import annotations
from typing import Any, Dict, List, Optional
import time
import logging

import httpx
from google import genai
from google.genai import errors, types

from .base import ModelProvider, ProviderRequest, ModelResponse, ModelError, ModelTimeout, Part

logger = logging.getLogger(__name__)


class GeminiProvider(ModelProvider):
    """Async wrapper around one shared google-genai client."""

    def __init__(self, api_key: str, timeout: float = 60.0, client: Optional[genai.Client] = None):
        self.client = client or genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout * 1000)), #milliseconds
        )
        self.timeout = timeout

    def _build_contents(self, parts: List[Part]) -> List[types.Content]:
        """Map text / inline data parts onto a single user turn, preserving order."""
        genai_parts = []
        for part in parts:
            if isinstance(part, str):
                genai_parts.append(types.Part.from_text(text=part))
            else:
                genai_parts.append(types.Part.from_bytes(data=part.to_bytes(), mime_type=part.mime_type))
        return [types.Content(role="user", parts=genai_parts)]

    async def generate(self, req: ProviderRequest) -> ModelResponse:
        params = dict(req.params or {})
        config = types.GenerateContentConfig(**params) if params else None

        try:
            contents = self._build_contents(list(req.parts))
        except Exception as e:
            raise ModelError(f"Failed to build Gemini request: {e}") from e

        t0 = time.perf_counter()
        try:
            response = await self.client.aio.models.generate_content(
                model=req.model,
                contents=contents,
                config=config,
            )
        except httpx.TimeoutException as e:
            raise ModelTimeout(f"Gemini timeout after {self.timeout}s: {e}") from e
        except errors.APIError as e:
            raise ModelError(e.message or str(e)) from e
        except Exception as e:
            raise ModelError(f"Gemini request failed: {e}") from e

        dt = time.perf_counter() - t0

        try:
            content = response.text or ""
        except (ValueError, AttributeError) as e:
            raise ModelError(f"Invalid response structure from Gemini API: {e}") from e

        meta: Dict[str, Any] = {
            "provider": "gemini",
            "model": getattr(response, "model_version", None) or req.model,
            "latency": dt,
        }
        usage = getattr(response, "usage_metadata", None)
        if usage is not None:
            meta["usage"] = usage.model_dump(exclude_none=True)
        if getattr(response, "candidates", None):
            meta["finish_reason"] = getattr(response.candidates[0], "finish_reason", None)

        logger.debug(f"gemini call to {req.model} took {dt:.2f}s ({len(content)} chars)")
        return ModelResponse(content=content, raw=response, meta=meta)

    async def aclose(self) -> None:
        close = getattr(self.client.aio, "aclose", None)
        if close is not None:
            await close()
