from __future__ import annotations
from typing import Optional, Dict, Any, Sequence
import time
import logging

from ..config import Settings
from ..errors import InferenceError
from .providers.base import ModelProvider, ProviderRequest, Part

logger = logging.getLogger(__name__)


class InferenceDispatcher:
    """
    Sends an ordered sequence of parts to the model and returns its text.

    The provider is a single read-only handle injected at construction. Parts
    are forwarded exactly in the order given; assembling them is the caller's job.
    """

    def __init__(self, provider: ModelProvider, model: str, params: Optional[Dict[str, Any]] = None):
        self.provider = provider
        self.model = model
        self.params = dict(params or {})
        self._stats = {
            'total_calls': 0,
            'successful_calls': 0,
            'failed_calls': 0,
            'total_latency_ms': 0.0,
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> "InferenceDispatcher":
        from .providers.gemini import GeminiProvider
        provider = GeminiProvider(api_key=settings.api_key, timeout=settings.request_timeout_s)
        logger.info(f"initialized provider: gemini ({settings.model})")
        return cls(provider, settings.model, settings.generation_params)

    async def generate(self, parts: Sequence[Part]) -> str:
        start_time = time.perf_counter()
        request = ProviderRequest(model=self.model, parts=tuple(parts), params=self.params)
        try:
            response = await self.provider.generate(request)
        except Exception as e:
            self._track_stats((time.perf_counter() - start_time) * 1000, success=False)
            logger.error(f"Error generating content with {self.model}: {e}", exc_info=True)
            raise InferenceError(str(e)) from e

        self._track_stats((time.perf_counter() - start_time) * 1000, success=True)
        return response.content

    def _track_stats(self, latency_ms: float, success: bool):
        stats = self._stats
        stats['total_calls'] += 1
        if success:
            stats['successful_calls'] += 1
            stats['total_latency_ms'] += latency_ms
        else:
            stats['failed_calls'] += 1

    def get_stats(self) -> Dict[str, Any]:
        return dict(self._stats)

    async def aclose(self):
        try:
            await self.provider.aclose()
        except Exception as e:
            logger.error(f"Cleanup failed for provider: {e}")
