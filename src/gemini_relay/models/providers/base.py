from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Any, Optional, Sequence, Union

from ...utils.encoding import EncodedPayload

#unified model errors
class ModelError(RuntimeError): ...
class ModelTimeout(ModelError): ...

Part = Union[str, EncodedPayload]

@dataclass(frozen=True)
class ProviderRequest:
    model: str
    parts: Sequence[Part] #ordered text / inline data parts, sent as-is
    params: Dict[str, Any] | None = None

@dataclass(frozen=True)
class ModelResponse:
    content: str
    raw: Any #provider-native response obj
    meta: Dict[str, Any] #latency, usage, model, finish reason, etc.

class ModelProvider(ABC):
    @abstractmethod
    async def generate(self, req: ProviderRequest) -> ModelResponse:
        raise NotImplementedError

    async def aclose(self) -> None:
        return None
