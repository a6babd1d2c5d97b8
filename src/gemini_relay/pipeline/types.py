from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..models.providers.base import Part
from ..utils.encoding import EncodedPayload


@dataclass(frozen=True)
class UploadedFile:
    """A transient upload on disk, deleted by the scope that created it."""
    path: Path
    declared_mime_type: Optional[str]
    original_name: str
    size_bytes: int


@dataclass(frozen=True)
class GenerationRequest:
    """One call's worth of model input; built per request and discarded after dispatch."""
    prompt_text: str
    attachment: Optional[EncodedPayload] = None

    @property
    def parts(self) -> List[Part]:
        if self.attachment is None:
            return [self.prompt_text]
        return [self.prompt_text, self.attachment]
