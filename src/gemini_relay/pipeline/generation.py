"""
Generation pipeline for the three entry points.

Each method validates its input, builds a GenerationRequest and dispatches it.
Transient files are owned by the caller's upload scope, not by this module.
"""
import logging
from typing import Optional

from ..errors import ValidationError, EncodingError
from ..models.dispatcher import InferenceDispatcher
from ..utils.encoding import EncodedPayload, encode_file_async, resolve_mime_type
from .types import GenerationRequest, UploadedFile

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_PROMPT = "Describe the image"
DOCUMENT_INSTRUCTION = "Analyze this document:"
GENERIC_MIME = "application/octet-stream"


class GenerationPipeline:
    def __init__(self, dispatcher: InferenceDispatcher):
        self.dispatcher = dispatcher

    async def from_text(self, prompt: Optional[str]) -> str:
        if not prompt:
            raise ValidationError("Prompt is required in the request body.")
        return await self._dispatch(GenerationRequest(prompt_text=prompt))

    async def from_image(self, upload: UploadedFile, prompt: Optional[str] = None) -> str:
        # multipart clients report octet-stream when they don't know, so fall back to the extension
        declared = upload.declared_mime_type
        if declared == GENERIC_MIME:
            declared = None
        mime_type = resolve_mime_type(upload.original_name, declared)

        payload = await self._encode(upload, mime_type)
        return await self._dispatch(GenerationRequest(prompt_text=prompt or DEFAULT_IMAGE_PROMPT, attachment=payload))

    async def from_document(self, upload: UploadedFile) -> str:
        payload = await self._encode(upload, upload.declared_mime_type or GENERIC_MIME)
        return await self._dispatch(GenerationRequest(prompt_text=DOCUMENT_INSTRUCTION, attachment=payload))

    async def _encode(self, upload: UploadedFile, mime_type: str) -> EncodedPayload:
        try:
            return await encode_file_async(upload.path, mime_type)
        except OSError as e:
            logger.error(f"Failed to read upload {upload.original_name!r}: {e}")
            raise EncodingError(str(e)) from e

    async def _dispatch(self, request: GenerationRequest) -> str:
        return await self.dispatcher.generate(request.parts)
