from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
import asyncio
import base64
import logging

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MIME = "image/jpeg"

IMAGE_MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}


@dataclass(frozen=True)
class EncodedPayload:
    """Inline data part: base64 content tagged with its MIME type."""
    mime_type: str
    data: str

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)

    def __repr__(self) -> str:
        return f"EncodedPayload(mime_type={self.mime_type!r}, data=<{len(self.data)} base64 chars>)"


def resolve_mime_type(path: Union[str, Path], explicit: Optional[str] = None) -> str:
    if explicit:
        return explicit

    suffix = Path(path).suffix.lower()
    mime_type = IMAGE_MIME_TYPES.get(suffix)
    if mime_type is None:
        logger.warning(f"Unrecognized image extension {suffix or '(none)'!r} for {Path(path).name}, assuming {DEFAULT_IMAGE_MIME}")
        return DEFAULT_IMAGE_MIME
    return mime_type


def encode_file(path: Union[str, Path], mime_type: str) -> EncodedPayload:
    """
    Read the whole file into memory and base64-encode it.

    There is no streaming and no size cap here, so the usable file size is
    bounded by available memory; uploads are capped earlier by the receiver.
    Raises OSError when the path is missing or unreadable.
    """
    with open(path, "rb") as f:
        raw = f.read()
    return EncodedPayload(mime_type=mime_type, data=base64.b64encode(raw).decode("utf-8"))


async def encode_file_async(path: Union[str, Path], mime_type: str) -> EncodedPayload:
    return await asyncio.to_thread(encode_file, path, mime_type)
