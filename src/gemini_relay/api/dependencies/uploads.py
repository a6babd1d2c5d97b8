"""
Transient upload handling.

An upload is written to a uniquely named file in the upload directory and
removed again when the ``receive_upload`` scope exits, whatever the outcome of
the work done inside it.
"""

import asyncio
import logging
import os
import re
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional, BinaryIO

from fastapi import UploadFile

from ...errors import ValidationError, PayloadTooLargeError
from ...pipeline.types import UploadedFile

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024

_SAFE_SUFFIX = re.compile(r"\.[A-Za-z0-9]{1,10}")


def _transient_suffix(filename: str) -> str:
    """Keep the client's extension only when it is short and alphanumeric."""
    suffix = Path(filename).suffix
    return suffix if _SAFE_SUFFIX.fullmatch(suffix) else ""


def _open_transient(upload_dir: Path, suffix: str) -> BinaryIO:
    upload_dir.mkdir(parents=True, exist_ok=True)
    return tempfile.NamedTemporaryFile(delete=False, dir=upload_dir, prefix="upload-", suffix=suffix)


def _remove(path: Path) -> None:
    """Delete the transient file, tolerating it already being gone."""
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove transient upload {path}: {e}")


async def _store(upload: UploadFile, tmp_file: BinaryIO, max_bytes: Optional[int]) -> int:
    size = 0
    while True:
        chunk = await upload.read(CHUNK_SIZE)
        if not chunk:
            return size
        size += len(chunk)
        if max_bytes is not None and size > max_bytes:
            raise PayloadTooLargeError(f"Uploaded file exceeds the {max_bytes} byte limit.")
        await asyncio.to_thread(tmp_file.write, chunk)


@asynccontextmanager
async def receive_upload(upload: Optional[UploadFile], upload_dir: Path, max_bytes: Optional[int] = None) -> AsyncIterator[UploadedFile]:
    """
    Persist ``upload`` to a transient file and yield its metadata.

    Raises ValidationError when no file was sent and PayloadTooLargeError when
    the stream exceeds ``max_bytes``. The file is deleted on scope exit.

    The cap bounds what is copied here and sent to the model, not what the
    server accepts: Starlette has already spooled the whole multipart body
    (in memory, then on disk) before this runs. Request-size limits belong in
    the ASGI server or a proxy in front of it.
    """
    if upload is None or not getattr(upload, "filename", None):
        raise ValidationError("No file uploaded.")

    original_name = Path(upload.filename).name
    tmp_file = await asyncio.to_thread(_open_transient, Path(upload_dir), _transient_suffix(original_name))
    path = Path(tmp_file.name)
    try:
        try:
            size = await _store(upload, tmp_file, max_bytes)
        finally:
            await asyncio.to_thread(tmp_file.close)

        logger.debug(f"stored upload {original_name!r} ({size} bytes) at {path}")
        yield UploadedFile(
            path=path,
            declared_mime_type=upload.content_type or None,
            original_name=original_name,
            size_bytes=size,
        )
    finally:
        await asyncio.to_thread(_remove, path)
