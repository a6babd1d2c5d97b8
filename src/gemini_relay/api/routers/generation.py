"""
Generation endpoints: text, image + prompt, document.

Every handler follows the same shape: validate, (receive upload), encode,
dispatch, respond. Uploads live inside ``receive_upload`` so the transient file
is gone before the response is sent, on success and failure alike.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ..models.generation import TextGenerationRequest, GenerationResponse
from ..models.common import APIError
from ..dependencies.state import get_dispatcher, get_settings
from ..dependencies.uploads import receive_upload
from ...config import Settings
from ...errors import RelayError
from ...models.dispatcher import InferenceDispatcher
from ...pipeline.generation import GenerationPipeline

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": APIError, "description": "Missing prompt or file"},
    500: {"model": APIError, "description": "Encoding or model failure"},
}
UPLOAD_ERROR_RESPONSES = {**ERROR_RESPONSES, 413: {"model": APIError, "description": "Upload too large"}}


@router.post("/generate-text", response_model=GenerationResponse, responses=ERROR_RESPONSES)
async def generate_text(payload: Optional[TextGenerationRequest] = None, dispatcher: InferenceDispatcher = Depends(get_dispatcher)):
    pipeline = GenerationPipeline(dispatcher)
    try:
        output = await pipeline.from_text(payload.prompt if payload else None)
    except RelayError:
        raise
    except Exception as e:
        logger.exception("Error generating text")
        raise RelayError(str(e)) from e
    return GenerationResponse(output=output)


@router.post("/generate-from-image", response_model=GenerationResponse, responses=UPLOAD_ERROR_RESPONSES)
async def generate_from_image(
    image: Optional[UploadFile] = File(None),
    prompt: Optional[str] = Form(None),
    dispatcher: InferenceDispatcher = Depends(get_dispatcher),
    settings: Settings = Depends(get_settings),
):
    pipeline = GenerationPipeline(dispatcher)
    try:
        async with receive_upload(image, settings.upload_dir, settings.upload_limit) as uploaded:
            output = await pipeline.from_image(uploaded, prompt)
    except RelayError:
        raise
    except Exception as e:
        logger.exception("Error generating from image")
        raise RelayError(str(e)) from e
    return GenerationResponse(output=output)


@router.post("/generate-from-document", response_model=GenerationResponse, responses=UPLOAD_ERROR_RESPONSES)
async def generate_from_document(
    document: Optional[UploadFile] = File(None),
    dispatcher: InferenceDispatcher = Depends(get_dispatcher),
    settings: Settings = Depends(get_settings),
):
    pipeline = GenerationPipeline(dispatcher)
    try:
        async with receive_upload(document, settings.upload_dir, settings.upload_limit) as uploaded:
            output = await pipeline.from_document(uploaded)
    except RelayError:
        raise
    except Exception as e:
        logger.exception("Error generating from document")
        raise RelayError(str(e)) from e
    return GenerationResponse(output=output)
