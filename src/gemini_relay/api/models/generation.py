"""
API models for the generation endpoints.

Image and document endpoints take multipart form data, so only the JSON text
endpoint has a request model; all three share the response model.
"""

from pydantic import BaseModel, Field
from typing import Optional


class TextGenerationRequest(BaseModel):
    # Optional so that a missing prompt is reported as our own 400, not a schema error
    prompt: Optional[str] = Field(None, description="Prompt text sent to the model")


class GenerationResponse(BaseModel):
    output: str = Field(..., description="Text generated by the model, unmodified")
