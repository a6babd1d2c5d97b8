"""
Error kinds surfaced by the request pipeline.

Every error carries the HTTP status it maps to, so the API layer can render
them uniformly as ``{"error": <message>}``.
"""


class RelayError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RelayError):
    """Required input is absent (no prompt text, no uploaded file)."""
    status_code = 400


class PayloadTooLargeError(ValidationError):
    status_code = 413


class EncodingError(RelayError):
    """Reading an uploaded file back from disk failed."""
    status_code = 500


class InferenceError(RelayError):
    """The external model call failed. Never retried."""
    status_code = 500
