"""
Errors raised by the CV processing pipeline.

Every error here is terminal for a single upload: nothing is retried and the
candidate has to upload again (or fill the form by hand).
"""
from typing import Optional


USER_FACING_MESSAGE = "Failed to process CV. Please try again or fill the form manually."

PREVIEW_LIMIT = 500


class CVProcessingError(Exception):
    """Base class for fatal pipeline failures."""

    user_message = USER_FACING_MESSAGE


class EncodingError(CVProcessingError):
    """The uploaded file could not be read or encoded."""

    def __init__(self, reason: str):
        super().__init__(f"encoding failed: {reason}")
        self.reason = reason


class ExtractionServiceError(CVProcessingError):
    """The call to the generative model failed."""

    def __init__(self, reason: str):
        super().__init__(f"CV processing failed: {reason}")
        self.reason = reason


class ExtractionServiceUnavailable(ExtractionServiceError):
    """The model client is not configured (missing API key or SDK)."""


class RecoveryParseError(CVProcessingError):
    """No JSON object could be recovered from the model output."""

    def __init__(self, message: str, raw_text: Optional[str] = None):
        super().__init__(message)
        self.preview = bounded_preview(raw_text)


def bounded_preview(text: Optional[str], limit: int = PREVIEW_LIMIT) -> str:
    if not text:
        return ""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
