"""
Recover a single JSON object from free-form model output.
"""
import json
import logging
import re

from .exceptions import RecoveryParseError

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json|JSON)?[ \t]*\n?")


def strip_markdown_fences(text: str) -> str:
    """Remove literal ``` / ```json markers wherever they appear."""
    return _FENCE_RE.sub("", text or "")


def recover_json_object(text: str) -> dict:
    """
    Slice from the first '{' to the last '}' and parse it.

    Handles models that wrap the JSON in code fences or add commentary around
    it. Malformed JSON inside the braces is not repaired; oversized numbers
    and runaway nesting fail the same way as a syntax error.

    Raises:
        RecoveryParseError: no brace pair was found or the slice is not valid JSON
    """
    raw = text or ""
    cleaned = strip_markdown_fences(raw)

    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end == -1 or end < start:
        logger.error("No JSON object boundaries in model response (length=%d)", len(raw))
        raise RecoveryParseError("no valid JSON found in response", raw_text=raw)

    candidate = cleaned[start:end + 1]
    try:
        parsed = json.loads(candidate)
    except (ValueError, RecursionError) as e:
        error = RecoveryParseError("failed to parse extracted data as JSON", raw_text=raw)
        logger.error("JSON parse failed: %s. Preview: %s", e, error.preview)
        raise error from e

    logger.info("JSON recovered from model response (%d of %d chars)", len(candidate), len(raw))
    return parsed
