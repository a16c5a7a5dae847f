"""
AI extraction client: one Gemini call per uploaded CV.
"""
import asyncio
import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from ..config import Settings, get_settings
from .cv_encoder import EncodedDocument
from .exceptions import ExtractionServiceError, ExtractionServiceUnavailable

logger = logging.getLogger(__name__)

# Lazy initialization of the shared Gemini client, rebuilt when the key or
# transport timeout it was built with changes
_genai_client = None
_genai_client_options = None


def get_genai_client(settings: Optional[Settings] = None):
    """Get the Gemini client, initializing lazily. Returns None without an API key."""
    global _genai_client, _genai_client_options
    settings = settings or get_settings()
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY not set - CV extraction disabled")
        return None

    options = (settings.gemini_api_key, settings.gemini_timeout_seconds)
    if _genai_client is None or _genai_client_options != options:
        _genai_client = genai.Client(
            api_key=settings.gemini_api_key,
            http_options=types.HttpOptions(timeout=settings.gemini_timeout_seconds * 1000),
        )
        _genai_client_options = options
        logger.info("Gemini client initialized (model=%s)", settings.gemini_model)
    return _genai_client


class GeminiExtractionClient:
    """
    Sends the prompt plus the inline document to Gemini and returns the raw text.

    No retries: any failure surfaces as ExtractionServiceError and the upload
    is abandoned.
    """

    def __init__(self, client: Any = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._client = client

    def _resolve_client(self):
        client = self._client or get_genai_client(self.settings)
        if client is None:
            raise ExtractionServiceUnavailable("Gemini API not configured. Please set GEMINI_API_KEY.")
        return client

    async def extract(self, document: EncodedDocument, prompt: str) -> str:
        client = self._resolve_client()
        contents = [
            prompt,
            types.Part.from_bytes(data=document.to_bytes(), mime_type=document.mime_type),
        ]
        config = types.GenerateContentConfig(
            temperature=self.settings.gemini_temperature,
            max_output_tokens=self.settings.gemini_max_output_tokens,
        )
        timeout = self.settings.gemini_timeout_seconds

        logger.info(
            "Sending %s (%d bytes) to %s",
            document.filename or "<upload>", document.size, self.settings.gemini_model,
        )
        try:
            response = await asyncio.wait_for(
                client.aio.models.generate_content(
                    model=self.settings.gemini_model,
                    contents=contents,
                    config=config,
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error("Gemini call timed out after %ss", timeout)
            raise ExtractionServiceError(f"model did not respond within {timeout} seconds") from e
        except Exception as e:
            logger.error("Gemini call failed: %s", e)
            raise ExtractionServiceError(str(e)) from e

        text = getattr(response, "text", None)
        if not text or not text.strip():
            raise ExtractionServiceError("empty response from model")

        logger.info("AI response received, length: %d", len(text))
        return text
