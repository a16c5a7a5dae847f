"""
CV processing pipeline: encode -> extract -> recover -> normalize -> validate.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from ..schemas.profile import FileInfo, UnifiedProfileData, ValidationResult
from .cv_encoder import PDF_MIME_TYPE, DocumentSource, encode_document
from .cv_prompt import PROMPT_VERSION, build_extraction_prompt
from .gemini_client import GeminiExtractionClient
from .json_recovery import recover_json_object
from .normalizer import normalize_extracted_data
from .skill_classifier import SkillClassifier
from .validator import validate_profile

logger = logging.getLogger(__name__)


@dataclass
class CVProcessingResult:
    profile: UnifiedProfileData
    validation: ValidationResult
    file_info: FileInfo
    prompt_version: str = PROMPT_VERSION


async def process_cv(
    content: DocumentSource,
    filename: str,
    mime_type: str = PDF_MIME_TYPE,
    client: Optional[GeminiExtractionClient] = None,
    classifier: Optional[SkillClassifier] = None,
) -> CVProcessingResult:
    """
    Run one CV through every stage with a single model call.

    Encoding, extraction and recovery failures propagate unchanged; missing
    required fields only show up in the returned validation result.
    """
    document = encode_document(content, mime_type=mime_type, filename=filename)
    logger.info("Processing CV: %s (%d bytes)", filename, document.size)

    client = client or GeminiExtractionClient()
    raw_text = await client.extract(document, build_extraction_prompt())

    extracted = recover_json_object(raw_text)
    profile = normalize_extracted_data(extracted, classifier=classifier)
    validation = validate_profile(profile)

    if validation.is_valid:
        logger.info("CV %s processed, profile is complete", filename)
    else:
        logger.info("CV %s processed with %d validation error(s)", filename, len(validation.errors))

    return CVProcessingResult(
        profile=profile,
        validation=validation,
        file_info=FileInfo(
            name=filename,
            size=document.size,
            type=document.mime_type,
            page_count=document.page_count,
        ),
    )
