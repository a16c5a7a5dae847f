"""
CV Router - AI-assisted CV extraction and profile validation
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, status

from ..config import Settings, get_settings
from ..schemas.profile import ProcessCVResponse, UnifiedProfileData, ValidationResult
from ..services.auth import require_candidate
from ..services.cv_encoder import PDF_MIME_TYPE
from ..services.cv_pipeline import process_cv
from ..services.exceptions import (
    CVProcessingError,
    EncodingError,
    ExtractionServiceUnavailable,
)
from ..services.gemini_client import GeminiExtractionClient
from ..services.skill_classifier import KeywordSkillClassifier, SkillClassifier
from ..services.validator import validate_profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["CV Extraction"])


def get_extraction_client() -> GeminiExtractionClient:
    return GeminiExtractionClient()


def get_skill_classifier() -> SkillClassifier:
    return KeywordSkillClassifier()


def _error_status(error: CVProcessingError) -> int:
    if isinstance(error, EncodingError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(error, ExtractionServiceUnavailable):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_502_BAD_GATEWAY


@router.post("/process-cv", response_model=ProcessCVResponse)
async def process_cv_upload(
    file: Optional[UploadFile] = File(None),
    current_user=Depends(require_candidate),
    client: GeminiExtractionClient = Depends(get_extraction_client),
    classifier: SkillClassifier = Depends(get_skill_classifier),
    settings: Settings = Depends(get_settings),
):
    """
    Extract a candidate profile from an uploaded PDF CV.

    The file itself is not stored here; the caller attaches it to the
    profile whether or not extraction succeeds.
    """
    if file is None or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file provided"
        )

    if file.content_type != PDF_MIME_TYPE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF files are supported"
        )

    pdf_bytes = await file.read()

    if len(pdf_bytes) > settings.max_cv_size_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File size must be less than {settings.max_cv_size_mb}MB"
        )

    logger.info("CV upload from user %s: %s (%d bytes)", current_user.id, file.filename, len(pdf_bytes))

    try:
        result = await process_cv(
            pdf_bytes,
            filename=file.filename,
            mime_type=PDF_MIME_TYPE,
            client=client,
            classifier=classifier,
        )
    except CVProcessingError as e:
        logger.error("CV processing failed for user %s: %s", current_user.id, e)
        raise HTTPException(
            status_code=_error_status(e),
            detail={"message": e.user_message, "reason": str(e)},
        )

    return ProcessCVResponse(
        success=True,
        message="CV processed successfully",
        extracted_data=result.profile,
        validation=result.validation,
        file_info=result.file_info,
        prompt_version=result.prompt_version,
    )


@router.post("/validate-profile", response_model=ValidationResult)
async def validate_profile_data(
    profile: UnifiedProfileData,
    current_user=Depends(require_candidate),
):
    """Re-check a profile before the final submit step."""
    return validate_profile(profile)
