"""
Form population: pure reducers over ProfileFormState.

Each reducer returns a new state with version + 1 and leaves its input
untouched, so a stale writer can be detected by comparing versions.
"""
import logging
from typing import Any, Optional

from ..schemas.form_state import ProfileFormState
from ..schemas.profile import LIST_SECTIONS, CVDocument, UnifiedProfileData
from .cv_pipeline import CVProcessingResult
from .validator import validate_profile

logger = logging.getLogger(__name__)

# Sections an extraction may replace; skills and cv_documents are derived
EXTRACTED_LIST_SECTIONS = tuple(
    s for s in LIST_SECTIONS if s not in ("skills", "cv_documents")
)

SCALAR_FIELDS = tuple(
    name for name in UnifiedProfileData.model_fields if name not in LIST_SECTIONS
)


def _next(state: ProfileFormState) -> ProfileFormState:
    new_state = state.model_copy(deep=True)
    new_state.version = state.version + 1
    return new_state


def _attach_document(new_state: ProfileFormState, cv_document: Optional[CVDocument]) -> None:
    if cv_document is None:
        return
    new_state.data.cv_documents.append(cv_document)
    if cv_document.id:
        new_state.uploaded_cv_ids.append(cv_document.id)


def apply_cv_extraction(
    state: ProfileFormState,
    result: CVProcessingResult,
    cv_document: Optional[CVDocument] = None,
) -> ProfileFormState:
    """
    Merge a successful extraction into the form.

    Basic scalars are overwritten. A list section is replaced only when the
    extraction produced entries for it, so an empty section never wipes what
    the candidate already typed.
    """
    new_state = _next(state)
    extracted = result.profile.model_copy(deep=True)

    for name in SCALAR_FIELDS:
        setattr(new_state.data, name, getattr(extracted, name))

    for section in EXTRACTED_LIST_SECTIONS:
        items = getattr(extracted, section)
        if items:
            setattr(new_state.data, section, items)

    new_state.data.skills = [s.skill_name for s in new_state.data.candidate_skills]
    _attach_document(new_state, cv_document)

    new_state.cv_processing_status = "completed"
    new_state.cv_extraction_completed = True
    new_state.validation_errors = list(result.validation.errors)
    logger.info("Form state v%d populated from CV extraction", new_state.version)
    return new_state


def mark_cv_extraction_failed(
    state: ProfileFormState,
    cv_document: Optional[CVDocument] = None,
) -> ProfileFormState:
    """Record a failed extraction; the uploaded file is still kept on the profile."""
    new_state = _next(state)
    _attach_document(new_state, cv_document)
    new_state.cv_processing_status = "failed"
    logger.warning("CV extraction failed, form state v%d keeps manual data", new_state.version)
    return new_state


def update_section(state: ProfileFormState, section: str, value: Any) -> ProfileFormState:
    """Write one named slice of the profile (one wizard step)."""
    if section not in UnifiedProfileData.model_fields:
        raise ValueError(f"Unknown profile section: {section}")

    merged = state.data.model_dump()
    merged[section] = value
    data = UnifiedProfileData.model_validate(merged)

    new_state = _next(state)
    new_state.data = data
    if section == "candidate_skills":
        new_state.data.skills = [s.skill_name for s in data.candidate_skills]
    return new_state


def build_submission_payload(state: ProfileFormState) -> dict:
    """
    JSON-ready profile for the persistence layer.

    Raises:
        ValueError: the profile is missing required fields
    """
    validation = validate_profile(state.data)
    if not validation.is_valid:
        raise ValueError("; ".join(validation.errors))
    payload = state.data.model_dump(mode="json")
    payload["uploaded_cv_ids"] = list(state.uploaded_cv_ids)
    return payload
