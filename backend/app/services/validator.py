"""
Profile validator: collects every missing required field in one pass.
"""
from typing import Any, List, Optional, Union

from ..schemas.profile import UnifiedProfileData, ValidationResult


def _is_blank(value: Optional[Any]) -> bool:
    return value is None or not str(value).strip()


def validate_profile(profile: Union[UnifiedProfileData, dict]) -> ValidationResult:
    """
    Return {isValid, errors}. Never raises for missing fields and never
    mutates the profile; indices in messages are 1-based.
    """
    if not isinstance(profile, UnifiedProfileData):
        profile = UnifiedProfileData.model_validate(profile)

    errors: List[str] = []

    if _is_blank(profile.first_name):
        errors.append("First name is required")
    if _is_blank(profile.last_name):
        errors.append("Last name is required")

    for i, exp in enumerate(profile.work_experience, start=1):
        if _is_blank(exp.title):
            errors.append(f"Work experience {i}: Title is required")
        if _is_blank(exp.company):
            errors.append(f"Work experience {i}: Company is required")
        if _is_blank(exp.start_date):
            errors.append(f"Work experience {i}: Start date is required")

    for i, edu in enumerate(profile.education, start=1):
        if _is_blank(edu.degree_diploma):
            errors.append(f"Education {i}: Degree is required")
        if _is_blank(edu.university_school):
            errors.append(f"Education {i}: Institution is required")

    for i, acc in enumerate(profile.accomplishments, start=1):
        if _is_blank(acc.title):
            errors.append(f"Accomplishment {i}: Title is required")
        if _is_blank(acc.description):
            errors.append(f"Accomplishment {i}: Description is required")

    for i, vol in enumerate(profile.volunteering, start=1):
        if _is_blank(vol.role):
            errors.append(f"Volunteering {i}: Role is required")
        if _is_blank(vol.institution):
            errors.append(f"Volunteering {i}: Institution is required")

    return ValidationResult(is_valid=not errors, errors=errors)
