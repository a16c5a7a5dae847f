"""
Data normalizer: maps loosely-typed extraction output onto UnifiedProfileData.

The model output is treated as an untyped document. Every target field is
resolved through an ordered alias list, and every helper is total: missing,
extra or mistyped keys fall back to safe defaults instead of raising.
"""
import logging
import math
import re
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..schemas.profile import (
    EMPLOYMENT_TYPES,
    EXPERIENCE_LEVELS,
    CV_SKILL_SOURCE,
    DEFAULT_SKILL_PROFICIENCY,
    AccomplishmentData,
    AwardData,
    CandidateSkillData,
    CertificateData,
    EducationData,
    ProjectData,
    UnifiedProfileData,
    VolunteeringData,
    WorkExperienceData,
)
from .skill_classifier import SkillClassifier

logger = logging.getLogger(__name__)


# ============================================================================
# Alias tables: target field -> source keys, in priority order
# ============================================================================

BASIC_INFO_ALIASES: Dict[str, Sequence[str]] = {
    "first_name": ("first_name",),
    "last_name": ("last_name",),
    "additional_name": ("additional_name",),
    "title": ("title",),
    "bio": ("bio",),
    "about": ("about", "bio"),
    "location": ("location",),
    "email": ("email",),
    "phone": ("phone", "phone1"),
    "phone2": ("phone2",),
    "linkedin_url": ("linkedin_url",),
    "github_url": ("github_url",),
    "portfolio_url": ("portfolio_url",),
    "personal_website": ("personal_website",),
    "current_position": ("current_position",),
    "industry": ("industry",),
}

WORK_EXPERIENCE_ALIASES: Dict[str, Sequence[str]] = {
    "title": ("title", "position"),
    "company": ("company",),
    "location": ("location",),
    "description": ("description",),
}

EDUCATION_ALIASES: Dict[str, Sequence[str]] = {
    "degree_diploma": ("degree_diploma", "degree"),
    "university_school": ("university_school", "institution", "school"),
    "field_of_study": ("field_of_study",),
    "grade": ("grade", "gpa"),
    "activities_societies": ("activities_societies",),
}

CERTIFICATE_ALIASES: Dict[str, Sequence[str]] = {
    "name": ("name",),
    "issuing_authority": ("issuing_authority",),
    "issue_date": ("issue_date",),
    "expiry_date": ("expiry_date",),
    "credential_id": ("credential_id",),
    "credential_url": ("credential_url",),
    "description": ("description",),
    "media_url": ("media_url",),
}

# Entries under the alternate "certifications" key use looser names
CERTIFICATION_ALIASES: Dict[str, Sequence[str]] = {
    **CERTIFICATE_ALIASES,
    "name": ("name", "title"),
    "issuing_authority": ("issuing_authority", "issuer", "organization"),
    "issue_date": ("issue_date", "date"),
}

PROJECT_ALIASES: Dict[str, Sequence[str]] = {
    "name": ("name", "title"),
    "description": ("description",),
    "role": ("role",),
    "url": ("url",),
    "repository_url": ("repository_url",),
}

AWARD_ALIASES: Dict[str, Sequence[str]] = {
    "title": ("title", "name"),
    "offered_by": ("offered_by", "issuer"),
    "associated_with": ("associated_with",),
    "description": ("description",),
    "media_url": ("media_url",),
}

VOLUNTEERING_ALIASES: Dict[str, Sequence[str]] = {
    "role": ("role",),
    "institution": ("organization", "institution"),
    "cause": ("cause",),
    "location": ("location",),
    "description": ("description",),
    "media_url": ("media_url",),
}

SKILL_NAME_KEYS = ("name", "skill_name")

_YEAR_RE = re.compile(r"^(\d{4})$")
_YEAR_MONTH_RE = re.compile(r"^(\d{4})-(\d{1,2})$")
_ISO_DATE_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:[T ].*)?$")


# ============================================================================
# Total helpers
# ============================================================================

def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    # Anything that is not an array counts as absent
    return value if isinstance(value, list) else []


def _dict_entries(value: Any) -> List[Dict[str, Any]]:
    return [entry for entry in _as_list(value) if isinstance(entry, dict)]


def _clean_str(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return None
    text = str(value).strip()
    return text or None


def _first(source: Dict[str, Any], keys: Iterable[str]) -> Optional[str]:
    for key in keys:
        text = _clean_str(source.get(key))
        if text:
            return text
    return None


def _resolve(source: Dict[str, Any], aliases: Dict[str, Sequence[str]]) -> Dict[str, Optional[str]]:
    return {target: _first(source, keys) for target, keys in aliases.items()}


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    if isinstance(value, (int, float)):
        return value != 0
    return False


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().rstrip("+")
    elif not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _string_list(value: Any) -> List[str]:
    return [text for text in (_clean_str(item) for item in _as_list(value)) if text]


def normalize_date(value: Any) -> Optional[str]:
    """
    Pad partial dates to YYYY-MM-DD (year only -> January 1st).

    Unrecognized strings are kept verbatim so no information is lost.
    """
    text = _clean_str(value)
    if not text:
        return None
    m = _ISO_DATE_RE.match(text)
    if m:
        return m.group(1)
    m = _YEAR_MONTH_RE.match(text)
    if m and 1 <= int(m.group(2)) <= 12:
        return f"{m.group(1)}-{int(m.group(2)):02d}-01"
    m = _YEAR_RE.match(text)
    if m:
        return f"{m.group(1)}-01-01"
    return text


def _first_date(source: Dict[str, Any], keys: Iterable[str]) -> Optional[str]:
    for key in keys:
        normalized = normalize_date(source.get(key))
        if normalized:
            return normalized
    return None


def normalize_proficiency(value: Any) -> int:
    number = _as_number(value)
    if number is None:
        return DEFAULT_SKILL_PROFICIENCY
    return int(max(0, min(100, round(number))))


# ============================================================================
# Section mappers
# ============================================================================

def _map_work_experience(entry: Dict[str, Any]) -> WorkExperienceData:
    fields = _resolve(entry, WORK_EXPERIENCE_ALIASES)
    is_current = _as_bool(entry.get("is_current"))
    employment_type = (_clean_str(entry.get("employment_type")) or "").lower()
    return WorkExperienceData(
        title=fields["title"] or "",
        company=fields["company"] or "",
        employment_type=employment_type if employment_type in EMPLOYMENT_TYPES else "full_time",
        is_current=is_current,
        start_date=_first_date(entry, ("start_date",)) or "",
        end_date=None if is_current else _first_date(entry, ("end_date",)),
        location=fields["location"],
        description=fields["description"],
    )


def _map_education(entry: Dict[str, Any]) -> EducationData:
    fields = _resolve(entry, EDUCATION_ALIASES)
    return EducationData(
        degree_diploma=fields["degree_diploma"] or "",
        university_school=fields["university_school"] or "",
        field_of_study=fields["field_of_study"],
        start_date=_first_date(entry, ("start_date",)) or "",
        end_date=_first_date(entry, ("end_date",)),
        grade=fields["grade"],
        activities_societies=fields["activities_societies"],
    )


def _map_certificate(entry: Dict[str, Any], aliases: Dict[str, Sequence[str]]) -> Dict[str, Optional[str]]:
    fields = _resolve(entry, aliases)
    fields["issue_date"] = _first_date(entry, aliases["issue_date"])
    fields["expiry_date"] = _first_date(entry, aliases["expiry_date"])
    return fields


def normalize_certificates(extracted: Dict[str, Any]) -> List[CertificateData]:
    """
    Merge "certificates" and "certifications", then drop entries missing a
    name or an issuing authority. Exact duplicates collapse to one entry.
    """
    candidates = [_map_certificate(c, CERTIFICATE_ALIASES) for c in _dict_entries(extracted.get("certificates"))]
    candidates += [_map_certificate(c, CERTIFICATION_ALIASES) for c in _dict_entries(extracted.get("certifications"))]

    certificates: List[CertificateData] = []
    seen = set()
    dropped = 0
    for fields in candidates:
        if not fields["name"] or not fields["issuing_authority"]:
            dropped += 1
            continue
        key = (fields["name"].lower(), fields["issuing_authority"].lower(), fields["issue_date"] or "")
        if key in seen:
            continue
        seen.add(key)
        certificates.append(CertificateData(**fields))

    if dropped:
        logger.warning("Dropped %d certificate(s) without name or issuing authority", dropped)
    return certificates


def _map_project(entry: Dict[str, Any]) -> ProjectData:
    fields = _resolve(entry, PROJECT_ALIASES)
    is_current = _as_bool(entry.get("is_current"))
    return ProjectData(
        name=fields["name"] or "",
        description=fields["description"],
        start_date=_first_date(entry, ("start_date",)),
        end_date=None if is_current else _first_date(entry, ("end_date",)),
        is_current=is_current,
        role=fields["role"],
        responsibilities=_string_list(entry.get("responsibilities")),
        technologies=_string_list(entry.get("technologies")),
        tools=_string_list(entry.get("tools")),
        methodologies=_string_list(entry.get("methodologies")),
        url=fields["url"],
        repository_url=fields["repository_url"],
        media_urls=_string_list(entry.get("media_urls")),
        skills_gained=_string_list(entry.get("skills_gained")),
        can_share_details=_as_bool(entry["can_share_details"]) if "can_share_details" in entry else True,
        is_confidential=_as_bool(entry.get("is_confidential")),
    )


def _map_award(entry: Dict[str, Any], today: date) -> AwardData:
    fields = _resolve(entry, AWARD_ALIASES)
    return AwardData(
        title=fields["title"] or "",
        offered_by=fields["offered_by"] or "",
        associated_with=fields["associated_with"],
        date=_first_date(entry, ("date", "issue_date")) or today.isoformat(),
        description=fields["description"],
        media_url=fields["media_url"],
        skill_ids=_string_list(entry.get("skill_ids")),
    )


def _map_volunteering(entry: Dict[str, Any]) -> VolunteeringData:
    fields = _resolve(entry, VOLUNTEERING_ALIASES)
    is_current = _as_bool(entry.get("is_current"))
    return VolunteeringData(
        role=fields["role"] or "",
        institution=fields["institution"] or "",
        cause=fields["cause"],
        location=fields["location"],
        start_date=_first_date(entry, ("start_date",)) or "",
        end_date=None if is_current else _first_date(entry, ("end_date",)),
        is_current=is_current,
        description=fields["description"],
        media_url=fields["media_url"],
    )


def _map_accomplishment(entry: Dict[str, Any]) -> AccomplishmentData:
    return AccomplishmentData(
        title=_clean_str(entry.get("title")) or "",
        description=_clean_str(entry.get("description")) or "",
        work_experience_id=None,
    )


def normalize_skills(raw_skills: Any) -> List[CandidateSkillData]:
    """Accept plain strings or {name, proficiency, category} objects."""
    skills: List[CandidateSkillData] = []
    for item in _as_list(raw_skills):
        if isinstance(item, dict):
            name = _first(item, SKILL_NAME_KEYS)
            proficiency = normalize_proficiency(item.get("proficiency"))
            category = _clean_str(item.get("category"))
        else:
            name = _clean_str(item)
            proficiency = DEFAULT_SKILL_PROFICIENCY
            category = None
        if not name:
            continue
        skills.append(CandidateSkillData(
            skill_name=name,
            skill_source=CV_SKILL_SOURCE,
            proficiency=proficiency,
            category=category,
        ))
    return skills


def _categorize_skills(
    skills: List[CandidateSkillData],
    classifier: SkillClassifier,
    texts: List[Optional[str]],
) -> None:
    if not skills:
        return
    names = [s.skill_name for s in skills]
    # A failing classifier leaves every category as extracted
    try:
        job_field = classifier.detect_job_field([t for t in texts if t], names)
        categories = {
            i: classifier.categorize(skill.skill_name, job_field)
            for i, skill in enumerate(skills)
            if not skill.category
        }
    except Exception as e:
        logger.warning("Skill classifier %s failed, categories left empty: %s", type(classifier).__name__, e)
        return

    for i, category in categories.items():
        skills[i].category = _clean_str(category) if isinstance(category, str) else None
    logger.info("Categorized %d skill(s) for job field '%s'", len(categories), job_field)


# ============================================================================
# Entry point
# ============================================================================

def normalize_extracted_data(
    extracted: Any,
    classifier: Optional[SkillClassifier] = None,
    today: Optional[date] = None,
) -> UnifiedProfileData:
    """
    Map extraction output onto the unified profile. Never raises on bad input.

    Args:
        extracted: the parsed model output (anything that is not a dict counts as empty)
        classifier: optional strategy used to fill in missing skill categories
        today: date used for awards without a date (defaults to date.today())
    """
    data = _as_dict(extracted)
    today = today or date.today()
    basic = _as_dict(data.get("basic_info"))

    profile_fields = _resolve(basic, BASIC_INFO_ALIASES)
    first_name = profile_fields.pop("first_name") or ""
    last_name = profile_fields.pop("last_name") or ""
    experience_level = (_clean_str(basic.get("experience_level")) or "").lower()

    candidate_skills = normalize_skills(data.get("skills"))
    if classifier is not None:
        _categorize_skills(
            candidate_skills,
            classifier,
            [profile_fields["title"], profile_fields["current_position"], profile_fields["bio"]],
        )

    profile = UnifiedProfileData(
        first_name=first_name,
        last_name=last_name,
        years_of_experience=_as_number(basic.get("years_of_experience")),
        experience_level=experience_level if experience_level in EXPERIENCE_LEVELS else None,
        work_experience=[_map_work_experience(e) for e in _dict_entries(data.get("work_experiences"))],
        education=[_map_education(e) for e in _dict_entries(data.get("educations"))],
        certificates=normalize_certificates(data),
        projects=[_map_project(e) for e in _dict_entries(data.get("projects"))],
        awards=[_map_award(e, today) for e in _dict_entries(data.get("awards"))],
        volunteering=[_map_volunteering(e) for e in _dict_entries(data.get("volunteering"))],
        candidate_skills=candidate_skills,
        accomplishments=[_map_accomplishment(e) for e in _dict_entries(data.get("accomplishments"))],
        skills=[skill.skill_name for skill in candidate_skills],
        cv_documents=[],
        **profile_fields,
    )

    logger.info(
        "Normalized profile: work=%d education=%d certificates=%d projects=%d "
        "awards=%d volunteering=%d skills=%d accomplishments=%d",
        len(profile.work_experience), len(profile.education), len(profile.certificates),
        len(profile.projects), len(profile.awards), len(profile.volunteering),
        len(profile.candidate_skills), len(profile.accomplishments),
    )
    return profile
