"""
Profile schemas for CV extraction and the unified candidate profile
"""
from typing import List, Optional
from pydantic import BaseModel, Field


EMPLOYMENT_TYPES = ("full_time", "part_time", "contract", "internship", "freelance", "volunteer")
EXPERIENCE_LEVELS = ("entry", "junior", "mid", "senior", "lead", "principal")

CV_SKILL_SOURCE = "cv_extraction"
DEFAULT_SKILL_PROFICIENCY = 50


# ============================================================================
# Unified Profile Entities
# ============================================================================

class WorkExperienceData(BaseModel):
    title: str = ""
    company: str = ""
    employment_type: str = "full_time"
    is_current: bool = False
    start_date: str = ""
    end_date: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None


class EducationData(BaseModel):
    degree_diploma: str = ""
    university_school: str = ""
    field_of_study: Optional[str] = None
    start_date: str = ""
    end_date: Optional[str] = None
    grade: Optional[str] = None
    activities_societies: Optional[str] = None


class CertificateData(BaseModel):
    name: str
    issuing_authority: str
    issue_date: Optional[str] = None
    expiry_date: Optional[str] = None
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None
    description: Optional[str] = None
    media_url: Optional[str] = None


class ProjectData(BaseModel):
    name: str = ""
    description: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_current: bool = False
    role: Optional[str] = None
    responsibilities: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)
    tools: List[str] = Field(default_factory=list)
    methodologies: List[str] = Field(default_factory=list)
    url: Optional[str] = None
    repository_url: Optional[str] = None
    media_urls: List[str] = Field(default_factory=list)
    skills_gained: List[str] = Field(default_factory=list)
    can_share_details: bool = True
    is_confidential: bool = False


class AwardData(BaseModel):
    title: str = ""
    offered_by: str = ""
    associated_with: Optional[str] = None
    date: str = ""
    description: Optional[str] = None
    media_url: Optional[str] = None
    skill_ids: List[str] = Field(default_factory=list)


class VolunteeringData(BaseModel):
    role: str = ""
    institution: str = ""
    cause: Optional[str] = None
    location: Optional[str] = None
    start_date: str = ""
    end_date: Optional[str] = None
    is_current: bool = False
    description: Optional[str] = None
    media_url: Optional[str] = None


class CandidateSkillData(BaseModel):
    skill_name: str
    skill_source: str = CV_SKILL_SOURCE
    proficiency: int = Field(default=DEFAULT_SKILL_PROFICIENCY, ge=0, le=100)
    category: Optional[str] = None


class AccomplishmentData(BaseModel):
    title: str = ""
    description: str = ""
    work_experience_id: Optional[str] = None


class CVDocument(BaseModel):
    id: Optional[str] = None
    original_filename: str
    file_size: int
    file_type: str
    file_url: Optional[str] = None
    uploaded_at: str
    is_primary: bool = False


# ============================================================================
# Unified Profile
# ============================================================================

class UnifiedProfileData(BaseModel):
    """Canonical candidate profile shared by every step of the profile form"""
    first_name: str = ""
    last_name: str = ""
    additional_name: Optional[str] = None
    title: Optional[str] = None
    bio: Optional[str] = None
    about: Optional[str] = None
    location: Optional[str] = None

    email: Optional[str] = None
    phone: Optional[str] = None
    phone2: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    personal_website: Optional[str] = None

    years_of_experience: Optional[float] = None
    experience_level: Optional[str] = None
    current_position: Optional[str] = None
    industry: Optional[str] = None

    work_experience: List[WorkExperienceData] = Field(default_factory=list)
    education: List[EducationData] = Field(default_factory=list)
    certificates: List[CertificateData] = Field(default_factory=list)
    projects: List[ProjectData] = Field(default_factory=list)
    awards: List[AwardData] = Field(default_factory=list)
    volunteering: List[VolunteeringData] = Field(default_factory=list)
    candidate_skills: List[CandidateSkillData] = Field(default_factory=list)
    accomplishments: List[AccomplishmentData] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    cv_documents: List[CVDocument] = Field(default_factory=list)


LIST_SECTIONS = (
    "work_experience", "education", "certificates", "projects", "awards",
    "volunteering", "candidate_skills", "accomplishments", "skills", "cv_documents",
)


# ============================================================================
# Pipeline Response Schemas
# ============================================================================

class ValidationResult(BaseModel):
    is_valid: bool = Field(alias="isValid")
    errors: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class FileInfo(BaseModel):
    name: str
    size: int
    type: str
    page_count: Optional[int] = None


class ProcessCVResponse(BaseModel):
    success: bool = True
    message: str
    extracted_data: UnifiedProfileData
    validation: ValidationResult
    file_info: FileInfo
    prompt_version: str
