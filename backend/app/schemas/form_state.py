"""
State of the multi-step profile form
"""
from typing import List, Literal
from pydantic import BaseModel, Field

from .profile import UnifiedProfileData


CVProcessingStatus = Literal["none", "completed", "failed"]


class ProfileFormState(BaseModel):
    """Single owner of the in-progress profile; every step reads and writes through it"""
    version: int = 0
    data: UnifiedProfileData = Field(default_factory=UnifiedProfileData)
    cv_processing_status: CVProcessingStatus = "none"
    cv_extraction_completed: bool = False
    uploaded_cv_ids: List[str] = Field(default_factory=list)
    validation_errors: List[str] = Field(default_factory=list)
