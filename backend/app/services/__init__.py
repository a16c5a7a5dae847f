from .auth import (
    create_access_token,
    get_current_user,
    require_candidate,
    bearer_scheme
)
from .exceptions import (
    CVProcessingError,
    EncodingError,
    ExtractionServiceError,
    ExtractionServiceUnavailable,
    RecoveryParseError
)
from .cv_encoder import EncodedDocument, encode_document
from .cv_prompt import PROMPT_VERSION, build_extraction_prompt
from .gemini_client import GeminiExtractionClient, get_genai_client
from .json_recovery import recover_json_object
from .normalizer import normalize_extracted_data
from .skill_classifier import SkillClassifier, KeywordSkillClassifier
from .validator import validate_profile
from .cv_pipeline import CVProcessingResult, process_cv
from .form_population import (
    apply_cv_extraction,
    mark_cv_extraction_failed,
    update_section,
    build_submission_payload
)

__all__ = [
    # Auth
    "create_access_token",
    "get_current_user",
    "require_candidate",
    "bearer_scheme",
    # Errors
    "CVProcessingError",
    "EncodingError",
    "ExtractionServiceError",
    "ExtractionServiceUnavailable",
    "RecoveryParseError",
    # Pipeline stages
    "EncodedDocument",
    "encode_document",
    "PROMPT_VERSION",
    "build_extraction_prompt",
    "GeminiExtractionClient",
    "get_genai_client",
    "recover_json_object",
    "normalize_extracted_data",
    "SkillClassifier",
    "KeywordSkillClassifier",
    "validate_profile",
    "CVProcessingResult",
    "process_cv",
    # Form population
    "apply_cv_extraction",
    "mark_cv_extraction_failed",
    "update_section",
    "build_submission_payload"
]
