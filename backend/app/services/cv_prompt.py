"""
Extraction prompt sent to the model together with the CV document.

The JSON shape below is a contract the model is asked to follow; nothing
enforces it, so the parser and normalizer must cope with violations.
"""

PROMPT_VERSION = "2024.3"

CV_EXTRACTION_PROMPT = """
Extract candidate profile data from this CV and return STRICT JSON matching the EXACT structure:

{
  "basic_info": {
    "first_name": "string",
    "last_name": "string",
    "additional_name": "string|null",
    "title": "string|null",
    "current_position": "string|null",
    "industry": "string|null",
    "bio": "string|null",
    "about": "string|null",
    "location": "string|null",
    "email": "string|null",
    "phone": "string|null",
    "phone2": "string|null",
    "personal_website": "string|null",
    "github_url": "string|null",
    "linkedin_url": "string|null",
    "portfolio_url": "string|null",
    "years_of_experience": "number|null",
    "experience_level": "entry|junior|mid|senior|lead|principal|null"
  },
  "work_experiences": [
    {
      "title": "string",
      "company": "string",
      "employment_type": "full_time|part_time|contract|internship|freelance|volunteer",
      "is_current": "boolean",
      "start_date": "YYYY-MM-DD",
      "end_date": "YYYY-MM-DD|null",
      "location": "string|null",
      "description": "string|null"
    }
  ],
  "educations": [
    {
      "degree_diploma": "string",
      "university_school": "string",
      "field_of_study": "string|null",
      "start_date": "YYYY-MM-DD",
      "end_date": "YYYY-MM-DD|null",
      "grade": "string|null"
    }
  ],
  "certificates": [
    {
      "name": "string",
      "issuing_authority": "string",
      "issue_date": "YYYY-MM-DD|null",
      "expiry_date": "YYYY-MM-DD|null",
      "credential_id": "string|null",
      "credential_url": "string|null",
      "description": "string|null",
      "media_url": "string|null"
    }
  ],
  "projects": [
    {
      "name": "string",
      "description": "string",
      "start_date": "YYYY-MM-DD|null",
      "end_date": "YYYY-MM-DD|null",
      "is_current": "boolean",
      "role": "string|null",
      "responsibilities": ["string"],
      "technologies": ["string"],
      "tools": ["string"],
      "methodologies": ["string"],
      "url": "string|null",
      "repository_url": "string|null"
    }
  ],
  "skills": [
    {
      "name": "string",
      "category": "string|null",
      "proficiency": "number|null (0-100)"
    }
  ],
  "awards": [
    {
      "title": "string",
      "offered_by": "string",
      "associated_with": "string|null",
      "date": "YYYY-MM-DD",
      "description": "string|null"
    }
  ],
  "volunteering": [
    {
      "role": "string",
      "institution": "string",
      "cause": "string|null",
      "location": "string|null",
      "start_date": "YYYY-MM-DD",
      "end_date": "YYYY-MM-DD|null",
      "is_current": "boolean",
      "description": "string|null"
    }
  ],
  "accomplishments": [
    {
      "title": "string",
      "description": "string"
    }
  ]
}

CERTIFICATE RULES:
1. ALWAYS use "certificates" as the field name (never "certifications")
2. Look for certificates in ALL sections: Certifications, Licenses, Professional Credentials, Training, Courses
3. Example: "AWS Certified Solutions Architect, Amazon Web Services, 2023" becomes
   {"name": "AWS Certified Solutions Architect", "issuing_authority": "Amazon Web Services", "issue_date": "2023-01-01"}

GENERAL RULES:
1. Return ONLY the JSON object with NO additional text, NO markdown, NO code blocks
2. Use the exact field names as specified; never add fields that are not in the schema
3. Convert all dates to YYYY-MM-DD; if only the year is known use January 1st (YYYY-01-01)
4. Use null for missing optional fields
5. Return empty arrays for missing sections
6. For enums, ONLY use the listed values
7. Map volunteering organizations to the "institution" field
8. Extract skills from job descriptions, projects and dedicated skills sections
9. Extract accomplishments from work experience descriptions and achievement sections
"""


def build_extraction_prompt() -> str:
    return CV_EXTRACTION_PROMPT.strip()
