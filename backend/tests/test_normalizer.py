# backend/tests/test_normalizer.py
# Extraction output -> UnifiedProfileData, including malformed input.

from datetime import date

import pytest

from app.schemas.profile import LIST_SECTIONS, UnifiedProfileData
from app.services.normalizer import normalize_date, normalize_extracted_data
from app.services.skill_classifier import KeywordSkillClassifier, SkillClassifier
from app.services.validator import validate_profile

TODAY = date(2024, 6, 1)


@pytest.mark.parametrize("extracted", [
    {},
    None,
    "not an object",
    [1, 2, 3],
    {"basic_info": "oops", "work_experiences": "Acme, 2020", "skills": 42},
    {"educations": None, "awards": {"title": "x"}, "volunteering": [None, 3, "x"]},
])
def test_every_list_section_is_present(extracted):
    profile = normalize_extracted_data(extracted, today=TODAY)
    assert isinstance(profile, UnifiedProfileData)
    for section in LIST_SECTIONS:
        assert getattr(profile, section) == []


def test_absent_scalars_stay_none():
    profile = normalize_extracted_data({"basic_info": {"first_name": "Ana"}})
    assert profile.first_name == "Ana"
    assert profile.last_name == ""
    assert profile.email is None
    assert profile.years_of_experience is None


def test_end_to_end_certification_aliases():
    extracted = {
        "basic_info": {"first_name": "Ana", "last_name": "Li"},
        "certifications": [{"title": "AWS SAA", "issuer": "AWS", "date": "2023-05-01"}],
    }
    profile = normalize_extracted_data(extracted)

    assert profile.first_name == "Ana"
    assert profile.last_name == "Li"
    assert len(profile.certificates) == 1
    cert = profile.certificates[0]
    assert (cert.name, cert.issuing_authority, cert.issue_date) == ("AWS SAA", "AWS", "2023-05-01")
    assert validate_profile(profile).is_valid is True


def _cert_keys(profile):
    return [(c.name, c.issuing_authority, c.issue_date) for c in profile.certificates]


def test_certificate_merge_gives_same_set_from_either_key():
    entries = [
        {"name": "CKA", "issuing_authority": "CNCF", "issue_date": "2022-01-01"},
        {"name": "No issuer"},
        {"issuing_authority": "Nameless Org"},
    ]
    only_canonical = normalize_extracted_data({"certificates": entries})
    only_alternate = normalize_extracted_data({"certifications": entries})
    both = normalize_extracted_data({"certificates": entries, "certifications": entries})

    expected = [("CKA", "CNCF", "2022-01-01")]
    assert _cert_keys(only_canonical) == expected
    assert _cert_keys(only_alternate) == expected
    assert _cert_keys(both) == expected


def test_certificate_alias_priority():
    profile = normalize_extracted_data({"certifications": [{
        "name": "Primary", "title": "Secondary",
        "issuer": "Issuer", "organization": "Org",
        "date": "2021",
    }]})
    cert = profile.certificates[0]
    assert cert.name == "Primary"
    assert cert.issuing_authority == "Issuer"
    assert cert.issue_date == "2021-01-01"


def test_volunteering_organization_becomes_institution():
    profile = normalize_extracted_data({"volunteering": [
        {"role": "Mentor", "organization": "Red Cross", "cause": "Health", "start_date": "2019-01-01"}
    ]})
    vol = profile.volunteering[0]
    assert vol.institution == "Red Cross"
    assert vol.cause == "Health"
    assert "organization" not in vol.model_dump()


def test_skills_from_strings_and_objects():
    profile = normalize_extracted_data({"skills": [
        "Python",
        {"name": "Go", "proficiency": 80},
        {"skill_name": "Rust", "proficiency": 250},
        {"name": "  "},
        "",
        {"name": "SQL", "proficiency": "lots"},
    ]})
    assert profile.skills == ["Python", "Go", "Rust", "SQL"]
    assert [s.proficiency for s in profile.candidate_skills] == [50, 80, 100, 50]
    assert {s.skill_source for s in profile.candidate_skills} == {"cv_extraction"}


def test_flat_skills_keep_order_and_duplicates():
    profile = normalize_extracted_data({"skills": ["Python", "Go", "Python"]})
    assert profile.skills == ["Python", "Go", "Python"]


def test_current_role_has_no_end_date():
    profile = normalize_extracted_data({"work_experiences": [
        {"title": "Engineer", "company": "Acme", "is_current": "true",
         "start_date": "2020-03", "end_date": "2024-01-01", "employment_type": "gig"}
    ]})
    exp = profile.work_experience[0]
    assert exp.is_current is True
    assert exp.end_date is None
    assert exp.start_date == "2020-03-01"
    assert exp.employment_type == "full_time"


def test_work_and_education_defaults():
    profile = normalize_extracted_data({
        "work_experiences": [{"position": "Analyst"}],
        "educations": [{"degree": "BSc", "institution": "MIT", "gpa": "3.9"}],
    })
    exp = profile.work_experience[0]
    assert exp.title == "Analyst"
    assert exp.company == ""
    assert exp.start_date == ""
    edu = profile.education[0]
    assert (edu.degree_diploma, edu.university_school, edu.grade) == ("BSc", "MIT", "3.9")


def test_award_without_date_gets_today():
    profile = normalize_extracted_data({"awards": [{"title": "Best Paper", "offered_by": "ACM"}]}, today=TODAY)
    assert profile.awards[0].date == "2024-06-01"


def test_accomplishments_pass_through_unlinked():
    profile = normalize_extracted_data({"accomplishments": [{"title": "Cut costs"}]})
    acc = profile.accomplishments[0]
    assert acc.title == "Cut costs"
    assert acc.description == ""
    assert acc.work_experience_id is None


def test_projects_lists_and_flags():
    profile = normalize_extracted_data({"projects": [{
        "title": "Portal", "technologies": ["FastAPI", None, " "], "is_current": False,
    }]})
    project = profile.projects[0]
    assert project.name == "Portal"
    assert project.technologies == ["FastAPI"]
    assert project.can_share_details is True
    assert project.is_confidential is False


def test_basic_info_fallbacks():
    profile = normalize_extracted_data({"basic_info": {
        "first_name": " Ana ", "bio": "Short bio", "phone1": "+1 555",
        "experience_level": "Wizard", "years_of_experience": "7",
    }})
    assert profile.first_name == "Ana"
    assert profile.about == "Short bio"
    assert profile.phone == "+1 555"
    assert profile.experience_level is None
    assert profile.years_of_experience == 7.0


@pytest.mark.parametrize("raw,expected", [
    ("2023", "2023-01-01"),
    ("2023-5", "2023-05-01"),
    ("2023-05-17", "2023-05-17"),
    ("2023-05-17T10:00:00Z", "2023-05-17"),
    ("Present", "Present"),
    ("", None),
    (None, None),
])
def test_normalize_date(raw, expected):
    assert normalize_date(raw) == expected


def test_classifier_fills_missing_categories_only():
    profile = normalize_extracted_data(
        {
            "basic_info": {"title": "Software developer", "bio": "Python backend"},
            "skills": ["React", {"name": "Docker", "category": "Infra"}, "Communication"],
        },
        classifier=KeywordSkillClassifier(),
    )
    categories = [s.category for s in profile.candidate_skills]
    assert categories == ["Frontend Development", "Infra", "Soft Skills"]


def test_without_classifier_categories_stay_empty():
    profile = normalize_extracted_data({"skills": ["React"]})
    assert profile.candidate_skills[0].category is None


def test_broken_classifier_leaves_categories_unset(caplog):
    class Exploding(SkillClassifier):
        def detect_job_field(self, texts, skills):
            return "technology"

        def categorize(self, skill_name, job_field):
            if skill_name == "Go":
                raise RuntimeError("lookup table missing")
            return "Programming Languages"

    profile = normalize_extracted_data(
        {"skills": ["Python", {"name": "Go"}, {"name": "SQL", "category": "Databases"}]},
        classifier=Exploding(),
    )

    assert [s.category for s in profile.candidate_skills] == [None, None, "Databases"]
    assert profile.skills == ["Python", "Go", "SQL"]
    assert "lookup table missing" in caplog.text
