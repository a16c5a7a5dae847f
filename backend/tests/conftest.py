# backend/tests/conftest.py
# Pytest fixtures. Run: pytest backend/tests -v
# The Gemini call is always faked; no API key or network is needed.

import json
import os
from types import SimpleNamespace

import fitz  # PyMuPDF
import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("SECRET_KEY", "test-secret-not-for-prod-0123456789abcdef")
os.environ["GEMINI_API_KEY"] = ""

from app.main import app  # noqa: E402
from app.services.auth import create_access_token  # noqa: E402


class FakeExtractionClient:
    """Stands in for GeminiExtractionClient; returns a canned model reply."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def extract(self, document, prompt):
        self.calls.append((document, prompt))
        if self.error is not None:
            raise self.error
        if isinstance(self.reply, (dict, list)):
            return json.dumps(self.reply)
        return self.reply


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_overrides():
    yield
    app.dependency_overrides.clear()


def _make_token(role: str = "candidate", user_id: str = "cand-1", email: str = "ana@test.local"):
    return create_access_token({"id": user_id, "email": email, "role": role})


@pytest.fixture
def candidate_headers():
    return {"Authorization": f"Bearer {_make_token()}"}


@pytest.fixture
def recruiter_headers():
    return {"Authorization": f"Bearer {_make_token(role='recruiter', user_id='rec-1')}"}


@pytest.fixture
def make_user():
    def _make_user(user_id: str = "cand-1", role: str = "candidate"):
        return SimpleNamespace(id=user_id, email=f"{user_id}@test.local", role=role)
    return _make_user


@pytest.fixture(scope="session")
def pdf_bytes():
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Ana Li - Backend Engineer")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def sample_extraction():
    return {
        "basic_info": {
            "first_name": "Ana",
            "last_name": "Li",
            "title": "Backend Engineer",
            "bio": "Python developer building APIs",
            "email": "ana@test.local",
            "experience_level": "senior",
        },
        "work_experiences": [
            {
                "title": "Engineer",
                "company": "Acme",
                "employment_type": "full_time",
                "is_current": True,
                "start_date": "2020-03",
                "end_date": "2024-01-01",
            }
        ],
        "educations": [
            {"degree_diploma": "BSc", "university_school": "MIT", "start_date": "2014"}
        ],
        "certifications": [
            {"title": "AWS SAA", "issuer": "AWS", "date": "2023-05-01"}
        ],
        "skills": ["Python", {"name": "Go", "proficiency": 80}],
    }


@pytest.fixture
def fake_client_factory():
    return FakeExtractionClient
