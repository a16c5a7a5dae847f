# backend/tests/test_cv_router.py
# /api/ai endpoints: auth, upload checks, error mapping and response shape.

import sys

import pytest

from app.main import app
from app.routers.cv import get_extraction_client
from app.services.exceptions import (
    USER_FACING_MESSAGE,
    ExtractionServiceError,
    ExtractionServiceUnavailable,
)


def _use_fake(fake):
    app.dependency_overrides[get_extraction_client] = lambda: fake


def _upload(client, headers, content, filename="cv.pdf", content_type="application/pdf"):
    return client.post(
        "/api/ai/process-cv",
        headers=headers,
        files={"file": (filename, content, content_type)},
    )


def test_requires_token(client, pdf_bytes):
    r = _upload(client, {}, pdf_bytes)
    assert r.status_code == 401


def test_rejects_invalid_token(client, pdf_bytes):
    r = _upload(client, {"Authorization": "Bearer not-a-jwt"}, pdf_bytes)
    assert r.status_code == 401


def test_rejects_non_candidate(client, recruiter_headers, pdf_bytes):
    r = _upload(client, recruiter_headers, pdf_bytes)
    assert r.status_code == 403


def test_missing_file_is_400(client, candidate_headers):
    r = client.post("/api/ai/process-cv", headers=candidate_headers)
    assert r.status_code == 400


def test_non_pdf_is_400(client, candidate_headers, fake_client_factory):
    fake = fake_client_factory(reply="{}")
    _use_fake(fake)
    r = _upload(client, candidate_headers, b"hello", filename="cv.txt", content_type="text/plain")
    assert r.status_code == 400
    assert "PDF" in r.json()["detail"]
    assert fake.calls == []


def test_oversized_file_is_400(client, candidate_headers, fake_client_factory):
    fake = fake_client_factory(reply="{}")
    _use_fake(fake)
    r = _upload(client, candidate_headers, b"%PDF" + b"0" * (10 * 1024 * 1024))
    assert r.status_code == 400
    assert fake.calls == []


def test_success_shape(client, candidate_headers, pdf_bytes, sample_extraction, fake_client_factory):
    _use_fake(fake_client_factory(reply=sample_extraction))

    r = _upload(client, candidate_headers, pdf_bytes, filename="ana.pdf")

    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["extracted_data"]["first_name"] == "Ana"
    assert body["extracted_data"]["certificates"][0]["issuing_authority"] == "AWS"
    assert body["validation"] == {"isValid": True, "errors": []}
    assert body["file_info"]["name"] == "ana.pdf"
    assert body["file_info"]["page_count"] == 1
    assert body["prompt_version"]
    assert r.headers["Cache-Control"] == "no-cache, no-store, must-revalidate"


def test_unreadable_pdf_is_400(client, candidate_headers, fake_client_factory):
    _use_fake(fake_client_factory(reply="{}"))
    r = _upload(client, candidate_headers, b"not really a pdf")
    assert r.status_code == 400
    assert r.json()["detail"]["message"] == USER_FACING_MESSAGE


def test_model_failure_is_502(client, candidate_headers, pdf_bytes, fake_client_factory):
    _use_fake(fake_client_factory(error=ExtractionServiceError("quota exceeded")))
    r = _upload(client, candidate_headers, pdf_bytes)
    assert r.status_code == 502
    detail = r.json()["detail"]
    assert detail["message"] == USER_FACING_MESSAGE
    assert detail["reason"] == "CV processing failed: quota exceeded"


def test_unparseable_reply_is_502(client, candidate_headers, pdf_bytes, fake_client_factory):
    _use_fake(fake_client_factory(reply="I could not find any CV."))
    r = _upload(client, candidate_headers, pdf_bytes)
    assert r.status_code == 502
    assert "no valid JSON" in r.json()["detail"]["reason"]


@pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"), reason="no int digit limit on this interpreter")
def test_oversized_number_in_reply_is_502(client, candidate_headers, pdf_bytes, fake_client_factory):
    _use_fake(fake_client_factory(reply='{"a": ' + "1" * 5000 + "}"))
    r = _upload(client, candidate_headers, pdf_bytes)
    assert r.status_code == 502
    detail = r.json()["detail"]
    assert detail["message"] == USER_FACING_MESSAGE
    assert "failed to parse extracted data as JSON" in detail["reason"]


def test_deeply_nested_reply_is_502(client, candidate_headers, pdf_bytes, fake_client_factory):
    _use_fake(fake_client_factory(reply='{"a": ' + "[" * 200000 + "]" * 200000 + "}"))
    r = _upload(client, candidate_headers, pdf_bytes)
    assert r.status_code == 502


def test_unconfigured_model_is_503(client, candidate_headers, pdf_bytes, fake_client_factory):
    _use_fake(fake_client_factory(error=ExtractionServiceUnavailable("Gemini API not configured")))
    r = _upload(client, candidate_headers, pdf_bytes)
    assert r.status_code == 503


def test_validate_profile_endpoint(client, candidate_headers):
    r = client.post(
        "/api/ai/validate-profile",
        headers=candidate_headers,
        json={"first_name": "Ana", "last_name": "", "volunteering": [{"role": "Mentor"}]},
    )
    assert r.status_code == 200
    assert r.json() == {
        "isValid": False,
        "errors": ["Last name is required", "Volunteering 1: Institution is required"],
    }


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["status"] == "running"
