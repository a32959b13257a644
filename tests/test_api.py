# tests/test_api.py
from __future__ import annotations

import io

import pytest
from fastapi.testclient import TestClient
from pypdf import PdfReader

from license_stamper.api_main import app
from license_stamper.config import StamperSettings, get_settings

FORM = {
    "customer_name": "Jane Smith",
    "order_number": "CAIL-1234",
    "licensed_quantity": "35",
    "organization": "Limerick Cathedral Choir",
    "license_id": "test-license-123",
    "date": "2024-01-15",
}


@pytest.fixture
def client():
    app.dependency_overrides[get_settings] = lambda: StamperSettings(max_upload_bytes=64 * 1024)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _upload(pdf: bytes, content_type: str = "application/pdf"):
    return {"file": ("input.pdf", pdf, content_type)}


def test_health(client):
    assert client.get("/api/health").json() == {"ok": True}
    assert client.get("/").json()["ok"] is True


def test_stamp_returns_pdf_attachment(client, sample_pdf):
    resp = client.post("/api/stamp", data=FORM, files=_upload(sample_pdf))

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.headers["content-disposition"] == 'attachment; filename="stamped.pdf"'
    assert int(resp.headers["content-length"]) == len(resp.content)
    assert len(resp.content) > len(sample_pdf)
    assert len(PdfReader(io.BytesIO(resp.content)).pages) == 1


def test_footer_position_defaults_to_bottom(client, sample_pdf):
    bottom = client.post(
        "/api/stamp", data={**FORM, "footer_position": "bottom"}, files=_upload(sample_pdf)
    )
    default = client.post("/api/stamp", data=FORM, files=_upload(sample_pdf))
    diagonal = client.post(
        "/api/stamp", data={**FORM, "footer_position": "diagonal"}, files=_upload(sample_pdf)
    )
    assert len(default.content) == len(bottom.content)
    assert len(diagonal.content) != len(bottom.content)


def test_missing_file(client):
    resp = client.post("/api/stamp", data=FORM)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "PDF file is required"


def test_wrong_content_type(client, sample_pdf):
    resp = client.post("/api/stamp", data=FORM, files=_upload(sample_pdf, "image/png"))
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Only PDF files are allowed"


def test_too_large(client):
    resp = client.post("/api/stamp", data=FORM, files=_upload(b"%PDF" + b"0" * 70 * 1024))
    assert resp.status_code == 413


def test_validation_failure(client, sample_pdf):
    resp = client.post(
        "/api/stamp",
        data={**FORM, "customer_name": "", "licensed_quantity": "0"},
        files=_upload(sample_pdf),
    )
    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["error"] == "Validation failed"
    assert {d["loc"][0] for d in detail["details"]} == {"customer_name", "licensed_quantity"}


def test_not_a_pdf(client):
    resp = client.post("/api/stamp", data=FORM, files=_upload(b"definitely not a pdf"))
    assert resp.status_code == 400
    assert resp.json()["detail"].startswith("Invalid PDF document")


def test_unexpected_stamp_failure_is_500(client, sample_pdf):
    resp = client.post(
        "/api/stamp",
        data={**FORM, "license_id": "x" * 5000},
        files=_upload(sample_pdf),
    )
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Internal server error"
