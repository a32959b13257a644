# tests/conftest.py
from __future__ import annotations

import io
import os
from typing import Sequence, Tuple

import pytest
from pypdf import PdfReader, PdfWriter
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from license_stamper.config import StamperSettings
from license_stamper.stamping.options import FooterPosition, StampOptions


def make_pdf(page_sizes: Sequence[Tuple[float, float]] = (A4,)) -> bytes:
    """Small text-only PDF, one page per entry in page_sizes."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=page_sizes[0])
    for i, size in enumerate(page_sizes):
        c.setPageSize(size)
        c.setFont("Helvetica", 24)
        c.drawString(50, size[1] - 92, "Test PDF Document")
        c.setFont("Helvetica", 12)
        c.drawString(50, size[1] - 142, f"Sample page {i + 1} for stamping tests.")
        c.showPage()
    c.save()
    return buf.getvalue()


def make_pdf_with_dead_revision(padding: int = 200_000) -> bytes:
    """
    PDF whose latest revision no longer references a large attachment.
    The first revision carries the attachment, an incremental update drops it.
    """
    first = PdfWriter(clone_from=PdfReader(io.BytesIO(make_pdf())))
    first.add_attachment("padding.bin", os.urandom(padding))
    buf = io.BytesIO()
    first.write(buf)

    edit = PdfWriter(PdfReader(io.BytesIO(buf.getvalue())), incremental=True)
    del edit.root_object["/Names"]
    out = io.BytesIO()
    edit.write(out)
    return out.getvalue()


def make_empty_pdf() -> bytes:
    buf = io.BytesIO()
    PdfWriter().write(buf)
    return buf.getvalue()


@pytest.fixture
def sample_pdf() -> bytes:
    return make_pdf()


@pytest.fixture
def settings() -> StamperSettings:
    return StamperSettings()


@pytest.fixture
def choir_options() -> StampOptions:
    return StampOptions(
        customer_name="Jane Smith",
        order_number="CAIL-1234",
        licensed_quantity=35,
        organization="Limerick Cathedral Choir",
        license_id="test-license-123",
        date_iso="2024-01-15",
        footer_position=FooterPosition.BOTTOM,
    )
