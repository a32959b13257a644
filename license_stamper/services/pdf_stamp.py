# license_stamper/services/pdf_stamp.py
from __future__ import annotations

import io
import logging
from typing import List, Sequence, Tuple

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from license_stamper.config import StamperSettings, get_settings
from license_stamper.errors import InputDocumentError, ResourceEmbedError, StampError
from license_stamper.services.qr_payload import QRImage, encode
from license_stamper.stamping.layouts import Fonts, LayoutFn, layout_for
from license_stamper.stamping.options import StampOptions, normalize_position

logger = logging.getLogger(__name__)

REGULAR_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"

PageSize = Tuple[float, float]


def _load(pdf_bytes: bytes) -> PdfReader:
    try:
        reader = PdfReader(io.BytesIO(pdf_bytes))
        # forces the page tree to be walked; broken trees fail here, not mid-stamp
        len(reader.pages)
    except (PyPdfError, ValueError, KeyError, TypeError) as e:
        raise InputDocumentError(f"Not a readable PDF document: {e}") from e
    return reader


def _embed_resources(qr: QRImage) -> Tuple[Fonts, ImageReader]:
    try:
        for name in (REGULAR_FONT, BOLD_FONT):
            pdfmetrics.getFont(name)
        image = qr.image_reader()
        image.getSize()
    except (KeyError, OSError, ValueError) as e:
        raise ResourceEmbedError(f"Could not prepare stamp resources: {e}") from e
    return Fonts(regular=REGULAR_FONT, bold=BOLD_FONT), image


def _render_overlay(
    sizes: Sequence[PageSize],
    lines: List[str],
    image: ImageReader,
    fonts: Fonts,
    layout: LayoutFn,
    settings: StamperSettings,
) -> bytes:
    """
    One overlay document, one page per input page (same size).
    Fonts and the QR image are written once and referenced from every page.
    """
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=sizes[0])
    for w, h in sizes:
        c.setPageSize((w, h))
        layout(c, lines, image, fonts, w, h, settings)
        c.showPage()
    c.save()
    return buf.getvalue()


def stamp_pdf(
    pdf_bytes: bytes,
    opts: StampOptions,
    settings: StamperSettings | None = None,
) -> bytes:
    """
    Stamp every page of pdf_bytes with the license footer and QR code.

    Either returns the complete stamped document or raises a StampError;
    no partially stamped output is ever produced.
    """
    settings = settings or get_settings()
    position = normalize_position(opts.footer_position)
    layout = layout_for(position)

    reader = _load(pdf_bytes)

    # QR first: a failed encode must abort before anything is drawn
    qr = encode(opts.license_id, opts.order_number, opts.licensed_quantity)
    fonts, image = _embed_resources(qr)
    lines = opts.footer_lines()

    try:
        # incremental update: the original bytes stay an untouched prefix
        writer = PdfWriter(reader, incremental=True)
        sizes = [
            (float(p.mediabox.width), float(p.mediabox.height)) for p in writer.pages
        ]

        if sizes:
            overlay = PdfReader(
                io.BytesIO(_render_overlay(sizes, lines, image, fonts, layout, settings))
            )
            for page, overlay_page in zip(writer.pages, overlay.pages):
                box = page.mediabox
                page.merge_translated_page(
                    overlay_page, float(box.left), float(box.bottom)
                )

        out = io.BytesIO()
        writer.write(out)
    except (PyPdfError, ValueError, KeyError, TypeError) as e:
        raise StampError(f"Stamping failed: {e}") from e

    result = out.getvalue()
    logger.info(
        "stamped %d page(s) layout=%s license=%s in=%d out=%d bytes",
        len(sizes),
        position.value,
        opts.license_id,
        len(pdf_bytes),
        len(result),
    )
    return result
