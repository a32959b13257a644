# license_stamper/api_main.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import ValidationError

from license_stamper.config import StamperSettings, get_settings
from license_stamper.errors import InputDocumentError, StampError
from license_stamper.services.keys import attachment_disposition
from license_stamper.services.pdf_stamp import stamp_pdf
from license_stamper.services.stamp_request import StampRequest

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"

app = FastAPI(title="License Stamper API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {"ok": True, "try": ["/docs", "/api/health", "/api/stamp"]}


@app.get("/api/health")
def health():
    return {"ok": True}


def _read_upload(file: Optional[UploadFile], limit: int) -> bytes:
    if file is None:
        raise HTTPException(status_code=400, detail="PDF file is required")
    if file.content_type != PDF_MIME:
        raise HTTPException(status_code=400, detail="Only PDF files are allowed")

    data = file.file.read(limit + 1)
    if len(data) > limit:
        raise HTTPException(
            status_code=413, detail=f"PDF file exceeds {limit} bytes"
        )
    return data


# ------------------------------------------------------------
# Stamp: multipart upload -> stamped PDF attachment
# ------------------------------------------------------------
@app.post("/api/stamp")
def stamp_document(
    file: Optional[UploadFile] = File(default=None),
    customer_name: Optional[str] = Form(default=None),
    order_number: Optional[str] = Form(default=None),
    licensed_quantity: Optional[str] = Form(default=None),
    organization: Optional[str] = Form(default=None),
    license_id: Optional[str] = Form(default=None),
    date: Optional[str] = Form(default=None),
    footer_position: Optional[str] = Form(default=None),
    settings: StamperSettings = Depends(get_settings),
):
    pdf_bytes = _read_upload(file, settings.max_upload_bytes)

    try:
        req = StampRequest.model_validate(
            {
                "customer_name": customer_name,
                "order_number": order_number,
                "licensed_quantity": licensed_quantity,
                "organization": organization,
                "license_id": license_id,
                "date": date,
                "footer_position": footer_position,
            }
        )
    except ValidationError as e:
        logger.info("stamp request rejected: %d validation error(s)", e.error_count())
        raise HTTPException(
            status_code=400,
            detail={
                "error": "Validation failed",
                "details": e.errors(include_url=False, include_context=False),
            },
        )

    opts = req.to_options()

    try:
        stamped = stamp_pdf(pdf_bytes, opts, settings)
    except InputDocumentError as e:
        raise HTTPException(status_code=400, detail=f"Invalid PDF document: {e}")
    except StampError:
        logger.exception("stamping failed for order=%s", opts.order_number)
        raise HTTPException(status_code=500, detail="Internal server error")

    return Response(
        content=stamped,
        media_type=PDF_MIME,
        headers={"Content-Disposition": attachment_disposition()},
    )
