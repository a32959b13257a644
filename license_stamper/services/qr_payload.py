# license_stamper/services/qr_payload.py
from __future__ import annotations

import io
from dataclasses import dataclass

import qrcode
from PIL import Image
from qrcode.exceptions import DataOverflowError
from reportlab.lib.utils import ImageReader

from license_stamper.errors import EncodingError

# Scanners parse this exact layout; changing order or delimiters breaks them.
PAYLOAD_TEMPLATE = "license:{license_id};order:{order_number};qty:{quantity}"

QR_PIXELS = 100
QR_MARGIN_MODULES = 1
QR_DARK = "#000000"
QR_LIGHT = "#FFFFFF"


@dataclass(frozen=True)
class QRImage:
    payload: str
    png: bytes
    size_px: int = QR_PIXELS

    def image_reader(self) -> ImageReader:
        return ImageReader(io.BytesIO(self.png))


def build_payload(license_id: str, order_number: str, licensed_quantity: int) -> str:
    return PAYLOAD_TEMPLATE.format(
        license_id=license_id,
        order_number=order_number,
        quantity=licensed_quantity,
    )


def render_png(payload: str) -> bytes:
    """
    Render payload as a QR_PIXELS square PNG: RGB, two colours, no alpha.
    Nearest-neighbour scaling keeps module edges hard.
    """
    try:
        qr = qrcode.QRCode(
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=1,
            border=QR_MARGIN_MODULES,
        )
        qr.add_data(payload)
        qr.make(fit=True)
        matrix = qr.make_image(fill_color=QR_DARK, back_color=QR_LIGHT)
    except (DataOverflowError, ValueError, TypeError) as e:
        raise EncodingError(f"Could not encode QR payload: {e}") from e

    raw = io.BytesIO()
    matrix.save(raw)
    raw.seek(0)

    img = Image.open(raw).convert("RGB")
    img = img.resize((QR_PIXELS, QR_PIXELS), Image.Resampling.NEAREST)

    out = io.BytesIO()
    img.save(out, format="PNG")
    return out.getvalue()


def encode(license_id: str, order_number: str, licensed_quantity: int) -> QRImage:
    payload = build_payload(license_id, order_number, licensed_quantity)
    return QRImage(payload=payload, png=render_png(payload))
