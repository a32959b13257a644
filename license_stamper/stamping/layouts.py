# license_stamper/stamping/layouts.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

from reportlab.lib.colors import Color
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from license_stamper.config import StamperSettings
from license_stamper.stamping.options import FooterPosition


# =========================
# Layout constants (PDF units, 1/72 in)
# =========================

MARGIN = 20
QR_SIZE = 60
QR_GAP = 8  # space between separator end and QR code

BOTTOM_FS = 9
BOTTOM_LINE_H = BOTTOM_FS * 1.2
SEPARATOR_W = 0.5
SEPARATOR_GAP = 3  # above the top line's glyphs

DIAGONAL_FS = 14
DIAGONAL_LINE_H = DIAGONAL_FS * 1.2
DIAGONAL_OPACITY_FACTOR = 0.7

TEXT_GRAY = Color(0.3, 0.3, 0.3)
RULE_GRAY = Color(0.7, 0.7, 0.7)

Point = Tuple[float, float]


@dataclass(frozen=True)
class Fonts:
    regular: str
    bold: str

    def for_line(self, index: int) -> str:
        # "Licensed to" line is emphasised
        return self.bold if index == 0 else self.regular


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True)
class BottomGeometry:
    separator_start: Point
    separator_end: Point
    baselines: List[Point]  # one per footer line, top line first
    qr: Rect


@dataclass(frozen=True)
class DiagonalGeometry:
    center: Point
    angle: float
    line_offsets: List[float]  # y offsets in the rotated frame, top line first
    qr: Rect


# =========================
# Geometry (pure)
# =========================

def qr_rect(page_w: float) -> Rect:
    return Rect(page_w - MARGIN - QR_SIZE, MARGIN, QR_SIZE, QR_SIZE)


def bottom_geometry(page_w: float, page_h: float, n_lines: int) -> BottomGeometry:
    qr = qr_rect(page_w)

    baselines = [
        (float(MARGIN), MARGIN + (n_lines - 1 - i) * BOTTOM_LINE_H)
        for i in range(n_lines)
    ]

    top_baseline = MARGIN + max(n_lines - 1, 0) * BOTTOM_LINE_H
    sep_y = top_baseline + BOTTOM_FS + SEPARATOR_GAP
    sep_end_x = max(float(MARGIN), qr.x - QR_GAP)

    return BottomGeometry(
        separator_start=(float(MARGIN), sep_y),
        separator_end=(sep_end_x, sep_y),
        baselines=baselines,
        qr=qr,
    )


def diagonal_geometry(
    page_w: float, page_h: float, n_lines: int, angle: float
) -> DiagonalGeometry:
    mid = (n_lines - 1) / 2
    return DiagonalGeometry(
        center=(page_w / 2, page_h / 2),
        angle=angle,
        line_offsets=[(mid - i) * DIAGONAL_LINE_H for i in range(n_lines)],
        qr=qr_rect(page_w),
    )


# =========================
# Drawing
# =========================

def _draw_qr(c: Canvas, qr: ImageReader, rect: Rect) -> None:
    # QR is always drawn unrotated at full opacity so scanners can read it.
    c.saveState()
    c.setFillAlpha(1)
    c.setStrokeAlpha(1)
    c.drawImage(qr, rect.x, rect.y, width=rect.w, height=rect.h)
    c.restoreState()


def draw_bottom(
    c: Canvas,
    lines: Sequence[str],
    qr: ImageReader,
    fonts: Fonts,
    page_w: float,
    page_h: float,
    settings: StamperSettings,
) -> None:
    geo = bottom_geometry(page_w, page_h, len(lines))

    c.saveState()
    c.setStrokeColor(RULE_GRAY)
    c.setStrokeAlpha(settings.footer_opacity)
    c.setLineWidth(SEPARATOR_W)
    c.line(*geo.separator_start, *geo.separator_end)

    c.setFillColor(TEXT_GRAY)
    c.setFillAlpha(settings.footer_opacity)
    for i, (line, (x, y)) in enumerate(zip(lines, geo.baselines)):
        c.setFont(fonts.for_line(i), BOTTOM_FS)
        c.drawString(x, y, line)
    c.restoreState()

    _draw_qr(c, qr, geo.qr)


def draw_diagonal(
    c: Canvas,
    lines: Sequence[str],
    qr: ImageReader,
    fonts: Fonts,
    page_w: float,
    page_h: float,
    settings: StamperSettings,
) -> None:
    geo = diagonal_geometry(page_w, page_h, len(lines), settings.diagonal_angle)

    # No wrapping: long footers can run past the edges of narrow pages.
    c.saveState()
    c.translate(*geo.center)
    c.rotate(geo.angle)
    c.setFillColor(TEXT_GRAY)
    c.setFillAlpha(settings.footer_opacity * DIAGONAL_OPACITY_FACTOR)
    for i, (line, dy) in enumerate(zip(lines, geo.line_offsets)):
        c.setFont(fonts.for_line(i), DIAGONAL_FS)
        c.drawCentredString(0, dy, line)
    c.restoreState()

    _draw_qr(c, qr, geo.qr)


LayoutFn = Callable[
    [Canvas, Sequence[str], ImageReader, Fonts, float, float, StamperSettings], None
]

LAYOUTS: Dict[FooterPosition, LayoutFn] = {
    FooterPosition.BOTTOM: draw_bottom,
    FooterPosition.DIAGONAL: draw_diagonal,
}


def layout_for(position: FooterPosition) -> LayoutFn:
    return LAYOUTS[position]
